"""Read the XML description file into a generic parse tree using lxml."""

import logging

from lxml import etree

from spoor.errors import StructureError
from spoor.models.tree import Element, ParsedNode, Text

log = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def _qualified_name(name: str, nsmap: dict[str | None, str]) -> str:
    """Turn an lxml ``{uri}local`` name back into ``prefix:local`` form."""
    if not name.startswith("{"):
        return name

    qname = etree.QName(name)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"

    for prefix, uri in nsmap.items():
        if uri == qname.namespace and prefix:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _convert(element: etree._Element) -> Element:
    children: list[ParsedNode] = []
    if element.text:
        children.append(Text(content=element.text))

    for child in element:
        if child.tag is etree.Entity:
            raise StructureError(
                f"Unresolved entity reference {child.text} in <{element.tag}>",
                value=child.text,
            )
        children.append(_convert(child))
        if child.tail:
            children.append(Text(content=child.tail))

    return Element(
        name=_qualified_name(element.tag, element.nsmap),
        attributes={
            _qualified_name(key, element.nsmap): value
            for key, value in element.attrib.items()
        },
        children=children,
    )


def parse_xml(source: str | bytes) -> list[ParsedNode]:
    """Parse XML text into a list holding the document's root element.

    ``str`` input is encoded as UTF-8 first so a document carrying its own
    XML declaration can be passed either way.

    Raises:
        StructureError: If the text is not well-formed XML
    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    try:
        root = etree.fromstring(data, _make_parser())
    except etree.XMLSyntaxError as e:
        raise StructureError(f"Failed to parse XML: {e}") from e

    tree = _convert(root)
    log.debug(f"Parsed XML document with root <{tree.name}>")
    return [tree]
