"""Assemble the OPF package document and the NCX navigation document."""

import logging
from collections.abc import Sequence

from spoor.config import DEFAULT_LAYOUT, EpubLayout
from spoor.core.escape import escape_attr, escape_text
from spoor.core.manifest import compile_manifest
from spoor.core.metadata import OPF_NAMESPACE, compile_metadata
from spoor.core.navigation import compile_navigation, node_language
from spoor.core.normalizer import normalize_document
from spoor.core.resources import check_unique_filenames, find_cover
from spoor.core.validators import valid_language_code
from spoor.core.xml_reader import parse_xml
from spoor.errors import BuildFailure, FormatError, SchemaError, SpoorError, StructureError
from spoor.models.book import (
    CompiledBook,
    MetadataBlock,
    NavMap,
    ResourceDescriptor,
)
from spoor.models.tree import Element

log = logging.getLogger(__name__)

ROOT_ELEMENT = "spoor"
SUPPORTED_FORMAT = "html"

NCX_NAMESPACE = "http://www.daisy.org/z3986/2005/ncx/"
NCX_DOCTYPE = (
    '<!DOCTYPE ncx PUBLIC "-//NISO//DTD ncx 2005-1//EN"\n'
    '  "http://www.daisy.org/z3986/2005/ncx-2005-1.dtd">\n'
)


def cover_meta(cover: ResourceDescriptor | None) -> str:
    """The ``<meta name="cover">`` line for the cover image, if there is one."""
    if cover is None:
        return ""
    return f'    <meta name="cover" content="{escape_attr(cover.filename)}"/>\n'


def assemble_opf(
    metadata: MetadataBlock,
    manifest: str,
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<package xmlns="{OPF_NAMESPACE}" version="2.0" '
        f'unique-identifier="{escape_attr(layout.unique_id)}">\n'
        f"{metadata.xml}"
        f"{manifest}"
        '  <spine toc="ncx">\n'
        '    <itemref idref="content" linear="yes"/>\n'
        "  </spine>\n"
        "</package>\n"
    )


def assemble_ncx(
    metadata: MetadataBlock,
    nav_map: NavMap,
    language: str,
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"{NCX_DOCTYPE}"
        f'<ncx xmlns="{NCX_NAMESPACE}" version="2005-1" '
        f'xml:lang="{escape_attr(language)}">\n'
        "  <head>\n"
        f'    <meta name="dtb:uid" content="{escape_attr(metadata.identifier)}"/>\n'
        f'    <meta name="dtb:depth" content="{nav_map.depth}"/>\n'
        f'    <meta name="dtb:generator" content="{escape_attr(layout.generator)}"/>\n'
        '    <meta name="dtb:totalPageCount" content="0"/>\n'
        '    <meta name="dtb:maxPageNumber" content="0"/>\n'
        "  </head>\n"
        "  <docTitle>\n"
        f"    <text>{escape_text(metadata.title)}</text>\n"
        "  </docTitle>\n"
        f"{nav_map.xml}"
        "</ncx>\n"
    )


def split_sections(root: Element) -> tuple[str, Element, Element]:
    """Check the root element and find its ``<metadata>`` and ``<nav>``.

    Returns the root language and both sections.

    Raises:
        StructureError: If the root element is not ``<spoor>``
        SchemaError: If required attributes or sections are missing or a
            section is repeated, or the format is not supported
        FormatError: If the root language code is invalid
    """
    if root.name != ROOT_ELEMENT:
        raise StructureError(
            f"XML file has wrong root element <{root.name}>, expected <{ROOT_ELEMENT}>",
            element=root.name,
        )
    if "xml:lang" not in root.attributes or "format" not in root.attributes:
        raise SchemaError(
            "Root XML element must have xml:lang and format attributes",
            element=ROOT_ELEMENT,
        )

    book_format = root.attributes["format"]
    if book_format.casefold() != SUPPORTED_FORMAT:
        raise SchemaError(
            f"Unsupported format '{book_format}' in XML file",
            element=ROOT_ELEMENT,
            value=book_format,
        )

    language = root.attributes["xml:lang"]
    if not valid_language_code(language):
        raise FormatError(
            f"Language code '{language}' in XML is invalid",
            element=ROOT_ELEMENT,
            value=language,
        )

    sections: dict[str, Element] = {}
    for child in root.elements():
        if child.name not in ("metadata", "nav"):
            continue
        if child.name in sections:
            raise SchemaError(
                f"Multiple <{child.name}> sections in XML", element=child.name
            )
        sections[child.name] = child

    for name in ("metadata", "nav"):
        if name not in sections:
            raise SchemaError(f"Missing <{name}> section in XML", element=name)

    return language, sections["metadata"], sections["nav"]


def compile_book(
    xml_text: str | bytes,
    resources: Sequence[ResourceDescriptor] = (),
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> CompiledBook:
    """Generate the OPF and NCX documents from the XML description.

    Raises:
        SpoorError: On the first problem found; nothing is produced
    """
    check_unique_filenames(resources)
    root = normalize_document(parse_xml(xml_text))
    root_language, metadata_section, nav_section = split_sections(root)

    cover = find_cover(resources)
    metadata = compile_metadata(
        metadata_section.children,
        root_language,
        extra=cover_meta(cover),
        layout=layout,
    )
    manifest = compile_manifest(resources, layout=layout)

    nav_language = node_language(nav_section, root_language)
    nav_map = compile_navigation(nav_section, nav_language, layout=layout)

    log.info(
        f"Compiled '{metadata.title}': {nav_map.count} navigation point(s), "
        f"{len(resources)} resource(s)"
    )
    return CompiledBook(
        opf=assemble_opf(metadata, manifest, layout=layout),
        ncx=assemble_ncx(metadata, nav_map, nav_language, layout=layout),
        metadata=metadata.metadata,
        navigation=nav_map.points,
        nav_depth=nav_map.depth,
        nav_count=nav_map.count,
        resources=list(resources),
        cover=cover,
    )


def try_compile_book(
    xml_text: str | bytes,
    resources: Sequence[ResourceDescriptor] = (),
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> CompiledBook | BuildFailure:
    """Like ``compile_book`` but returns a ``BuildFailure`` instead of raising."""
    try:
        return compile_book(xml_text, resources, layout=layout)
    except SpoorError as e:
        log.debug(f"Compile failed ({e.kind.value}): {e.message}")
        return BuildFailure.from_error(e)
