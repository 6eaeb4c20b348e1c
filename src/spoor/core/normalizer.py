"""Shape checks and case-folding for the parsed XML tree."""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from spoor.errors import StructureError
from spoor.models.tree import Element, ParsedNode, Text

_NODES = TypeAdapter(list[ParsedNode])


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{first['msg']} at {location}" if location else first["msg"]


def _fold_attributes(element_name: str, attributes: Mapping[str, str]) -> dict[str, str]:
    folded: dict[str, str] = {}
    originals: dict[str, str] = {}
    for key, value in attributes.items():
        folded_key = key.casefold()
        if folded_key in folded:
            raise StructureError(
                f"Attributes '{originals[folded_key]}' and '{key}' on "
                f"<{element_name}> differ only in case",
                element=element_name,
                value=key,
            )
        folded[folded_key] = value
        originals[folded_key] = key
    return folded


def _fold(node: ParsedNode) -> ParsedNode:
    if isinstance(node, Text):
        return node
    name = node.name.casefold()
    return Element(
        name=name,
        attributes=_fold_attributes(name, node.attributes),
        children=[_fold(child) for child in node.children],
    )


def normalize_document(nodes: Sequence[ParsedNode | Mapping[str, Any]]) -> Element:
    """Check a parsed document and return a case-folded copy of its root.

    ``nodes`` is the document's top level: either ``ParsedNode`` objects or
    plain mappings of the same shape. Every element name and attribute key
    is case-folded. Two attributes of one element whose keys fold to the
    same value are rejected rather than letting one silently win.

    Raises:
        StructureError: If a node is malformed, the top level is not exactly
            one element, or attribute keys collide after folding
    """
    if len(nodes) != 1:
        raise StructureError(
            f"Document must have exactly one root node, found {len(nodes)}"
        )

    try:
        checked = _NODES.validate_python(
            [
                node.model_dump() if isinstance(node, (Element, Text)) else node
                for node in nodes
            ]
        )
    except ValidationError as e:
        raise StructureError(f"Invalid XML structure: {_describe(e)}") from e

    root = checked[0]
    if not isinstance(root, Element):
        raise StructureError("Document root must be an element, not text")
    return _fold(root)
