"""Compile the ``<nav>`` section into the NCX navigation map."""

import logging
from dataclasses import dataclass, field

from spoor.config import DEFAULT_LAYOUT, EpubLayout
from spoor.core.escape import escape_attr, escape_text
from spoor.core.metadata import require_attr
from spoor.core.validators import valid_language_code, valid_target
from spoor.errors import FormatError, SchemaError
from spoor.models.book import NavMap, NavNode
from spoor.models.tree import Element

log = logging.getLogger(__name__)


@dataclass
class _Walk:
    """Counters shared across the whole traversal."""

    layout: EpubLayout
    next_order: int = 1
    max_depth: int = 0
    lines: list[str] = field(default_factory=list)


def resolve_target(target: str, layout: EpubLayout = DEFAULT_LAYOUT) -> str:
    """Point a ``#`` or ``#anchor`` target into the content document."""
    if target == "#":
        return layout.content_file
    return f"{layout.content_file}{target}"


def node_language(element: Element, inherited: str) -> str:
    """The element's own ``xml:lang`` if present, else the inherited one.

    Raises:
        FormatError: If the element's own language code is invalid
    """
    language = element.attributes.get("xml:lang")
    if language is None:
        return inherited
    if not valid_language_code(language):
        raise FormatError(
            f"Language code '{language}' on <{element.name}> is invalid",
            element=element.name,
            value=language,
        )
    return language


def _compile_children(parent: Element, language: str, depth: int, walk: _Walk) -> list[NavNode]:
    nodes = []
    for element in parent.elements("node"):
        name = require_attr(element, "name")
        target = require_attr(element, "target")
        if not valid_target(target):
            raise FormatError(
                f"Invalid navigation target '{target}' for node '{name}'",
                element="node",
                value=target,
            )
        node_lang = node_language(element, language)

        play_order = walk.next_order
        walk.next_order += 1
        walk.max_depth = max(walk.max_depth, depth)

        indent = "  " * (depth + 1)
        src = resolve_target(target, walk.layout)
        walk.lines.append(
            f'{indent}<navPoint id="navp{play_order}" playOrder="{play_order}">\n'
            f'{indent}  <navLabel xml:lang="{escape_attr(node_lang)}">'
            f"<text>{escape_text(name)}</text></navLabel>\n"
            f'{indent}  <content src="{escape_attr(src)}"/>\n'
        )
        children = _compile_children(element, node_lang, depth + 1, walk)
        walk.lines.append(f"{indent}</navPoint>\n")

        nodes.append(
            NavNode(
                name=name,
                target=target,
                src=src,
                language=node_lang,
                play_order=play_order,
                children=children,
            )
        )
    return nodes


def compile_navigation(
    nav: Element,
    language: str,
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> NavMap:
    """Compile ``<nav>`` into an NCX ``<navMap>``.

    Nodes are visited depth first in document order; each gets the next
    play order starting at 1. ``language`` is the default for nodes without
    an ``xml:lang`` of their own or of an ancestor.

    Raises:
        SchemaError: If a node lacks ``name`` or ``target``, or there are no
            nodes at all
        FormatError: If a target or language code is invalid
    """
    walk = _Walk(layout=layout)
    walk.lines.append("  <navMap>\n")
    points = _compile_children(nav, language, 1, walk)
    walk.lines.append("  </navMap>\n")

    count = walk.next_order - 1
    if count == 0:
        raise SchemaError(
            "Navigation section must contain at least one <node>", element="nav"
        )
    log.debug(f"Navigation map: {count} point(s), depth {walk.max_depth}")
    return NavMap(
        xml="".join(walk.lines),
        points=points,
        depth=walk.max_depth,
        count=count,
    )
