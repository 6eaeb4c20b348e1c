"""Tests for reading XML into the parse tree."""

import pytest

from spoor.core.xml_reader import parse_xml
from spoor.errors import ErrorKind, StructureError
from spoor.models.tree import Element, Text


def test_parse_simple_document():
    nodes = parse_xml('<Spoor Format="html" xml:lang="en"><a x="1">hi</a>tail</Spoor>')

    assert len(nodes) == 1
    root = nodes[0]
    assert isinstance(root, Element)
    assert root.name == "Spoor"
    assert root.attributes == {"Format": "html", "xml:lang": "en"}

    child, tail = root.children
    assert isinstance(child, Element)
    assert child.name == "a"
    assert child.attributes == {"x": "1"}
    assert child.children == [Text(content="hi")]
    assert tail == Text(content="tail")


def test_accepts_str_with_encoding_declaration():
    nodes = parse_xml('<?xml version="1.0" encoding="UTF-8"?>\n<r>café</r>')
    assert nodes[0].text() == "café"


def test_accepts_bytes():
    nodes = parse_xml("<r>café</r>".encode("utf-8"))
    assert nodes[0].text() == "café"


def test_comments_and_processing_instructions_are_dropped():
    nodes = parse_xml("<r><!-- note --><?pi data?><a/></r>")
    assert nodes[0].children == [Element(name="a")]


def test_prefixed_names_are_kept():
    nodes = parse_xml('<r xmlns:x="urn:x"><x:a x:b="1"/></r>')
    child = nodes[0].elements()[0]
    assert child.name == "x:a"
    assert child.attributes == {"x:b": "1"}


def test_character_references_are_decoded():
    nodes = parse_xml('<r a="&quot;&amp;">&lt;&#65;</r>')
    assert nodes[0].attributes == {"a": '"&'}
    assert nodes[0].text() == "<A"


def test_malformed_xml_raises():
    with pytest.raises(StructureError) as exc_info:
        parse_xml("<r><a></r>")
    assert exc_info.value.kind is ErrorKind.STRUCTURE
    assert "Failed to parse XML" in str(exc_info.value)


def test_empty_input_raises():
    with pytest.raises(StructureError):
        parse_xml("")


def test_entity_reference_is_rejected():
    xml = '<!DOCTYPE r [<!ENTITY e "x">]><r>&e;</r>'
    with pytest.raises(StructureError, match="entity"):
        parse_xml(xml)
