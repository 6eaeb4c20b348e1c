"""Tests for the metadata compiler."""

import pytest

from conftest import section
from spoor.config import EpubLayout
from spoor.core.metadata import compile_metadata, read_metadata
from spoor.errors import ErrorKind, FormatError, SchemaError
from spoor.models.book import DateEvent, Identifier, Person

MINIMAL = '<title text="T"/><identifier scheme="UUID" value="abc"/>'


def _compile(body: str, language: str = "en", **kwargs):
    return compile_metadata(section(body).children, language, **kwargs)


def test_full_metadata_block_in_fixed_order():
    body = """
      <Title text="Fish &amp; Chips"/>
      <contributor name="Ann Ill" role="ILL"/>
      <creator name="Jane Doe" sort="Doe, Jane" role="aut"/>
      <date event="Modification" value="2022-01-02"/>
      <creator name="John Roe"/>
      <description>  A "quoted" &lt;book&gt;  </description>
      <rights>All rights reserved</rights>
      <date event="creation" value="2020"/>
      <publisher name="Example Press"/>
      <identifier scheme="ISBN" value="978-0"/>
      <language>fr</language>
      <unknown foo="bar"/>
    """
    block = _compile(body)

    assert block.xml == (
        '  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" '
        'xmlns:opf="http://www.idpf.org/2007/opf">\n'
        "    <dc:title>Fish &amp; Chips</dc:title>\n"
        '    <dc:creator opf:role="aut" opf:file-as="Doe, Jane">Jane Doe</dc:creator>\n'
        "    <dc:creator>John Roe</dc:creator>\n"
        '    <dc:description>A "quoted" &lt;book&gt;</dc:description>\n'
        "    <dc:publisher>Example Press</dc:publisher>\n"
        '    <dc:contributor opf:role="ill">Ann Ill</dc:contributor>\n'
        '    <dc:date opf:event="creation">2020</dc:date>\n'
        '    <dc:date opf:event="modification">2022-01-02</dc:date>\n'
        '    <dc:identifier id="uid" opf:scheme="ISBN">978-0</dc:identifier>\n'
        "    <dc:language>en</dc:language>\n"
        "    <dc:rights>All rights reserved</dc:rights>\n"
        "  </metadata>\n"
    )
    assert block.title == "Fish & Chips"
    assert block.identifier == "978-0"


def test_minimal_metadata_has_title_identifier_and_language_once():
    block = _compile(MINIMAL, language="de-CH")

    assert block.xml.count("<dc:title>") == 1
    assert block.xml.count("<dc:identifier ") == 1
    assert block.xml.count("<dc:language>") == 1
    assert (
        block.xml.index("<dc:title>")
        < block.xml.index("<dc:identifier ")
        < block.xml.index("<dc:language>de-CH</dc:language>")
    )
    assert "dc:creator" not in block.xml
    assert "dc:date" not in block.xml


def test_read_metadata_builds_record():
    metadata = read_metadata(
        section(
            MINIMAL
            + '<creator name="A" role="Aut"/><contributor name="B" sort="B, X"/>'
            + '<date event="PUBLICATION" value="1999-12"/>'
        ).children,
        "en",
    )

    assert metadata.title == "T"
    assert metadata.identifier == Identifier(scheme="UUID", value="abc")
    assert metadata.language == "en"
    assert metadata.creators == [Person(name="A", role="aut")]
    assert metadata.contributors == [Person(name="B", sort="B, X")]
    assert metadata.date_for(DateEvent.PUBLICATION).value == "1999-12"
    assert metadata.date_for(DateEvent.CREATION) is None
    assert metadata.description is None
    assert metadata.rights is None


def test_values_are_escaped_in_attributes():
    block = _compile(
        '<title text="T"/><identifier scheme="a&quot;b" value="v"/>'
        '<creator name="N" sort="&lt;S&gt;"/>'
    )
    assert 'opf:scheme="a&quot;b"' in block.xml
    assert 'opf:file-as="&lt;S&gt;"' in block.xml


def test_extra_block_goes_before_closing_tag():
    extra = '    <meta name="cover" content="cover.jpg"/>\n'
    block = _compile(MINIMAL + "<rights>R</rights>", extra=extra)
    assert block.xml.endswith(
        "    <dc:rights>R</dc:rights>\n" + extra + "  </metadata>\n"
    )


def test_layout_sets_identifier_id():
    block = _compile(MINIMAL, layout=EpubLayout(unique_id="bookid"))
    assert '<dc:identifier id="bookid" opf:scheme="UUID">abc</dc:identifier>' in block.xml


def test_text_children_are_ignored():
    block = _compile("stray text" + MINIMAL)
    assert "stray" not in block.xml


@pytest.mark.parametrize(
    "body, message",
    [
        ('<identifier scheme="s" value="v"/>', "Missing required <title>"),
        ('<title text="T"/>', "Missing required <identifier>"),
        (MINIMAL + '<title text="U"/>', "Multiple <title>"),
        (MINIMAL + "<title/>", "Multiple <title>"),
        (MINIMAL + "<publisher/><publisher/>", "Multiple <publisher>"),
        (MINIMAL + '<identifier scheme="s" value="w"/>', "Multiple <identifier>"),
        (MINIMAL + "<description>a</description><description>b</description>", "Multiple <description>"),
        (MINIMAL + '<publisher name="a"/><publisher name="b"/>', "Multiple <publisher>"),
        (MINIMAL + "<rights>a</rights><rights>b</rights>", "Multiple <rights>"),
        ('<title/><identifier scheme="s" value="v"/>', "'text'"),
        ('<title text="T"/><identifier value="v"/>', "'scheme'"),
        ('<title text="T"/><identifier scheme="s"/>', "'value'"),
        (MINIMAL + '<creator role="aut"/>', "<creator> element is missing required 'name'"),
        (MINIMAL + "<contributor/>", "<contributor> element is missing required 'name'"),
        (MINIMAL + "<publisher/>", "<publisher> element is missing required 'name'"),
        (MINIMAL + '<date value="2020"/>', "'event'"),
        (MINIMAL + '<date event="creation"/>', "'value'"),
        (MINIMAL + '<date event="birth" value="2020"/>', "Unrecognized date event 'birth'"),
        (MINIMAL + "<description>a <b>bold</b></description>", "plain text only"),
        (MINIMAL + "<rights><p/></rights>", "plain text only"),
    ],
)
def test_schema_violations(body, message):
    with pytest.raises(SchemaError, match=message) as exc_info:
        _compile(body)
    assert exc_info.value.kind is ErrorKind.SCHEMA


def test_duplicate_date_event_fails():
    body = MINIMAL + '<date event="creation" value="2020"/><date event="Creation" value="2021"/>'
    with pytest.raises(SchemaError, match="Multiple <date> elements for the creation event") as exc_info:
        _compile(body)
    assert exc_info.value.value == "creation"


def test_three_distinct_dates_are_accepted():
    body = (
        MINIMAL
        + '<date event="publication" value="2021"/>'
        + '<date event="modification" value="2022"/>'
        + '<date event="creation" value="2020"/>'
    )
    xml = _compile(body).xml
    assert xml.index("creation") < xml.index("publication") < xml.index("modification")


@pytest.mark.parametrize(
    "body, value",
    [
        (MINIMAL + '<creator name="A" role="xyz"/>', "xyz"),
        (MINIMAL + '<contributor name="A" role="au"/>', "au"),
        (MINIMAL + '<date event="creation" value="1582-10-14"/>', "1582-10-14"),
        (MINIMAL + '<date event="creation" value="2023-02-29"/>', "2023-02-29"),
    ],
)
def test_format_violations_name_the_value(body, value):
    with pytest.raises(FormatError) as exc_info:
        _compile(body)
    assert exc_info.value.value == value
    assert value in str(exc_info.value)


def test_invalid_language_fails():
    with pytest.raises(FormatError, match="Language code 'en--US'"):
        _compile(MINIMAL, language="en--US")
