"""Pytest fixtures and builders for spoor tests."""

from collections.abc import Callable

import pytest

from spoor.core.normalizer import normalize_document
from spoor.core.xml_reader import parse_xml
from spoor.models.tree import Element

SAMPLE_METADATA = """\
    <title text="A Sample Book"/>
    <creator name="Jane Doe" sort="Doe, Jane" role="aut"/>
    <identifier scheme="ISBN" value="978-0-00-000000-0"/>"""

SAMPLE_NAV = """\
    <node name="Start" target="#"/>
    <node name="Chapter 1" target="#ch1">
      <node name="Section 1.1" target="#s1_1"/>
    </node>"""

CONTENT_XHTML = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="en" lang="en">
<head><title>A Sample Book</title></head>
<body>
<h1 id="ch1">Chapter 1</h1>
<h2 id="s1_1">Section 1.1</h2>
<p>Text.</p>
</body>
</html>
"""


def build_xml(
    metadata: str = SAMPLE_METADATA,
    nav: str = SAMPLE_NAV,
    root_attrs: str = 'format="html" xml:lang="en"',
    nav_attrs: str = "",
) -> str:
    """Build an XML description document."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<spoor {root_attrs}>\n"
        f"  <metadata>\n{metadata}\n  </metadata>\n"
        f"  <nav{nav_attrs}>\n{nav}\n  </nav>\n"
        "</spoor>\n"
    )


def parse_root(xml: str) -> Element:
    """Parse and normalize an XML document."""
    return normalize_document(parse_xml(xml))


def section(xml_body: str, name: str = "metadata", attrs: str = "") -> Element:
    """Parse a single ``<metadata>`` or ``<nav>`` section."""
    return parse_root(f"<{name}{attrs}>{xml_body}</{name}>")


@pytest.fixture
def sample_xml() -> str:
    return build_xml()


@pytest.fixture
def make_xml() -> Callable[..., str]:
    return build_xml


@pytest.fixture
def content_file(tmp_path):
    path = tmp_path / "source.html"
    path.write_text(CONTENT_XHTML, encoding="utf-8")
    return path
