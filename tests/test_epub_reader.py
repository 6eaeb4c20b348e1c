"""Tests for reading a built EPUB back."""

from spoor.core.archive import write_epub
from spoor.core.assembler import compile_book
from spoor.core.epub_reader import EpubInspector


def test_inspect_built_epub(tmp_path, sample_xml, content_file):
    book = compile_book(sample_xml)
    epub_path = write_epub(tmp_path / "book.epub", book, content_file)

    summary = EpubInspector(epub_path).inspect()

    assert summary.title == "A Sample Book"
    assert summary.identifier == "978-0-00-000000-0"
    assert summary.language == "en"
    assert summary.creators == ["Jane Doe"]
    assert summary.spine_order == ["content"]
    assert [entry.title for entry in summary.toc] == ["Start", "Chapter 1"]
    chapter = summary.toc[1]
    assert chapter.href == "content.html#ch1"
    assert [child.title for child in chapter.children] == ["Section 1.1"]
    assert chapter.children[0].level == 1
