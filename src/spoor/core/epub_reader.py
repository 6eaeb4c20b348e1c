"""Read an existing EPUB back using ebooklib."""

import warnings
from pathlib import Path

from ebooklib import epub

from spoor.models.book import EpubSummary, TOCEntry


class EpubInspector:
    """Read metadata and table of contents from an EPUB file."""

    def __init__(self, epub_path: Path):
        self.path = epub_path
        with warnings.catch_warnings():
            # ebooklib warns about future defaults on every read
            warnings.simplefilter("ignore")
            self.book = epub.read_epub(str(epub_path), options={"ignore_ncx": False})

    def inspect(self) -> EpubSummary:
        """Collect everything ``spoor info`` displays."""
        title = self._first("title")
        publisher = self._first("publisher")
        return EpubSummary(
            title=title or "Unknown Title",
            identifier=self._first("identifier"),
            language=self._first("language"),
            creators=[value for value, _ in self.book.get_metadata("DC", "creator")],
            publisher=publisher,
            toc=self._parse_toc_recursive(self.book.toc),
            items=[(item.get_name(), item.media_type) for item in self.book.get_items()],
            spine_order=[item[0] for item in self.book.spine],
        )

    def _first(self, name: str) -> str | None:
        values = self.book.get_metadata("DC", name)
        return values[0][0] if values else None

    def _parse_toc_recursive(
        self, toc_items: list, level: int = 0
    ) -> list[TOCEntry]:
        """Recursively parse TOC structure."""
        entries = []

        for item in toc_items:
            if isinstance(item, tuple):
                # Section with children: (Section, [children])
                section, children = item
                entry = TOCEntry(
                    id=getattr(section, "uid", None) or section.href or "",
                    title=section.title or "Untitled",
                    href=section.href or "",
                    level=level,
                    children=self._parse_toc_recursive(children, level + 1),
                )
            else:
                # Simple link
                entry = TOCEntry(
                    id=item.uid or item.href or "",
                    title=item.title or "Untitled",
                    href=item.href or "",
                    level=level,
                )
            entries.append(entry)

        return entries
