"""Info command implementation."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from spoor.core.epub_reader import EpubInspector
from spoor.models.book import TOCEntry


def _flatten(entries: list[TOCEntry]) -> list[TOCEntry]:
    flat = []
    for entry in entries:
        flat.append(entry)
        flat.extend(_flatten(entry.children))
    return flat


def execute_info(epub_path: Path, console: Console) -> None:
    """Display metadata and table of contents of an EPUB file."""
    summary = EpubInspector(epub_path).inspect()

    info_lines = [
        f"[bold]{summary.title}[/]",
        "",
        f"[dim]Author(s):[/] {', '.join(summary.creators) or 'Unknown'}",
        f"[dim]Identifier:[/] {summary.identifier or 'Unknown'}",
        f"[dim]Language:[/] {summary.language or 'Unknown'}",
        f"[dim]Publisher:[/] {summary.publisher or 'Unknown'}",
        f"[dim]Items:[/] {len(summary.items)}",
    ]

    console.print()
    console.print(
        Panel(
            "\n".join(info_lines),
            title="Book Information",
            border_style="green",
        )
    )

    console.print()
    table = Table(title="Table of Contents", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Target", style="green")

    for index, entry in enumerate(_flatten(summary.toc)):
        indent = "  " * entry.level
        table.add_row(str(index + 1), f"{indent}{entry.title}", entry.href)

    console.print(table)
    console.print()
