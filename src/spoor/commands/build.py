"""Build command implementation."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from spoor.core.archive import write_epub
from spoor.core.assembler import try_compile_book
from spoor.core.resources import describe_resources
from spoor.errors import BuildFailure, SpoorError
from spoor.models.book import CompiledBook


def print_failure(failure: BuildFailure, console: Console) -> None:
    """Show a compile failure."""
    console.print(f"[red]Error ({failure.kind.value}): {escape(failure.message)}[/]")


def compile_inputs(
    metadata_path: Path,
    resource_paths: list[Path],
) -> CompiledBook | BuildFailure:
    """Read the XML description and compile it against the resource list."""
    try:
        resources = describe_resources(resource_paths)
    except SpoorError as e:
        return BuildFailure.from_error(e)
    return try_compile_book(metadata_path.read_bytes(), resources)


def book_summary(book: CompiledBook) -> list[str]:
    """Lines describing a compiled book for the summary panel."""
    metadata = book.metadata
    creators = escape(", ".join(person.name for person in metadata.creators))
    return [
        f"[bold]{escape(metadata.title)}[/]",
        "",
        f"[dim]Creator(s):[/] {creators or 'None'}",
        f"[dim]Identifier:[/] {escape(metadata.identifier.value)} ({escape(metadata.identifier.scheme)})",
        f"[dim]Language:[/] {metadata.language}",
        f"[dim]Navigation points:[/] {book.nav_count} (depth {book.nav_depth})",
        f"[dim]Resources:[/] {len(book.resources)}",
        f"[dim]Cover:[/] {book.cover.filename if book.cover else 'None'}",
    ]


def execute_build(
    output_path: Path,
    content_path: Path,
    metadata_path: Path,
    resource_paths: list[Path],
    quiet: bool,
    console: Console,
) -> bool:
    """Execute the build command. Returns False if the book was not written."""
    if not quiet:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Compiling metadata...", total=None)
            result = compile_inputs(metadata_path, resource_paths)
    else:
        result = compile_inputs(metadata_path, resource_paths)

    if isinstance(result, BuildFailure):
        print_failure(result, console)
        return False

    write_epub(output_path, result, content_path)

    if not quiet:
        console.print()
        summary_lines = book_summary(result)
        summary_lines.extend(["", f"[dim]Output:[/] {output_path}"])
        console.print(
            Panel(
                "\n".join(summary_lines),
                title="EPUB Built",
                border_style="green",
            )
        )
    return True
