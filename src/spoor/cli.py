"""Main CLI application."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from spoor.config import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENVVAR
from spoor.log_config import configure_logging

app = typer.Typer(
    name="spoor",
    help="Compile an XHTML file and an XML description into an EPUB-2 book.",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            envvar=LOG_LEVEL_ENVVAR,
            help="Logging level: CRITICAL, ERROR, WARNING, INFO or DEBUG",
        ),
    ] = DEFAULT_LOG_LEVEL,
    log_file: Annotated[
        Optional[Path],
        typer.Option(
            "--log-file",
            help="Also write log messages to this file",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Compile an XHTML file and an XML description into an EPUB-2 book."""
    try:
        configure_logging(log_level, log_file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command()
def build(
    output: Annotated[
        Path,
        typer.Argument(help="EPUB file to write", dir_okay=False),
    ],
    content: Annotated[
        Path,
        typer.Argument(
            help="XHTML content file",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    metadata: Annotated[
        Path,
        typer.Argument(
            help="XML metadata and navigation file",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    resources: Annotated[
        Optional[list[Path]],
        typer.Argument(
            help="Style sheets and images to embed (css, png, jpg, jpeg, svg)",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output",
        ),
    ] = False,
) -> None:
    """Build an EPUB from a content file, its XML description and resources."""
    from spoor.commands.build import execute_build

    try:
        built = execute_build(
            output_path=output,
            content_path=content,
            metadata_path=metadata,
            resource_paths=resources or [],
            quiet=quiet,
            console=console,
        )
    except OSError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)
    if not built:
        raise typer.Exit(1)


@app.command()
def check(
    metadata: Annotated[
        Path,
        typer.Argument(
            help="XML metadata and navigation file",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    resources: Annotated[
        Optional[list[Path]],
        typer.Argument(help="Resource file names to include in the manifest"),
    ] = None,
    show_opf: Annotated[
        bool,
        typer.Option("--show-opf", help="Print the generated OPF document"),
    ] = False,
    show_ncx: Annotated[
        bool,
        typer.Option("--show-ncx", help="Print the generated NCX document"),
    ] = False,
) -> None:
    """Validate an XML description without writing an EPUB."""
    from spoor.commands.check import execute_check

    if not execute_check(
        metadata_path=metadata,
        resource_paths=resources or [],
        show_opf=show_opf,
        show_ncx=show_ncx,
        console=console,
    ):
        raise typer.Exit(1)


@app.command()
def info(
    epub_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the EPUB file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display book metadata and table of contents."""
    from spoor.commands.info import execute_info

    try:
        execute_info(epub_path, console=console)
    except Exception as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
