"""Check command implementation."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.tree import Tree

from spoor.commands.build import book_summary, compile_inputs, print_failure
from spoor.errors import BuildFailure
from spoor.models.book import NavNode


def _add_nav_nodes(tree: Tree, nodes: list[NavNode]) -> None:
    for node in nodes:
        branch = tree.add(
            f"[dim]{node.play_order}.[/] {escape(node.name)} "
            f"[cyan]{node.src}[/] [dim]({node.language})[/]"
        )
        _add_nav_nodes(branch, node.children)


def execute_check(
    metadata_path: Path,
    resource_paths: list[Path],
    show_opf: bool,
    show_ncx: bool,
    console: Console,
) -> bool:
    """Compile without writing an archive. Returns False on failure."""
    result = compile_inputs(metadata_path, resource_paths)
    if isinstance(result, BuildFailure):
        print_failure(result, console)
        return False

    console.print()
    console.print(
        Panel(
            "\n".join(book_summary(result)),
            title="Metadata OK",
            border_style="green",
        )
    )

    nav_tree = Tree("[bold]Navigation[/]")
    _add_nav_nodes(nav_tree, result.navigation)
    console.print(nav_tree)

    if show_opf:
        console.print()
        console.print(Syntax(result.opf, "xml", line_numbers=True))
    if show_ncx:
        console.print()
        console.print(Syntax(result.ncx, "xml", line_numbers=True))
    return True
