"""
Main CLI entry point for dendroplot.

Provides the ``tree`` command group:
- render: Draw a Newick tree as an interactive dendrogram
- select: Show the selection closure for a set of node labels
- info: Summarise a tree's shape
"""

from __future__ import annotations

import typer
from rich import print as rprint
from rich.console import Console

from dendroplot import __version__

app = typer.Typer(
    name="dendroplot",
    help="Interactive linear and radial dendrograms for Newick trees",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        rprint(f"dendroplot version {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Dendroplot: interactive dendrograms with consistent node selection.
    """


# Import subcommands
from dendroplot.cli import tree

# Register subcommands
app.add_typer(tree.app, name="tree")


if __name__ == "__main__":
    app()
