"""
Tree commands for drawing and inspecting Newick trees.

Provides subcommands:
- render: Draw a tree as a linear or radial dendrogram
- select: Show the selection closure for a set of labels
- info: Summarise the shape of a tree
"""
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from dendroplot.cli.utils import QuietConsole, configure_logging, parse_id_list
from dendroplot.core.exceptions import DendroplotError
from dendroplot.models.tree import Internal, LayoutMode, Node
from dendroplot.visualization.base import SUPPORTED_FORMATS

app = typer.Typer(
    name="tree",
    help="Draw and inspect Newick trees",
    no_args_is_help=True,
)

console = Console()


def _load(tree_file: Path) -> Node:
    from dendroplot.core.newick import load_newick

    try:
        return load_newick(tree_file)
    except DendroplotError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        if e.suggestion:
            console.print(f"[dim]{e.suggestion}[/dim]")
        raise typer.Exit(code=1) from None


@app.command(name="render")
def render(
    tree_file: Path = typer.Argument(
        ...,
        help="Newick tree file",
        exists=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Output file (.html, .json, or an image format)",
    ),
    radial: bool = typer.Option(
        False,
        "--radial",
        "-r",
        help="Use the radial layout instead of the linear one",
    ),
    select: str | None = typer.Option(
        None,
        "--select",
        "-s",
        help="Comma-separated labels to highlight (closure is applied)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with 'layout' and 'style' sections",
        exists=True,
        dir_okay=False,
    ),
    title: str | None = typer.Option(
        None,
        "--title",
        help="Figure title",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress progress output",
    ),
) -> None:
    """
    Render a Newick tree as an interactive dendrogram.

    Examples:

        # Linear dendrogram as standalone HTML
        dendroplot tree render tree.nwk --output tree.html

        # Radial layout with two tips highlighted
        dendroplot tree render tree.nwk -o tree.html --radial --select A,B
    """
    from pydantic import ValidationError

    from dendroplot.core.selection import expand_selection
    from dendroplot.models.config import DendrogramConfig
    from dendroplot.visualization.dendrogram import DendrogramPlot

    configure_logging(verbose)
    out = QuietConsole(console, quiet=quiet)

    if output.suffix.lower() not in SUPPORTED_FORMATS:
        console.print(
            f"[red]Error: Unsupported output format '{output.suffix}'. "
            f"Use one of: {', '.join(SUPPORTED_FORMATS)}[/red]"
        )
        raise typer.Exit(code=1) from None

    dendro_config = None
    if config is not None:
        try:
            dendro_config = DendrogramConfig.from_yaml(config)
        except (DendroplotError, ValidationError) as e:
            console.print(f"[red]Error loading config: {e}[/red]")
            raise typer.Exit(code=1) from None

    mode = LayoutMode.RADIAL if radial else LayoutMode.LINEAR

    out.print("\n[bold blue]Dendroplot Renderer[/bold blue]\n")
    out.print(f"[bold]Tree:[/bold] {tree_file}")
    out.print(f"[bold]Layout:[/bold] {mode.value}")

    tree = _load(tree_file)
    plot = DendrogramPlot(tree, mode=mode, config=dendro_config, title=title)

    selection = None
    ids = parse_id_list(select)
    if ids:
        selection = expand_selection(tree, ids)
        out.print(
            f"[bold]Selected:[/bold] {len(selection.selected_leaves)} leaves "
            f"({len(selection.newly_inferred)} nodes inferred)"
        )

    output.parent.mkdir(parents=True, exist_ok=True)
    plot.save(output, selection=selection)

    out.print("\n[bold green]Dendrogram written successfully![/bold green]")
    out.print(f"[bold]Output:[/bold] {output}")
    out.print()


@app.command(name="select")
def select_cmd(
    tree_file: Path = typer.Argument(
        ...,
        help="Newick tree file",
        exists=True,
        dir_okay=False,
    ),
    ids: str = typer.Option(
        ...,
        "--ids",
        "-i",
        help="Comma-separated node labels or ids to select",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """
    Show which nodes and leaves a selection expands to.

    Example:

        dendroplot tree select tree.nwk --ids A,B
    """
    from dendroplot.core.selection import expand_selection, is_requested, selected_nodes

    configure_logging(verbose)
    tree = _load(tree_file)
    requested = frozenset(parse_id_list(ids))
    result = expand_selection(tree, requested)

    if result.is_empty:
        console.print("[yellow]No nodes matched the requested labels.[/yellow]")
        return

    table = Table(title="Selection closure")
    table.add_column("Label", style="cyan")
    table.add_column("Kind")
    table.add_column("Source")

    for node in selected_nodes(tree, requested):
        kind = "internal" if isinstance(node, Internal) else "leaf"
        source = "explicit" if is_requested(node, requested) else "inferred"
        table.add_row(node.label, kind, source)

    console.print(table)
    console.print(f"[bold]Selected leaves:[/bold] {', '.join(result.selected_leaves)}")


@app.command(name="info")
def info(
    tree_file: Path = typer.Argument(
        ...,
        help="Newick tree file",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """
    Summarise the shape of a Newick tree.
    """
    from dendroplot.core.layout import compute_depths
    from dendroplot.models.tree import iter_preorder, leaves

    tree = _load(tree_file)
    nodes = list(iter_preorder(tree))
    internal = [node for node in nodes if isinstance(node, Internal)]
    named_internal = [node.name for node in internal if node.name]
    root_depth = compute_depths(tree)[tree]

    table = Table(title=str(tree_file.name), show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Nodes", str(len(nodes)))
    table.add_row("Leaves", str(len(leaves(tree))))
    table.add_row("Internal nodes", str(len(internal)))
    table.add_row("Root depth", str(root_depth))
    table.add_row("Named internal nodes", str(len(named_internal)))
    table.add_row("Internal labels", ", ".join(named_internal) or "-")
    console.print(table)
