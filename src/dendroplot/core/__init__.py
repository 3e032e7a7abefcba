"""Core algorithms: Newick parsing, topological layout, selection closure."""

from dendroplot.core.exceptions import (
    ConfigurationError,
    DendroplotError,
    TreeParseError,
    TreeStructureError,
)
from dendroplot.core.layout import compute_depths, compute_layout
from dendroplot.core.newick import load_newick, parse_newick, validate_tree
from dendroplot.core.selection import (
    expand_selection,
    selected_nodes,
    selection_change_for_points,
)

__all__ = [
    "ConfigurationError",
    "DendroplotError",
    "TreeParseError",
    "TreeStructureError",
    "compute_depths",
    "compute_layout",
    "expand_selection",
    "load_newick",
    "parse_newick",
    "selected_nodes",
    "selection_change_for_points",
    "validate_tree",
]
