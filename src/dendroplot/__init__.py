"""
Dendroplot: interactive linear and radial dendrograms for Newick trees.

Parses Newick descriptions, lays trees out from topology alone (linear or
radial), and keeps a user's node and leaf selection consistent under
tri-state propagation.
"""

__version__ = "0.1.0"
__author__ = "Dendroplot Team"

from dendroplot.core.layout import compute_layout
from dendroplot.core.newick import parse_newick
from dendroplot.core.selection import expand_selection
from dendroplot.models.tree import LayoutMode, SelectionResult, TreeLayout

__all__ = [
    "LayoutMode",
    "SelectionResult",
    "TreeLayout",
    "compute_layout",
    "expand_selection",
    "parse_newick",
    "__version__",
]
