"""
Visualization module for dendroplot.

Provides Plotly-based dendrogram figures with selection highlighting.
"""

from dendroplot.visualization.base import (
    SEQUENTIAL_PALETTE,
    SUPPORTED_FORMATS,
    BasePlot,
    category_colors,
    write_figure,
)
from dendroplot.visualization.dendrogram import (
    DendrogramPlot,
    selected_point_indices,
)

__all__ = [
    "SEQUENTIAL_PALETTE",
    "SUPPORTED_FORMATS",
    "BasePlot",
    "DendrogramPlot",
    "category_colors",
    "selected_point_indices",
    "write_figure",
]
