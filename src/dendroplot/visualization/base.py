"""
Base classes and utilities for plot generation.

Defines color palettes, common styling, and the abstract interface
shared by dendrogram figures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import plotly.graph_objects as go

from dendroplot.models.config import DendrogramConfig


# =============================================================================
# Color Palettes
# =============================================================================

# Sequential palette for categorical data
SEQUENTIAL_PALETTE: list[str] = [
    "#1f77b4",  # Blue
    "#ff7f0e",  # Orange
    "#2ca02c",  # Green
    "#d62728",  # Red
    "#9467bd",  # Purple
    "#8c564b",  # Brown
    "#e377c2",  # Pink
    "#7f7f7f",  # Gray
    "#bcbd22",  # Yellow-green
    "#17becf",  # Cyan
]

# Axis styling that hides everything but the plotted traces
HIDDEN_AXIS: dict[str, bool] = {
    "showgrid": False,
    "zeroline": False,
    "showline": False,
    "showticklabels": False,
}

# Output suffixes understood by write_figure
IMAGE_FORMATS = (".png", ".jpg", ".jpeg", ".svg", ".pdf")
SUPPORTED_FORMATS = (".html", ".json", *IMAGE_FORMATS)


# =============================================================================
# Base Plot Class
# =============================================================================

class BasePlot(ABC):
    """Abstract base class for all plot generators."""

    def __init__(self, config: DendrogramConfig | None = None) -> None:
        """
        Initialize plot generator.

        Args:
            config: Layout and style configuration
        """
        self.config = config or DendrogramConfig()

    @abstractmethod
    def create_figure(self) -> go.Figure:
        """Create and return the Plotly figure."""
        ...

    def to_html_div(self, include_plotlyjs: bool = False) -> str:
        """
        Export plot as HTML div for embedding in a page.

        Args:
            include_plotlyjs: Whether to include Plotly.js library

        Returns:
            HTML string containing the plot div
        """
        fig = self.create_figure()
        return fig.to_html(
            full_html=False,
            include_plotlyjs="cdn" if include_plotlyjs else False,
            div_id=self._get_div_id(),
        )

    def to_html(self, include_plotlyjs: bool = True) -> str:
        """
        Export plot as standalone HTML file content.

        Args:
            include_plotlyjs: Whether to embed Plotly.js library

        Returns:
            Complete HTML document string
        """
        fig = self.create_figure()
        return fig.to_html(
            full_html=True,
            include_plotlyjs=True if include_plotlyjs else "cdn",
        )

    def to_json(self) -> str:
        """Export plot as JSON for data interchange."""
        fig = self.create_figure()
        return fig.to_json()

    def save(self, path: str | Path, **kwargs: Any) -> None:
        """
        Save plot to file.

        Args:
            path: Output file path (.html, .json or an image format)
            **kwargs: Additional arguments passed to write method
        """
        write_figure(self.create_figure(), path, **kwargs)

    def _get_div_id(self) -> str:
        """Generate unique div ID for the plot."""
        return f"plot-{self.__class__.__name__.lower()}"

    def _apply_config(self, fig: go.Figure) -> go.Figure:
        """Apply common configuration to figure."""
        style = self.config.style
        fig.update_layout(
            width=style.width,
            height=style.height,
            showlegend=False,
            hovermode="closest",
            xaxis=HIDDEN_AXIS,
            yaxis=HIDDEN_AXIS,
        )
        return fig


# =============================================================================
# Utility Functions
# =============================================================================

def category_colors(
    categories: Mapping[str, str],
    palette: list[str] | None = None,
) -> dict[str, str]:
    """
    Map each leaf name to a palette color by its category.

    Categories are assigned palette entries in order of first appearance;
    the palette wraps when there are more categories than colors.

    Args:
        categories: Leaf name to category.
        palette: Colors to draw from (default: SEQUENTIAL_PALETTE).

    Returns:
        Leaf name to hex color.
    """
    palette = palette or SEQUENTIAL_PALETTE
    assigned: dict[str, str] = {}
    for category in categories.values():
        if category not in assigned:
            assigned[category] = palette[len(assigned) % len(palette)]
    return {name: assigned[category] for name, category in categories.items()}


def resolve_leaf_color(
    name: str,
    leaf_colors: Mapping[str, str] | None,
    color_of: Callable[[str], str] | None,
    default: str,
) -> str:
    """Pick a tip color from an explicit mapping, a callback, or the default."""
    if leaf_colors is not None and name in leaf_colors:
        return leaf_colors[name]
    if color_of is not None:
        return color_of(name)
    return default


def write_figure(fig: go.Figure, path: str | Path, **kwargs: Any) -> None:
    """
    Write a figure to disk, choosing the writer from the file suffix.

    Args:
        fig: Figure to write
        path: Output file path (.html, .json or an image format)
        **kwargs: Additional arguments passed to write method

    Raises:
        ValueError: If the suffix is not in SUPPORTED_FORMATS.
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".html":
        fig.write_html(str(path), include_plotlyjs=True, **kwargs)
    elif suffix == ".json":
        fig.write_json(str(path), **kwargs)
    elif suffix in IMAGE_FORMATS:
        fig.write_image(str(path), **kwargs)
    else:
        msg = f"Unsupported file format: {path}"
        raise ValueError(msg)
