"""
Interactive dendrogram figures using Plotly.

Draws a laid-out tree as three traces: the radial-direction edge
segments, the connecting bars or arcs, and one marker per node. Marker
text carries the node label so click and box-select events can be fed
straight back into ``expand_selection``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

import plotly.graph_objects as go

from dendroplot.core.layout import compute_layout
from dendroplot.core.selection import expand_selection, selection_change_for_points
from dendroplot.models.config import DendrogramConfig
from dendroplot.models.tree import (
    LayoutMode,
    Node,
    SelectionChange,
    SelectionResult,
    TreeLayout,
)
from dendroplot.visualization.base import BasePlot, resolve_leaf_color, write_figure

logger = logging.getLogger(__name__)

# Trace order in the figure; the marker trace is last so it draws on top
HORIZONTAL_TRACE = 0
VERTICAL_TRACE = 1
MARKER_TRACE = 2


def selected_point_indices(labels: list[str], selection: SelectionResult) -> list[int]:
    """Indices of markers whose label is part of the selection closure."""
    return [
        idx for idx, label in enumerate(labels)
        if label in selection.canonical_selected
    ]


class DendrogramPlot(BasePlot):
    """Linear or radial dendrogram with selection highlighting.

    Example:
        >>> tree = parse_newick("((A,B),C);")
        >>> plot = DendrogramPlot(tree, mode="radial")
        >>> fig = plot.create_figure()
        >>> selection, change = plot.handle_selection(["A", "B"])
        >>> plot.highlight(fig, selection)
    """

    def __init__(
        self,
        tree: Node,
        mode: LayoutMode | str = LayoutMode.LINEAR,
        config: DendrogramConfig | None = None,
        leaf_colors: Mapping[str, str] | None = None,
        color_of: Callable[[str], str] | None = None,
        title: str | None = None,
    ) -> None:
        """
        Initialize with a parsed tree.

        Args:
            tree: Root node from ``parse_newick``.
            mode: ``"linear"`` or ``"radial"``.
            config: Layout and style configuration.
            leaf_colors: Tip label to marker color.
            color_of: Fallback callback from tip label to color.
            title: Optional figure title.
        """
        super().__init__(config)
        self.tree = tree
        self.leaf_colors = leaf_colors
        self.color_of = color_of
        self.title = title
        self.layout: TreeLayout = compute_layout(tree, mode, self.config.layout)

    @property
    def labels(self) -> list[str]:
        return self.layout.labels

    def _marker_style(self) -> tuple[list[str], list[float]]:
        style = self.config.style
        colors: list[str] = []
        sizes: list[float] = []
        for pos in self.layout.node_positions:
            if pos.is_leaf:
                colors.append(resolve_leaf_color(
                    pos.label, self.leaf_colors, self.color_of, style.default_tip_color,
                ))
                sizes.append(style.tip_size)
            else:
                colors.append(style.internal_node_color)
                sizes.append(style.internal_node_size)
        return colors, sizes

    def _edge_trace(self, xs: list[float | None], ys: list[float | None]) -> go.Scatter:
        style = self.config.style
        return go.Scatter(
            x=xs,
            y=ys,
            mode="lines",
            line={
                "color": style.line_color,
                "width": style.line_width,
                "shape": style.line_shape,
            },
            hoverinfo="skip",
        )

    def create_figure(self, selection: SelectionResult | None = None) -> go.Figure:
        """Create the dendrogram figure.

        Args:
            selection: Optional selection to highlight immediately.

        Returns:
            Plotly Figure with edge and marker traces.
        """
        positions = self.layout.node_positions
        colors, sizes = self._marker_style()

        fig = go.Figure()
        fig.add_trace(self._edge_trace(self.layout.horizontal.x, self.layout.horizontal.y))
        fig.add_trace(self._edge_trace(self.layout.vertical.x, self.layout.vertical.y))
        fig.add_trace(
            go.Scattergl(
                x=[pos.x for pos in positions],
                y=[pos.y for pos in positions],
                text=self.labels,
                mode="markers",
                marker={"color": colors, "size": sizes, "opacity": 1},
                hoverinfo="text",
            )
        )

        self._apply_config(fig)
        if self.title:
            fig.update_layout(title={"text": self.title})
        if selection is not None:
            self.highlight(fig, selection)
        return fig

    def save(
        self,
        path: str | Path,
        selection: SelectionResult | None = None,
        **kwargs: Any,
    ) -> None:
        """Save the figure, highlighting ``selection`` if given."""
        write_figure(self.create_figure(selection=selection), path, **kwargs)

    def highlight(self, fig: go.Figure, selection: SelectionResult) -> go.Figure:
        """Mark the selected nodes on an existing figure without re-layout.

        An empty selection clears highlighting.
        """
        indices = selected_point_indices(self.labels, selection)
        fig.data[MARKER_TRACE].selectedpoints = indices or None
        return fig

    def handle_selection(
        self,
        point_labels: Iterable[str] | None,
    ) -> tuple[SelectionResult, SelectionChange]:
        """Process labels reported by a click or box-select event."""
        result, change = selection_change_for_points(self.tree, point_labels)
        logger.debug(
            f"Selection event: {len(change.selected_cells)} cells ({change.selection_type})"
        )
        return result, change

    def select_cells(self, fig: go.Figure, cells: Iterable[str]) -> SelectionResult:
        """Highlight the closure of externally chosen cells on ``fig``."""
        result = expand_selection(self.tree, cells)
        self.highlight(fig, result)
        return result
