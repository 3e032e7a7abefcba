"""
Tests for the Plotly dendrogram figure.

Tests trace construction, marker styling, and selection highlighting.
"""

from __future__ import annotations

import json

import pytest

# Skip if plotly not available
plotly = pytest.importorskip("plotly")


class TestCategoryColors:
    """Test palette assignment for leaf categories."""

    def test_categories_share_colors(self):
        from dendroplot.visualization.base import SEQUENTIAL_PALETTE, category_colors

        colors = category_colors({"A": "x", "B": "y", "C": "x"})
        assert colors["A"] == colors["C"] == SEQUENTIAL_PALETTE[0]
        assert colors["B"] == SEQUENTIAL_PALETTE[1]

    def test_palette_wraps(self):
        from dendroplot.visualization.base import category_colors

        colors = category_colors({"A": "1", "B": "2", "C": "3"}, palette=["#111", "#222"])
        assert colors["C"] == "#111"


class TestDendrogramFigure:
    """Test figure structure."""

    def test_three_traces(self, nested_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        fig = DendrogramPlot(nested_tree).create_figure()
        assert len(fig.data) == 3
        assert fig.data[0].mode == "lines"
        assert fig.data[1].mode == "lines"
        assert fig.data[2].type == "scattergl"
        assert fig.data[2].mode == "markers"

    def test_marker_text_is_labels(self, nested_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        fig = DendrogramPlot(nested_tree).create_figure()
        assert list(fig.data[2].text) == ["n0", "C", "n1", "A", "B"]

    def test_marker_style(self, nested_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        plot = DendrogramPlot(nested_tree, leaf_colors={"A": "#ff0000"})
        fig = plot.create_figure()
        colors = list(fig.data[2].marker.color)
        sizes = list(fig.data[2].marker.size)

        assert colors[0] == "#a4a4a4"  # root
        assert colors[3] == "#ff0000"  # A
        assert colors[4] == "#1f77b4"  # B falls back to default
        assert sizes == [5.0, 6.3, 5.0, 6.3, 6.3]

    def test_color_callback(self, two_leaf_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        plot = DendrogramPlot(two_leaf_tree, color_of=lambda name: "#00ff00")
        colors = list(plot.create_figure().data[2].marker.color)
        assert colors == ["#a4a4a4", "#00ff00", "#00ff00"]

    def test_edges_use_pen_up_gaps(self, two_leaf_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        fig = DendrogramPlot(two_leaf_tree).create_figure()
        assert list(fig.data[1].x) == [15.5, 15.5, None]
        assert fig.data[0].hoverinfo == "skip"

    def test_layout_hides_axes(self, two_leaf_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        fig = DendrogramPlot(two_leaf_tree, title="My tree").create_figure()
        assert fig.layout.width == 770
        assert fig.layout.showlegend is False
        assert fig.layout.hovermode == "closest"
        assert fig.layout.xaxis.showticklabels is False
        assert fig.layout.title.text == "My tree"

    def test_radial_mode(self, uneven_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        plot = DendrogramPlot(uneven_tree, mode="radial")
        fig = plot.create_figure()
        assert plot.layout.mode.value == "radial"
        assert len(fig.data[2].x) == 11

    def test_to_json(self, two_leaf_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        payload = json.loads(DendrogramPlot(two_leaf_tree).to_json())
        assert payload["data"][2]["type"] == "scattergl"

    def test_to_html_div(self, two_leaf_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        html = DendrogramPlot(two_leaf_tree).to_html_div()
        assert 'id="plot-dendrogramplot"' in html

    def test_save_unsupported_format(self, two_leaf_tree, tmp_path):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        with pytest.raises(ValueError, match="Unsupported file format"):
            DendrogramPlot(two_leaf_tree).save(str(tmp_path / "tree.txt"))

    def test_save_html(self, two_leaf_tree, tmp_path):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        path = tmp_path / "tree.html"
        DendrogramPlot(two_leaf_tree).save(str(path))
        assert path.exists()

    def test_save_json_with_selection(self, named_tree, tmp_path):
        from dendroplot.core.selection import expand_selection
        from dendroplot.visualization.dendrogram import DendrogramPlot

        path = tmp_path / "tree.JSON"
        DendrogramPlot(named_tree).save(path, selection=expand_selection(named_tree, ["Y"]))
        markers = json.loads(path.read_text())["data"][2]
        assert {markers["text"][i] for i in markers["selectedpoints"]} == {"Y", "C", "D"}

    def test_write_figure_suffix_dispatch(self, two_leaf_tree, tmp_path):
        from dendroplot.visualization.base import write_figure
        from dendroplot.visualization.dendrogram import DendrogramPlot

        fig = DendrogramPlot(two_leaf_tree).create_figure()
        write_figure(fig, tmp_path / "tree.json")
        assert json.loads((tmp_path / "tree.json").read_text())["data"]
        with pytest.raises(ValueError, match="Unsupported file format"):
            write_figure(fig, tmp_path / "tree.csv")


class TestHighlighting:
    """Test selection highlighting on existing figures."""

    def test_highlight_selected_points(self, nested_tree):
        from dendroplot.core.selection import expand_selection
        from dendroplot.visualization.dendrogram import DendrogramPlot

        plot = DendrogramPlot(nested_tree)
        fig = plot.create_figure()
        plot.highlight(fig, expand_selection(nested_tree, {"A", "B"}))

        # labels are n0, C, n1, A, B
        assert list(fig.data[2].selectedpoints) == [2, 3, 4]

    def test_empty_selection_clears(self, nested_tree):
        from dendroplot.core.selection import expand_selection
        from dendroplot.visualization.dendrogram import DendrogramPlot

        plot = DendrogramPlot(nested_tree)
        fig = plot.create_figure(selection=expand_selection(nested_tree, {"C"}))
        assert list(fig.data[2].selectedpoints) == [1]

        plot.highlight(fig, expand_selection(nested_tree, set()))
        assert fig.data[2].selectedpoints is None

    def test_select_cells(self, named_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        plot = DendrogramPlot(named_tree)
        fig = plot.create_figure()
        result = plot.select_cells(fig, ["C", "D"])

        assert result.canonical_selected == {"C", "D", "Y"}
        selected = {plot.labels[i] for i in fig.data[2].selectedpoints}
        assert selected == {"C", "D", "Y"}

    def test_handle_selection(self, named_tree):
        from dendroplot.visualization.dendrogram import DendrogramPlot

        plot = DendrogramPlot(named_tree)
        result, change = plot.handle_selection(["X"])
        assert change.selected_cells == ["A", "B"]
        assert change.selection_type == "cells"

        _, cleared = plot.handle_selection(None)
        assert cleared.selection_type == "none"

    def test_selected_point_indices(self):
        from dendroplot.models.tree import SelectionResult
        from dendroplot.visualization.dendrogram import selected_point_indices

        selection = SelectionResult(
            selected_leaves=["B"],
            canonical_selected=frozenset({"B"}),
            newly_inferred=frozenset(),
        )
        assert selected_point_indices(["A", "B", "B"], selection) == [1, 2]
