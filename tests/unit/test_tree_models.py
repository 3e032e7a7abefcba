"""Tests for tree nodes and layout records."""
from __future__ import annotations

from dendroplot.models.tree import (
    EdgePolyline,
    Internal,
    Leaf,
    LayoutMode,
    find,
    iter_postorder,
    iter_preorder,
    leaves,
)


class TestNodes:
    """Test node variants and traversal helpers."""

    def test_leaf_label_prefers_name(self):
        assert Leaf(name="A", node_id="n3").label == "A"
        assert Leaf(node_id="n3").label == "n3"

    def test_is_leaf(self):
        leaf = Leaf(name="A")
        assert leaf.is_leaf
        assert not Internal(children=[leaf]).is_leaf

    def test_nodes_hash_by_identity(self):
        first, second = Leaf(name="A"), Leaf(name="A")
        assert first != second
        assert len({first, second}) == 2

    def test_preorder(self, named_tree):
        assert [node.label for node in iter_preorder(named_tree)] == [
            "R", "X", "A", "B", "Y", "C", "D",
        ]

    def test_postorder(self, named_tree):
        assert [node.label for node in iter_postorder(named_tree)] == [
            "A", "B", "X", "C", "D", "Y", "R",
        ]

    def test_postorder_custom_child_order(self, named_tree):
        order = iter_postorder(named_tree, lambda node: list(reversed(node.children)))
        assert [node.label for node in order] == ["D", "C", "Y", "B", "A", "X", "R"]

    def test_postorder_deep_tree(self, ladder_tree):
        order = list(iter_postorder(ladder_tree))
        assert order[-1] is ladder_tree
        assert [node.label for node in order[:2]] == ["L0", "L1"]

    def test_leaves(self, uneven_tree):
        assert [leaf.name for leaf in leaves(uneven_tree)] == list("ABCDEFG")

    def test_find_by_name_and_id(self, nested_tree):
        assert find(nested_tree, "C").name == "C"
        assert find(nested_tree, "n1") is nested_tree.children[0]
        assert find(nested_tree, "missing") is None

    def test_layout_mode_from_string(self):
        assert LayoutMode("radial") is LayoutMode.RADIAL


class TestEdgePolyline:
    """Test pen-up polylines."""

    def test_move_appends_gap(self):
        line = EdgePolyline()
        line.move(0, 0, 1, 1)
        assert line.x == [0, 1, None]
        assert line.y == [0, 1, None]

    def test_segments_split_at_gaps(self):
        line = EdgePolyline()
        line.move(0, 0, 1, 0)
        line.extend_points([(2, 2), (3, 3), (4, 4)])
        assert line.segments() == [
            [(0, 0), (1, 0)],
            [(2, 2), (3, 3), (4, 4)],
        ]

    def test_empty(self):
        assert EdgePolyline().segments() == []
