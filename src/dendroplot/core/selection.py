"""Tri-state selection closure over a tree.

A node counts as selected when any of these hold:

- the caller named it (by name or node id),
- one of its ancestors is selected,
- every one of its children is selected.

The closure is computed in two passes so the result is a fixed point of
both rules regardless of visiting order. The bottom-up pass decides which
subtrees are "full" from explicit picks alone. The top-down pass then
spreads selection from every full node to all of its descendants.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from dendroplot.core.newick import validate_tree
from dendroplot.models.tree import (
    Internal,
    Leaf,
    Node,
    SelectionChange,
    SelectionResult,
    iter_postorder,
)

logger = logging.getLogger(__name__)


def is_requested(node: Node, selected_ids: frozenset[str]) -> bool:
    """Whether the caller picked ``node`` by its label or its node id."""
    return node.label in selected_ids or node.node_id in selected_ids


def _full_subtrees(root: Node, selected_ids: frozenset[str]) -> set[Node]:
    """Post-order pass: nodes that are picked or have all children full."""
    full: set[Node] = set()
    for node in iter_postorder(root):
        if is_requested(node, selected_ids):
            full.add(node)
        elif isinstance(node, Internal) and all(child in full for child in node.children):
            full.add(node)
    return full


def selected_nodes(root: Node, selected_ids: Iterable[str]) -> list[Node]:
    """Every node in the selection closure, in pre-order.

    Raises:
        TreeStructureError: If ``root`` is not a proper tree.
    """
    validate_tree(root)
    requested = frozenset(selected_ids)
    full = _full_subtrees(root, requested)

    selected: list[Node] = []
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, ancestor_selected = stack.pop()
        is_selected = ancestor_selected or node in full
        if is_selected:
            selected.append(node)
        if isinstance(node, Internal):
            stack.extend((child, is_selected) for child in reversed(node.children))
    return selected


def expand_selection(root: Node, selected_ids: Iterable[str]) -> SelectionResult:
    """Expand picked labels into a consistent selection.

    Args:
        root: Root of the hierarchy.
        selected_ids: Labels or node ids the user picked. Unknown values
            are ignored.

    Returns:
        SelectionResult with the selected leaves in traversal order, every
        selected label, and the labels of nodes added by propagation.

    Raises:
        TreeStructureError: If ``root`` is not a proper tree.

    Example:
        >>> from dendroplot.core.newick import parse_newick
        >>> tree = parse_newick("((A:1,B:1)AB:1,C:1);")
        >>> expand_selection(tree, {"A", "B"}).selected_leaves
        ['A', 'B']
    """
    requested = frozenset(selected_ids)
    nodes = selected_nodes(root, requested)

    selected_leaves: list[str] = []
    seen_leaves: set[str] = set()
    for node in nodes:
        if isinstance(node, Leaf) and node.label not in seen_leaves:
            seen_leaves.add(node.label)
            selected_leaves.append(node.label)

    canonical = frozenset(node.label for node in nodes)
    newly_inferred = frozenset(
        node.label for node in nodes if not is_requested(node, requested)
    )
    if requested:
        logger.debug(
            f"Selection of {len(requested)} ids expanded to {len(canonical)} nodes "
            f"({len(newly_inferred)} inferred, {len(selected_leaves)} leaves)"
        )
    return SelectionResult(
        selected_leaves=selected_leaves,
        canonical_selected=canonical,
        newly_inferred=newly_inferred,
    )


def selection_change_for_points(
    root: Node,
    point_labels: Iterable[str] | None,
) -> tuple[SelectionResult, SelectionChange]:
    """Turn a renderer click or box-select event into a host notification.

    Args:
        root: Root of the hierarchy.
        point_labels: Labels of the clicked or enclosed markers, or None
            when the renderer reports that the selection was cleared.

    Returns:
        The expanded selection and the change the host should dispatch.
    """
    if point_labels is None:
        empty = expand_selection(root, ())
        return empty, SelectionChange(selected_cells=[], selection_type="none")

    result = expand_selection(root, point_labels)
    change = SelectionChange(
        selected_cells=list(result.selected_leaves),
        selection_type="cells",
    )
    return result, change
