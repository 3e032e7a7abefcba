"""Topological dendrogram layout.

Positions are derived from tree shape alone. Each node's depth is the
number of leaves beneath it, so the root sits at x=0 and a node moves
outward as its subtree shrinks. Branch lengths are parsed but never used
here.

The passes run in a fixed order:

1. ``compute_depths`` - leaf count per subtree (post-order).
2. ``compute_linear_coords`` - x from depth, y from leaf order.
3. ``to_radial`` - optional polar projection of the linear coordinates.
4. ``compute_edges`` - elbow polylines for the linear or radial drawing.

``compute_layout`` runs all of them and returns a ``TreeLayout``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from dendroplot.core.exceptions import InvalidLayoutModeError
from dendroplot.core.newick import validate_tree
from dendroplot.models.config import LayoutConfig
from dendroplot.models.tree import (
    EdgePolyline,
    Internal,
    LayoutMode,
    Node,
    NodePosition,
    TreeLayout,
    iter_postorder,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    """Linear layout coordinates of a single node."""

    x: float
    y: float


@dataclass(frozen=True)
class PolarPoint:
    """Radial layout coordinates; ``x``/``y`` are the Cartesian projection."""

    r: float
    theta: float
    x: float
    y: float


def compute_depths(root: Node) -> dict[Node, int]:
    """Map every node to the number of leaves in its subtree.

    Leaves have depth 1; an internal node's depth is the sum of its
    children's depths, so the root's depth is the total leaf count.
    """
    depths: dict[Node, int] = {}
    for node in iter_postorder(root):
        if isinstance(node, Internal):
            depths[node] = sum(depths[child] for child in node.children)
        else:
            depths[node] = 1
    return depths


def compute_linear_coords(
    root: Node,
    depths: dict[Node, int],
    tip_offset: float = 30.0,
) -> dict[Node, Point]:
    """Assign Cartesian dendrogram coordinates.

    Children are visited in description order. Leaves take consecutive
    integer rows starting at 0 and are pushed out by ``tip_offset``. An
    internal node sits halfway between its highest and lowest child rows.

    Args:
        root: Root of the hierarchy.
        depths: Output of ``compute_depths`` for the same hierarchy.
        tip_offset: Extra x distance added to every leaf.

    Returns:
        Mapping of node to its ``Point``.
    """
    max_depth = depths[root]
    coords: dict[Node, Point] = {}
    leaf_index = 0

    for node in iter_postorder(root):
        x = float(max_depth - depths[node])
        if isinstance(node, Internal):
            child_ys = [coords[child].y for child in node.children]
            y = (max(child_ys) + min(child_ys)) / 2
        else:
            y = float(leaf_index)
            leaf_index += 1
            x += tip_offset
        coords[node] = Point(x=x, y=y)
    return coords


def polar_to_cartesian(r: float, theta: float) -> tuple[float, float]:
    return math.cos(theta) * r, math.sin(theta) * r


def to_radial(
    coords: dict[Node, Point],
    angular_gap: float = 1.0,
) -> dict[Node, PolarPoint]:
    """Project linear coordinates onto a circle.

    The radius is the linear x. Rows are spread over a full turn with
    ``angular_gap`` extra rows so the first and last leaves stay apart:
    ``theta = 2*pi * (y - y_min + gap) / (y_max - y_min + gap)``.
    """
    ys = [point.y for point in coords.values()]
    y_min = min(ys)
    span = max(ys) - y_min + angular_gap

    polar: dict[Node, PolarPoint] = {}
    for node, point in coords.items():
        theta = 2 * math.pi * (point.y - y_min + angular_gap) / span
        x, y = polar_to_cartesian(point.x, theta)
        polar[node] = PolarPoint(r=point.x, theta=theta, x=x, y=y)
    return polar


def _children_by_depth(node: Internal, depths: dict[Node, int]) -> list[Node]:
    # sorted() is stable, so equal depths keep description order
    return sorted(node.children, key=lambda child: depths[child])


def compute_edges(
    root: Node,
    depths: dict[Node, int],
    coords: dict[Node, Point],
) -> tuple[EdgePolyline, EdgePolyline]:
    """Build elbow connectors for the linear drawing.

    For each internal node the elbow is drawn at ``mid``, halfway between
    the node and its nearest child: a stub from the node to ``mid``, one
    segment from ``mid`` to each child, and a vertical bar at ``mid``
    spanning the child rows.

    Returns:
        ``(horizontal, vertical)`` polylines.
    """
    horizontal = EdgePolyline()
    vertical = EdgePolyline()

    def children_of(node: Internal) -> list[Node]:
        return _children_by_depth(node, depths)

    for node in iter_postorder(root, children_of):
        if not isinstance(node, Internal):
            continue
        start = coords[node]
        child_points = [coords[child] for child in children_of(node)]
        mid = (start.x + min(p.x for p in child_points)) / 2

        horizontal.move(start.x, start.y, mid, start.y)
        for point in child_points:
            horizontal.move(mid, point.y, point.x, point.y)

        child_ys = [p.y for p in child_points]
        vertical.move(mid, min(child_ys), mid, max(child_ys))

    return horizontal, vertical


def _arc_angles(
    parent_theta: float,
    child_thetas: list[float],
    samples: int,
) -> list[float]:
    """Angles for the arc joining a node's children, in ascending order."""
    low, high = min(child_thetas), max(child_thetas)
    angles = set(child_thetas)
    angles.add(parent_theta)
    if high > low:
        angles.update(np.linspace(low, high, samples, endpoint=False).tolist())
    return sorted(angles)


def compute_radial_edges(
    root: Node,
    polar: dict[Node, PolarPoint],
    arc_samples: int = 25,
) -> tuple[EdgePolyline, EdgePolyline]:
    """Build elbow connectors for the radial drawing.

    Same routing as ``compute_edges`` but in polar terms: radial stubs at
    constant angle, and an arc at radius ``mid`` approximated by a short
    polyline through ``arc_samples`` evenly spaced angles plus the exact
    child and parent angles. Every point is converted to Cartesian.

    Returns:
        ``(horizontal, vertical)`` polylines; "vertical" holds the arcs.
    """
    horizontal = EdgePolyline()
    vertical = EdgePolyline()

    def move(r0: float, t0: float, r1: float, t1: float) -> None:
        x0, y0 = polar_to_cartesian(r0, t0)
        x1, y1 = polar_to_cartesian(r1, t1)
        horizontal.move(x0, y0, x1, y1)

    def children_of(node: Internal) -> list[Node]:
        return sorted(node.children, key=lambda child: polar[child].theta)

    for node in iter_postorder(root, children_of):
        if not isinstance(node, Internal):
            continue
        start = polar[node]
        child_points = [polar[child] for child in children_of(node)]
        mid = (start.r + min(p.r for p in child_points)) / 2

        move(start.r, start.theta, mid, start.theta)
        for point in child_points:
            move(mid, point.theta, point.r, point.theta)

        angles = _arc_angles(start.theta, [p.theta for p in child_points], arc_samples)
        vertical.extend_points([polar_to_cartesian(mid, theta) for theta in angles])

    return horizontal, vertical


def _resolve_mode(mode: LayoutMode | str) -> LayoutMode:
    try:
        return LayoutMode(mode)
    except ValueError:
        raise InvalidLayoutModeError(mode) from None


def compute_layout(
    root: Node,
    mode: LayoutMode | str = LayoutMode.LINEAR,
    config: LayoutConfig | None = None,
) -> TreeLayout:
    """Run every layout pass and collect the results for a renderer.

    Node positions are listed in draw order: pre-order with each node's
    children sorted by ascending depth.

    Args:
        root: Root of the hierarchy.
        mode: ``"linear"`` or ``"radial"``.
        config: Layout constants; defaults to ``LayoutConfig()``.

    Returns:
        TreeLayout with node positions and the two edge polylines.

    Raises:
        InvalidLayoutModeError: If ``mode`` is not a known layout mode.
        TreeStructureError: If ``root`` is not a proper tree (shared or
            cyclic nodes, or an internal node without children).
    """
    layout_mode = _resolve_mode(mode)
    validate_tree(root)
    config = config or LayoutConfig()

    depths = compute_depths(root)
    coords = compute_linear_coords(root, depths, tip_offset=config.tip_offset)
    order = _draw_order(root, depths)

    if layout_mode == LayoutMode.RADIAL:
        polar = to_radial(coords, angular_gap=config.angular_gap)
        positions = [
            NodePosition(
                node_id=node.node_id,
                label=node.label,
                name=node.name,
                is_leaf=not isinstance(node, Internal),
                depth=depths[node],
                x=polar[node].x,
                y=polar[node].y,
                r=polar[node].r,
                theta=polar[node].theta,
            )
            for node in order
        ]
        horizontal, vertical = compute_radial_edges(
            root, polar, arc_samples=config.arc_samples
        )
    else:
        positions = [
            NodePosition(
                node_id=node.node_id,
                label=node.label,
                name=node.name,
                is_leaf=not isinstance(node, Internal),
                depth=depths[node],
                x=coords[node].x,
                y=coords[node].y,
            )
            for node in order
        ]
        horizontal, vertical = compute_edges(root, depths, coords)

    logger.debug(
        f"Computed {layout_mode.value} layout for {len(positions)} nodes "
        f"({depths[root]} leaves)"
    )
    return TreeLayout(
        mode=layout_mode,
        node_positions=positions,
        horizontal=horizontal,
        vertical=vertical,
    )


def _draw_order(root: Node, depths: dict[Node, int]) -> list[Node]:
    order: list[Node] = []
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        if isinstance(node, Internal):
            stack.extend(reversed(_children_by_depth(node, depths)))
    return order
