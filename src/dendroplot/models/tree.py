"""
Hierarchy data model for dendroplot.

A parsed tree is a rooted, ordered hierarchy of ``Leaf`` and ``Internal``
nodes. Layout and selection never write onto these nodes; they return
records (``NodePosition``, ``SelectionResult``) keyed or ordered by node.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union


@dataclass(eq=False)
class Leaf:
    """A tip of the tree.

    Attributes:
        name: Tip label from the description (may be None for ``(,);``).
        length: Branch length to the parent, if given. Not used by layout.
        node_id: Pre-order identifier assigned by the parser.
    """

    name: str | None = None
    length: float | None = None
    node_id: str = ""

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def label(self) -> str:
        """Name if present, otherwise the node id."""
        return self.name if self.name else self.node_id


@dataclass(eq=False)
class Internal:
    """An internal node with an ordered, non-empty branchset.

    Attributes:
        children: Child nodes in description order.
        name: Optional label (often a support value in real trees).
        length: Branch length to the parent, if given. Not used by layout.
        node_id: Pre-order identifier assigned by the parser.
    """

    children: list[Node] = field(default_factory=list)
    name: str | None = None
    length: float | None = None
    node_id: str = ""

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def label(self) -> str:
        """Name if present, otherwise the node id."""
        return self.name if self.name else self.node_id


Node = Union[Leaf, Internal]


def iter_preorder(root: Node) -> Iterator[Node]:
    """Yield nodes root first, children in description order."""
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Internal):
            stack.extend(reversed(node.children))


def iter_postorder(
    root: Node,
    children_of: Callable[[Internal], Sequence[Node]] | None = None,
) -> Iterator[Node]:
    """Yield nodes children first, then their parent.

    Runs on an explicit stack so arbitrarily deep trees never hit the
    interpreter recursion limit.

    Args:
        root: Root of the hierarchy.
        children_of: Child ordering for internal nodes (description order
            by default).
    """
    order: list[Node] = []
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        if isinstance(node, Internal):
            stack.extend(children_of(node) if children_of else node.children)
    yield from reversed(order)


def leaves(root: Node) -> list[Leaf]:
    """All tips in description order."""
    return [node for node in iter_preorder(root) if isinstance(node, Leaf)]


def find(root: Node, label: str) -> Node | None:
    """Return the first node (pre-order) whose label matches."""
    for node in iter_preorder(root):
        if node.label == label or node.node_id == label:
            return node
    return None


class LayoutMode(str, Enum):
    """Dendrogram projection."""

    LINEAR = "linear"
    RADIAL = "radial"


@dataclass(frozen=True)
class NodePosition:
    """Plot position of one node.

    ``x`` and ``y`` are always the plotted Cartesian coordinates. In radial
    mode ``r`` and ``theta`` hold the polar position they were derived from.
    """

    node_id: str
    label: str
    name: str | None
    is_leaf: bool
    depth: int
    x: float
    y: float
    r: float | None = None
    theta: float | None = None


@dataclass
class EdgePolyline:
    """Flat polyline where a ``None`` pair lifts the pen between strokes."""

    x: list[float | None] = field(default_factory=list)
    y: list[float | None] = field(default_factory=list)

    def move(self, x0: float, y0: float, x1: float, y1: float) -> None:
        """Append one straight segment followed by a pen-up marker."""
        self.x.extend([x0, x1, None])
        self.y.extend([y0, y1, None])

    def extend_points(self, points: list[tuple[float, float]]) -> None:
        """Append a connected run of points followed by a pen-up marker."""
        for px, py in points:
            self.x.append(px)
            self.y.append(py)
        self.x.append(None)
        self.y.append(None)

    def segments(self) -> list[list[tuple[float, float]]]:
        """Split the polyline at pen-up markers into connected runs."""
        runs: list[list[tuple[float, float]]] = []
        current: list[tuple[float, float]] = []
        for px, py in zip(self.x, self.y):
            if px is None or py is None:
                if current:
                    runs.append(current)
                current = []
            else:
                current.append((px, py))
        if current:
            runs.append(current)
        return runs


@dataclass
class TreeLayout:
    """Everything the renderer needs to draw a dendrogram."""

    mode: LayoutMode
    node_positions: list[NodePosition]
    horizontal: EdgePolyline
    vertical: EdgePolyline

    @property
    def labels(self) -> list[str]:
        return [pos.label for pos in self.node_positions]


@dataclass(frozen=True)
class SelectionResult:
    """Closure of a user selection over a hierarchy.

    Attributes:
        selected_leaves: Labels of selected tips, traversal order, no repeats.
        canonical_selected: Labels of every node that ends up selected.
        newly_inferred: Labels selected by propagation, not named by the caller.
    """

    selected_leaves: list[str]
    canonical_selected: frozenset[str]
    newly_inferred: frozenset[str]

    @property
    def is_empty(self) -> bool:
        return not self.canonical_selected


@dataclass(frozen=True)
class SelectionChange:
    """Notification for the host application after a selection event."""

    selected_cells: list[str]
    selection_type: Literal["cells", "none"]
