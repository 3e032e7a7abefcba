"""Parse Newick tree descriptions into a node hierarchy.

The parser follows the classic newick.js approach: split the text on the
delimiters ``; ( ) , :`` (keeping them as tokens) and walk the token list
with a stack of open ancestors. Names and branch lengths attach to the
current node depending on the token that precedes them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from dendroplot.core.exceptions import (
    EmptyTreeError,
    InvalidBranchLengthError,
    TreeParseError,
    TreeStructureError,
    UnbalancedParenthesesError,
)
from dendroplot.models.tree import Internal, Leaf, Node, iter_preorder

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\s*(;|\(|\)|,|:)\s*")

NAME_PREDECESSORS = frozenset({"(", ")", ","})


@dataclass(eq=False)
class _Draft:
    """Mutable node used while tokens are still arriving."""

    name: str | None = None
    length: float | None = None
    branchset: list[_Draft] | None = None


def tokenize(description: str) -> list[str]:
    """Split a description into delimiter and text tokens.

    Whitespace around delimiters is dropped, as are the empty strings that
    appear between adjacent delimiters.

    Example:
        >>> tokenize("(A:0.1, B)C;")
        ['(', 'A', ':', '0.1', ',', 'B', ')', 'C', ';']
    """
    return [token for token in TOKEN_PATTERN.split(description.strip()) if token]


def parse_newick(description: str) -> Node:
    """Parse a Newick string into a hierarchy.

    Args:
        description: Text such as ``"(A:0.1,B:0.2,(C:0.3,D:0.4):0.5);"``.
            The trailing ``;`` is optional.

    Returns:
        The root node. Internal nodes always have at least one child.

    Raises:
        EmptyTreeError: If the description is blank.
        UnbalancedParenthesesError: On a ``)`` with nothing open, or ``(``
            left open at the end of input.
        InvalidBranchLengthError: If a token after ``:`` is not a number.
    """
    tokens = tokenize(description)
    if not tokens:
        raise EmptyTreeError

    ancestors: list[_Draft] = []
    current = _Draft()
    previous: str | None = None

    for position, token in enumerate(tokens):
        if token == "(":
            child = _Draft()
            current.branchset = [child]
            ancestors.append(current)
            current = child
        elif token == ",":
            if not ancestors:
                raise TreeParseError(
                    f"',' at token {position} outside any parentheses",
                    suggestion="Sibling lists must be enclosed in '(' and ')'.",
                )
            child = _Draft()
            ancestors[-1].branchset.append(child)
            current = child
        elif token == ")":
            if not ancestors:
                raise UnbalancedParenthesesError(0, position=position)
            current = ancestors.pop()
        elif token in (":", ";"):
            pass
        elif previous is None or previous in NAME_PREDECESSORS:
            current.name = token
        elif previous == ":":
            try:
                current.length = float(token)
            except ValueError:
                raise InvalidBranchLengthError(token, position) from None
        previous = token

    if ancestors:
        raise UnbalancedParenthesesError(len(ancestors))

    root = _freeze(current)
    _assign_ids(root)
    logger.debug(
        f"Parsed tree with {sum(1 for _ in iter_preorder(root))} nodes "
        f"from {len(tokens)} tokens"
    )
    return root


def _freeze(root: _Draft) -> Node:
    """Convert the draft tree into Leaf/Internal nodes, children first."""
    order: list[_Draft] = []
    stack: list[_Draft] = [root]
    while stack:
        draft = stack.pop()
        order.append(draft)
        if draft.branchset is not None:
            stack.extend(draft.branchset)

    frozen: dict[_Draft, Node] = {}
    for draft in reversed(order):
        if draft.branchset is None:
            frozen[draft] = Leaf(name=draft.name, length=draft.length)
        else:
            frozen[draft] = Internal(
                children=[frozen[child] for child in draft.branchset],
                name=draft.name,
                length=draft.length,
            )
    return frozen[root]


def _assign_ids(root: Node) -> None:
    for index, node in enumerate(iter_preorder(root)):
        node.node_id = f"n{index}"


def load_newick(path: Path) -> Node:
    """Read and parse the first tree in a Newick file.

    Args:
        path: File containing one or more ``;``-terminated trees.

    Returns:
        Root node of the first tree.

    Raises:
        FileNotFoundError: If the file does not exist.
        TreeParseError: If the file content is not a valid tree.
    """
    if not path.exists():
        raise FileNotFoundError(f"Tree file not found: {path}")

    text = path.read_text(encoding="utf-8")
    first, sep, rest = text.partition(";")
    if sep and rest.strip():
        logger.warning(f"{path} contains more than one tree; using the first")

    root = parse_newick(first + sep)
    logger.info(f"Loaded tree from {path}")
    return root


def validate_tree(root: Node) -> None:
    """Check that a hand-built hierarchy is a proper rooted tree.

    Parser output always passes; this guards hierarchies assembled
    directly from ``Leaf``/``Internal`` objects before layout or selection.

    Raises:
        TreeStructureError: If a node is reachable twice (shared child or
            cycle) or an internal node has no children.
    """
    seen: set[int] = set()
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            raise TreeStructureError(
                f"Node {node.label or '<unnamed>'} is reachable more than once; "
                "the hierarchy is not a tree"
            )
        seen.add(id(node))
        if isinstance(node, Internal):
            if not node.children:
                raise TreeStructureError(
                    f"Internal node {node.label or '<unnamed>'} has no children"
                )
            stack.extend(node.children)
