"""
Shared pytest fixtures for dendroplot tests.

Provides reusable Newick descriptions, parsed trees, and temporary
tree files for unit and CLI testing.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from dendroplot.core.newick import parse_newick
from dendroplot.models.tree import Node


# =============================================================================
# Newick Description Fixtures
# =============================================================================


@pytest.fixture
def two_leaf_newick() -> str:
    """Smallest useful tree: a cherry."""
    return "(A:1,B:1);"


@pytest.fixture
def nested_newick() -> str:
    """Cherry (A,B) nested beside a single tip C; internal nodes unnamed."""
    return "((A:1,B:1):1,C:1);"


@pytest.fixture
def named_newick() -> str:
    """Balanced four-tip tree with every internal node named."""
    return "((A:0.1,B:0.2)X:0.5,(C:0.3,D:0.4)Y:0.6)R;"


@pytest.fixture
def uneven_newick() -> str:
    """Tree whose children differ in size, so draw order differs from input order."""
    return "(((A,B)AB,C)ABC,D,(E,F,G)EFG)root;"


LADDER_LEAVES = 1500


@pytest.fixture
def ladder_newick() -> str:
    """Caterpillar tree ((((L0,L1),L2),L3)...) nested far past the recursion limit."""
    description = "(L0,L1)"
    for index in range(2, LADDER_LEAVES):
        description = f"({description},L{index})"
    return description + ";"


# =============================================================================
# Parsed Tree Fixtures
# =============================================================================


@pytest.fixture
def two_leaf_tree(two_leaf_newick: str) -> Node:
    return parse_newick(two_leaf_newick)


@pytest.fixture
def nested_tree(nested_newick: str) -> Node:
    return parse_newick(nested_newick)


@pytest.fixture
def named_tree(named_newick: str) -> Node:
    return parse_newick(named_newick)


@pytest.fixture
def uneven_tree(uneven_newick: str) -> Node:
    return parse_newick(uneven_newick)


@pytest.fixture
def ladder_tree(ladder_newick: str) -> Node:
    return parse_newick(ladder_newick)


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def newick_file(tmp_path: Path, named_newick: str) -> Path:
    """Newick file containing the named four-tip tree."""
    path = tmp_path / "tree.nwk"
    path.write_text(named_newick + "\n")
    return path


@pytest.fixture
def malformed_newick_file(tmp_path: Path) -> Path:
    """Newick file truncated before its closing parenthesis."""
    path = tmp_path / "broken.nwk"
    path.write_text("(A:1,B:1")
    return path
