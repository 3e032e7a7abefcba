"""
Data models for dendroplot.

Provides the tree node types, layout and selection result records,
and the pydantic configuration models.
"""

from dendroplot.models.config import DendrogramConfig, LayoutConfig, StyleConfig
from dendroplot.models.tree import (
    EdgePolyline,
    Internal,
    LayoutMode,
    Leaf,
    Node,
    NodePosition,
    SelectionChange,
    SelectionResult,
    TreeLayout,
)

__all__ = [
    "DendrogramConfig",
    "EdgePolyline",
    "Internal",
    "LayoutConfig",
    "LayoutMode",
    "Leaf",
    "Node",
    "NodePosition",
    "SelectionChange",
    "SelectionResult",
    "StyleConfig",
    "TreeLayout",
]
