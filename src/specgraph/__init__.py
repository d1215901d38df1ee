"""
specgraph: dependency graph exploration for specification documents.

Filters a spec graph by status, search and focus while keeping dependency
chains intact, measures hop distance from a focused spec, and lays the
result out with a hierarchical or force-directed strategy.
"""

from .core.graph import SpecGraph
from .core.types import (
    DependencyEdge,
    EdgeType,
    GraphPayload,
    RenderEdge,
    RenderNode,
    SpecNode,
    SpecPriority,
    SpecStatus,
)
from .pipeline import Explorer, GraphView, compute_view
from .view.state import LayoutName, ViewMode, ViewState

__version__ = "0.1.0"

__all__ = [
    "DependencyEdge",
    "EdgeType",
    "Explorer",
    "GraphPayload",
    "GraphView",
    "LayoutName",
    "RenderEdge",
    "RenderNode",
    "SpecGraph",
    "SpecNode",
    "SpecPriority",
    "SpecStatus",
    "ViewMode",
    "ViewState",
    "compute_view",
]
