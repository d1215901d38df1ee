"""
Layout strategy contract.

Every strategy takes the builder's RenderGraph and returns a new one with
absolute positions. Connected specs (touching a laid-out edge) are arranged
by the strategy itself; standalone specs share one grid policy placed below
the connected cluster.
"""

import math
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import LayoutSettings
from ..core.types import RenderEdge, RenderGraph, RenderNode

Point = Tuple[float, float]


def grid_columns(count: int, aspect: float = 1.5) -> int:
    """Columns for a roughly square grid of ``count`` cards."""
    if count <= 0:
        return 0
    return math.ceil(math.sqrt(count * aspect))


def grid_positions(
    count: int,
    width: float,
    height: float,
    gap: float,
    origin: Point = (0.0, 0.0),
    aspect: float = 1.5,
) -> List[Point]:
    """Row-major grid cells starting at ``origin``."""
    cols = grid_columns(count, aspect)
    ox, oy = origin
    return [
        (ox + (i % cols) * (width + gap), oy + (i // cols) * (height + gap))
        for i in range(count)
    ]


def normalize(positions: Dict[str, Point], offset: float = 0.0) -> Dict[str, Point]:
    """Shift positions so the top-left corner lands on (offset, offset)."""
    if not positions:
        return {}
    min_x = min(x for x, _ in positions.values())
    min_y = min(y for _, y in positions.values())
    return {
        node_id: (x - min_x + offset, y - min_y + offset)
        for node_id, (x, y) in positions.items()
    }


def bounding_box(positions: Dict[str, Point], width: float, height: float) -> Tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y) of top-left anchored cards."""
    if not positions:
        return 0.0, 0.0, 0.0, 0.0
    xs = [x for x, _ in positions.values()]
    ys = [y for _, y in positions.values()]
    return min(xs), min(ys), max(xs) + width, max(ys) + height


class LayoutStrategy(ABC):
    """
    Base class for layout algorithms.

    Subclasses implement ``_layout_connected``; the shared ``layout``
    handles the empty graph, the connected/standalone split and the grid.
    """

    name: str = ""

    def __init__(self, settings: Optional[LayoutSettings] = None):
        self.settings = settings or LayoutSettings()

    def layout(
        self,
        graph: RenderGraph,
        compact: bool = False,
        show_standalone: bool = True,
    ) -> RenderGraph:
        if not graph.nodes:
            return RenderGraph(nodes=[], edges=list(graph.edges))

        edges = self._layout_edges(graph)
        linked = set()
        for edge in edges:
            linked.add(edge.source)
            linked.add(edge.target)

        connected = [n for n in graph.nodes if n.id in linked]
        standalone = [n for n in graph.nodes if n.id not in linked] if show_standalone else []

        positions = self._layout_connected(connected, edges, compact) if connected else {}
        positions.update(self._place_standalone(standalone, positions, compact))

        placed = [
            node.at(*positions[node.id])
            for node in graph.nodes
            if node.id in positions
        ]
        kept = {n.id for n in placed}
        return RenderGraph(
            nodes=placed,
            edges=[e for e in graph.edges if e.source in kept and e.target in kept],
        )

    def _layout_edges(self, graph: RenderGraph) -> List[RenderEdge]:
        """Edges the strategy arranges by; dependsOn only unless overridden."""
        ids = {n.id for n in graph.nodes}
        return [
            e for e in graph.edges
            if e.type == "dependsOn" and e.source in ids and e.target in ids
        ]

    @abstractmethod
    def _layout_connected(
        self,
        nodes: Sequence[RenderNode],
        edges: Sequence[RenderEdge],
        compact: bool,
    ) -> Dict[str, Point]:
        """Top-left positions for specs that touch at least one edge."""

    def _standalone_origin(self, positions: Dict[str, Point], grid_width: float, compact: bool) -> Point:
        s = self.settings
        width, height = s.node_size(compact)
        gap = s.gap(compact)
        if not positions:
            return 0.0, 0.0
        _, _, _, max_y = bounding_box(positions, width, height)
        return 0.0, max_y + gap * 2

    def _place_standalone(
        self,
        nodes: Sequence[RenderNode],
        positions: Dict[str, Point],
        compact: bool,
    ) -> Dict[str, Point]:
        if not nodes:
            return {}
        s = self.settings
        width, height = s.node_size(compact)
        gap = s.gap(compact)
        cols = grid_columns(len(nodes), s.grid_aspect)
        origin = self._standalone_origin(positions, cols * (width + gap), compact)
        cells = grid_positions(len(nodes), width, height, gap, origin, s.grid_aspect)
        return {node.id: cell for node, cell in zip(nodes, cells)}
