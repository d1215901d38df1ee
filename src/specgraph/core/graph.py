"""
Spec graph backed by rustworkx.

It manages:
- The bimap between string spec IDs and rustworkx integer indices.
- Sanitising raw payloads (malformed, duplicate and self-referencing edges
  are dropped, never fatal).
- Cycle detection and connection statistics.

Only dependsOn edges are loaded into the rustworkx graph; related edges are
kept on the side because they are cosmetic to every traversal.
"""

import logging
from typing import Any, Dict, Iterator, List, Set

import rustworkx as rx

from .types import ConnectionStats, DependencyEdge, GraphPayload, SpecNode

logger = logging.getLogger(__name__)


class SpecGraph:
    """
    Immutable-after-load dependency graph over specs.

    Features:
    - O(1) spec lookup via ID-to-Index bimap
    - Cycle listing for dependency validation
    """

    def __init__(self):
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx: Dict[str, int] = {}
        self._idx_to_id: Dict[int, str] = {}
        self._edges: List[DependencyEdge] = []
        self._related: List[DependencyEdge] = []
        self._dropped = 0

    @classmethod
    def from_payload(cls, payload: GraphPayload) -> "SpecGraph":
        graph = cls()
        for node in payload.nodes:
            graph.add_node(node)
        for edge in payload.edges:
            graph.add_edge(edge)
        if graph._dropped:
            logger.debug("Dropped %d malformed edge(s) from payload", graph._dropped)
        return graph

    def add_node(self, node: SpecNode) -> None:
        """Add a spec. A duplicate ID keeps the first occurrence."""
        if node.id in self._id_to_idx:
            logger.warning("Duplicate spec id %r ignored", node.id)
            return
        idx = self._graph.add_node(node)
        self._id_to_idx[node.id] = idx
        self._idx_to_id[idx] = node.id

    def add_edge(self, edge: DependencyEdge) -> bool:
        """
        Add an edge if both endpoints exist.

        Returns False (and records the drop) for edges referencing unknown
        specs, self references and duplicates.
        """
        if edge.source not in self._id_to_idx or edge.target not in self._id_to_idx:
            logger.debug("Dropping edge %s: unknown endpoint", edge.key)
            self._dropped += 1
            return False
        if edge.source == edge.target:
            logger.debug("Dropping self-referencing edge %s", edge.key)
            self._dropped += 1
            return False

        if not edge.is_depends_on:
            if edge not in self._related:
                self._related.append(edge)
            return True

        u = self._id_to_idx[edge.source]
        v = self._id_to_idx[edge.target]
        if self._graph.has_edge(u, v):
            self._dropped += 1
            return False
        self._graph.add_edge(u, v, edge)
        self._edges.append(edge)
        return True

    def find_nodes(self, pattern: str) -> List[str]:
        """
        Find specs matching a reference.

        Exact ID or display number wins; otherwise case-insensitive
        substring matches on ID and name.
        """
        if pattern in self._id_to_idx:
            return [pattern]
        exact = [n.id for n in self.iter_nodes() if str(n.number) == pattern.lstrip("#")]
        if exact:
            return exact
        pattern_lower = pattern.lower()
        return [
            n.id for n in self.iter_nodes()
            if pattern_lower in n.id.lower() or pattern_lower in n.name.lower()
        ]

    def connected_ids(self) -> Set[str]:
        """IDs touching at least one dependsOn edge."""
        return {
            self._idx_to_id[idx]
            for idx in self._graph.node_indices()
            if self._graph.in_degree(idx) or self._graph.out_degree(idx)
        }

    def is_acyclic(self) -> bool:
        return rx.is_directed_acyclic_graph(self._graph)

    def cycles(self) -> List[List[str]]:
        """All simple dependency cycles, each as a list of spec IDs."""
        if self.is_acyclic():
            return []
        return [
            [self._idx_to_id[idx] for idx in cycle]
            for cycle in rx.simple_cycles(self._graph)
        ]

    def iter_nodes(self) -> Iterator[SpecNode]:
        return (self._graph[idx] for idx in self._graph.node_indices())

    def iter_edges(self) -> Iterator[DependencyEdge]:
        return iter(self._edges)

    @property
    def related_edges(self) -> List[DependencyEdge]:
        return list(self._related)

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    @property
    def dropped_edge_count(self) -> int:
        return self._dropped

    def connection_stats(self) -> ConnectionStats:
        connected = len(self.connected_ids())
        return ConnectionStats(connected=connected, standalone=self.node_count - connected)

    def to_payload(self) -> GraphPayload:
        """The sanitised snapshot: valid edges only, dependsOn first."""
        return GraphPayload(
            nodes=list(self.iter_nodes()),
            edges=[*self._edges, *self._related],
        )

    def get_stats(self) -> Dict[str, Any]:
        stats = self.connection_stats()
        return {
            "total_nodes": self.node_count,
            "depends_on_edges": self.edge_count,
            "related_edges": len(self._related),
            "dropped_edges": self._dropped,
            "connected": stats.connected,
            "standalone": stats.standalone,
            "acyclic": self.is_acyclic(),
        }
