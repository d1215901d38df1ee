"""
Connectivity Analysis.

Breadth-first hop distances from a focused spec, plus the directional
traversals behind the focus detail panel and focus mode.

All functions are pure over the edge list they are given and never raise
for unknown IDs: unreachable specs are simply absent from the result.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from ..core.types import DependencyEdge, DepthGroup, FocusedNodeDetails, GraphPayload, SpecNode

Adjacency = Mapping[str, Sequence[str]]


def undirected_adjacency(edges: Iterable[DependencyEdge]) -> Dict[str, List[str]]:
    """Neighbour lists ignoring edge direction, in edge order."""
    adjacency: Dict[str, List[str]] = defaultdict(list)
    for edge in edges:
        if not edge.is_depends_on:
            continue
        adjacency[edge.source].append(edge.target)
        adjacency[edge.target].append(edge.source)
    return adjacency


def directional_adjacency(
    edges: Iterable[DependencyEdge],
) -> tuple[Dict[str, List[str]], Dict[str, List[str]]]:
    """
    Build (upstream, downstream) maps for dependsOn edges.

    upstream:   source -> targets (what the source depends on)
    downstream: target -> sources (what depends on the target)
    """
    upstream: Dict[str, List[str]] = defaultdict(list)
    downstream: Dict[str, List[str]] = defaultdict(list)
    for edge in edges:
        if not edge.is_depends_on:
            continue
        upstream[edge.source].append(edge.target)
        downstream[edge.target].append(edge.source)
    return upstream, downstream


def _bfs_levels(
    start_id: str,
    adjacency: Adjacency,
    max_depth: Optional[int] = None,
) -> List[List[str]]:
    """
    Level-synchronous BFS.

    Returns the frontier discovered at each depth, starting with depth 1.
    Every node at depth d is expanded before any node at depth d+1.
    """
    visited: Set[str] = {start_id}
    levels: List[List[str]] = []
    frontier = [start_id]
    depth = 0

    while frontier:
        if max_depth is not None and depth >= max_depth:
            break
        next_level: List[str] = []
        for node_id in frontier:
            for neighbor in adjacency.get(node_id, ()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    next_level.append(neighbor)
        if not next_level:
            break
        levels.append(next_level)
        frontier = next_level
        depth += 1

    return levels


def directional_depths(
    start_id: str,
    adjacency: Adjacency,
    max_depth: Optional[int] = None,
) -> Dict[str, int]:
    """Hop distances following one direction only. Start has depth 0."""
    depths = {start_id: 0}
    for depth, level in enumerate(_bfs_levels(start_id, adjacency, max_depth), start=1):
        for node_id in level:
            depths[node_id] = depth
    return depths


def connection_depths(
    start_id: str,
    edges: Iterable[DependencyEdge],
    max_depth: Optional[int] = None,
    node_ids: Optional[Set[str]] = None,
) -> Dict[str, int]:
    """
    Minimum hop count from ``start_id`` to every reachable spec.

    Edges are treated as undirected: direction does not matter for "how
    many hops away". ``max_depth=None`` means unbounded.

    When ``node_ids`` is supplied, a start ID outside it yields an empty
    map, and edges leaving the known node set are ignored.
    """
    if node_ids is not None:
        if start_id not in node_ids:
            return {}
        edges = [e for e in edges if e.source in node_ids and e.target in node_ids]
    return directional_depths(start_id, undirected_adjacency(edges), max_depth)


def transitive_ids(start_id: str, adjacency: Adjacency) -> Set[str]:
    """Everything reachable from ``start_id`` in one direction, excluding it."""
    reached: Set[str] = set()
    for level in _bfs_levels(start_id, adjacency):
        reached.update(level)
    return reached


def depth_groups(
    start_id: str,
    adjacency: Adjacency,
    nodes_by_id: Mapping[str, SpecNode],
) -> List[DepthGroup]:
    """Uncapped directional BFS grouped into buckets of increasing depth."""
    groups = []
    for depth, level in enumerate(_bfs_levels(start_id, adjacency), start=1):
        specs = [nodes_by_id[node_id] for node_id in level if node_id in nodes_by_id]
        if specs:
            groups.append(DepthGroup(depth=depth, specs=specs))
    return groups


def focused_node_details(
    payload: GraphPayload,
    focused_id: Optional[str],
) -> Optional[FocusedNodeDetails]:
    """
    Derive the detail panel for the focused spec.

    Upstream and downstream are searched independently and exhaustively.
    Returns None when nothing is focused or the focus is not in the payload.
    """
    if not focused_id:
        return None
    nodes_by_id = {n.id: n for n in payload.nodes}
    node = nodes_by_id.get(focused_id)
    if node is None:
        return None

    upstream, downstream = directional_adjacency(payload.edges)
    return FocusedNodeDetails(
        node=node,
        upstream=depth_groups(focused_id, upstream, nodes_by_id),
        downstream=depth_groups(focused_id, downstream, nodes_by_id),
    )
