"""
Critical-Path Filter.

Filtering by status or search alone would sever dependency chains that
cross a filtered-out spec. The filter here grows the primary selection by
every spec transitively connected to it through dependsOn edges, in either
direction and without a hop limit.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from .connectivity import undirected_adjacency
from ..core.types import DependencyEdge


@dataclass(frozen=True)
class CriticalPath:
    """
    Result of expanding a primary selection.

    Attributes:
        ids: Primary IDs plus everything connected to them.
        primary_ids: The selection that matched the active filters.
        edges: dependsOn edges with both endpoints in ``ids``.
    """

    ids: Set[str] = field(default_factory=set)
    primary_ids: Set[str] = field(default_factory=set)
    edges: List[DependencyEdge] = field(default_factory=list)

    @property
    def secondary_ids(self) -> Set[str]:
        """IDs pulled in only to keep a chain intact."""
        return self.ids - self.primary_ids

    def is_secondary(self, node_id: str) -> bool:
        return node_id in self.ids and node_id not in self.primary_ids


def expand_critical_path(
    primary_ids: Iterable[str],
    edges: Iterable[DependencyEdge],
    node_ids: Optional[Set[str]] = None,
) -> CriticalPath:
    """
    Multi-source worklist over dependsOn edges in both directions.

    A spec is added the first time it is discovered and then used to
    continue the search. When ``node_ids`` is given, primary IDs and edges
    outside it are ignored.
    """
    depends_on = [e for e in edges if e.is_depends_on]
    if node_ids is not None:
        depends_on = [e for e in depends_on if e.source in node_ids and e.target in node_ids]
        primary = [p for p in primary_ids if p in node_ids]
    else:
        primary = list(primary_ids)

    adjacency = undirected_adjacency(depends_on)
    expanded: Set[str] = set(primary)
    queue = deque(primary)

    while queue:
        node_id = queue.popleft()
        for neighbor in adjacency.get(node_id, ()):
            if neighbor not in expanded:
                expanded.add(neighbor)
                queue.append(neighbor)

    kept = [e for e in depends_on if e.source in expanded and e.target in expanded]
    return CriticalPath(ids=expanded, primary_ids=set(primary), edges=kept)
