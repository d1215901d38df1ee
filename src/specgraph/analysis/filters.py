"""
Status and search filters, plus the small aggregates shown next to them.
"""

from collections import Counter
from typing import Collection, Dict, Iterable, List

from ..config import SELECTOR_LIMIT
from ..core.types import ConnectionStats, DependencyEdge, SpecNode, SpecStatus


def matches_status(node: SpecNode, statuses: Collection[SpecStatus]) -> bool:
    """An empty status filter matches everything."""
    return not statuses or node.status in statuses


def matches_search(node: SpecNode, query: str) -> bool:
    """
    Case-insensitive match on name, display number or any tag.

    A blank query matches everything.
    """
    q = query.strip().lower()
    if not q:
        return True
    return (
        q in node.name.lower()
        or q in str(node.number)
        or any(q in tag.lower() for tag in node.tags)
    )


def primary_ids(
    nodes: Iterable[SpecNode],
    statuses: Collection[SpecStatus],
    query: str = "",
) -> List[str]:
    """IDs of specs matching every active filter, in payload order."""
    return [
        n.id for n in nodes
        if matches_status(n, statuses) and matches_search(n, query)
    ]


def select_specs(
    nodes: Iterable[SpecNode],
    query: str = "",
    limit: int = SELECTOR_LIMIT,
) -> List[SpecNode]:
    """
    Candidates for the spec selector: newest (highest number) first.
    """
    ranked = sorted(nodes, key=lambda n: n.number, reverse=True)
    return [n for n in ranked if matches_search(n, query)][:limit]


def status_counts(nodes: Iterable[SpecNode]) -> Dict[str, int]:
    counts = Counter(n.status.value for n in nodes)
    return dict(counts)


def connected_ids(edges: Iterable[DependencyEdge]) -> set[str]:
    ids: set[str] = set()
    for edge in edges:
        if edge.is_depends_on:
            ids.add(edge.source)
            ids.add(edge.target)
    return ids


def connection_stats(nodes: Collection[SpecNode], edges: Iterable[DependencyEdge]) -> ConnectionStats:
    """Count specs with at least one dependsOn edge versus none."""
    known = {n.id for n in nodes}
    connected = connected_ids(edges) & known
    return ConnectionStats(connected=len(connected), standalone=len(known) - len(connected))
