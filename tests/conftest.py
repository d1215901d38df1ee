"""Shared fixtures: small spec graphs used across the suite."""

import pytest

from specgraph.core.types import GraphPayload


def make_payload(nodes, edges):
    """
    Build a payload from compact tuples.

    nodes: (id, number, name, status[, tags])
    edges: (source, target[, type])
    """
    return GraphPayload.model_validate({
        "nodes": [
            {
                "id": n[0],
                "number": n[1],
                "name": n[2],
                "status": n[3],
                "tags": list(n[4]) if len(n) > 4 else [],
            }
            for n in nodes
        ],
        "edges": [
            {"source": e[0], "target": e[1], "type": e[2] if len(e) > 2 else "dependsOn"}
            for e in edges
        ],
    })


@pytest.fixture
def chain_payload():
    """A depends on B, B depends on C, D stands alone."""
    return make_payload(
        [
            ("A", 1, "Alpha", "planned", ["api"]),
            ("B", 2, "Beta", "in-progress"),
            ("C", 3, "Gamma", "complete"),
            ("D", 4, "Delta", "planned", ["docs"]),
        ],
        [("A", "B"), ("B", "C")],
    )


@pytest.fixture
def diamond_payload():
    """
    A -> B -> D, A -> C -> D, D -> E, plus a related link and a loner.
    """
    return make_payload(
        [
            ("A", 10, "Auth gateway", "in-progress"),
            ("B", 11, "Billing", "planned"),
            ("C", 12, "Catalog", "complete"),
            ("D", 13, "Database layer", "complete"),
            ("E", 14, "Event bus", "archived"),
            ("F", 15, "Feature flags", "planned"),
        ],
        [
            ("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("D", "E"),
            ("F", "A", "related"),
        ],
    )
