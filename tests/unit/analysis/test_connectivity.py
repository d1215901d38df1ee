"""Unit tests for BFS connectivity and focus details."""

from specgraph.analysis.connectivity import (
    connection_depths,
    directional_adjacency,
    directional_depths,
    focused_node_details,
    transitive_ids,
    undirected_adjacency,
)

from tests.conftest import make_payload


class TestConnectionDepths:
    def test_chain_from_a(self, chain_payload):
        depths = connection_depths("A", chain_payload.edges)
        assert depths == {"A": 0, "B": 1, "C": 2}
        assert "D" not in depths

    def test_direction_is_ignored(self, chain_payload):
        assert connection_depths("C", chain_payload.edges) == {"C": 0, "B": 1, "A": 2}

    def test_max_depth(self, chain_payload):
        assert connection_depths("A", chain_payload.edges, max_depth=1) == {"A": 0, "B": 1}
        assert connection_depths("A", chain_payload.edges, max_depth=0) == {"A": 0}

    def test_absent_focus_yields_empty_map(self, chain_payload):
        depths = connection_depths("ghost", chain_payload.edges, node_ids=chain_payload.node_ids())
        assert depths == {}

    def test_related_edges_ignored(self, diamond_payload):
        depths = connection_depths("F", diamond_payload.edges)
        assert depths == {"F": 0}

    def test_depths_are_shortest_distances(self, diamond_payload):
        edges = diamond_payload.edges
        adjacency = undirected_adjacency(edges)
        for start in diamond_payload.node_ids():
            depths = connection_depths(start, edges)
            assert depths[start] == 0
            for node_id, depth in depths.items():
                if node_id == start:
                    continue
                reached = [depths[n] for n in adjacency[node_id] if n in depths]
                assert depth == 1 + min(reached)

    def test_diamond_depths(self, diamond_payload):
        depths = connection_depths("A", diamond_payload.edges)
        assert depths == {"A": 0, "B": 1, "C": 1, "D": 2, "E": 3}


class TestDirectional:
    def test_adjacency_directions(self, chain_payload):
        upstream, downstream = directional_adjacency(chain_payload.edges)
        assert upstream["A"] == ["B"]
        assert downstream["B"] == ["A"]

    def test_directional_depths(self, diamond_payload):
        upstream, downstream = directional_adjacency(diamond_payload.edges)
        assert directional_depths("D", upstream) == {"D": 0, "E": 1}
        assert directional_depths("D", downstream) == {"D": 0, "B": 1, "C": 1, "A": 2}

    def test_transitive_ids_excludes_start(self, diamond_payload):
        upstream, _ = directional_adjacency(diamond_payload.edges)
        assert transitive_ids("A", upstream) == {"B", "C", "D", "E"}

    def test_transitive_ids_handles_cycles(self):
        payload = make_payload(
            [("A", 1, "A", "planned"), ("B", 2, "B", "planned")],
            [("A", "B"), ("B", "A")],
        )
        upstream, _ = directional_adjacency(payload.edges)
        assert transitive_ids("A", upstream) == {"B"}


class TestFocusedNodeDetails:
    def test_middle_of_chain(self, chain_payload):
        details = focused_node_details(chain_payload, "B")
        assert details.node.id == "B"
        # B depends on C; A depends on B
        assert [(g.depth, [s.id for s in g.specs]) for g in details.upstream] == [(1, ["C"])]
        assert [(g.depth, [s.id for s in g.specs]) for g in details.downstream] == [(1, ["A"])]

    def test_groups_by_increasing_depth(self, diamond_payload):
        details = focused_node_details(diamond_payload, "E")
        assert details.upstream == []
        groups = [(g.depth, sorted(s.id for s in g.specs)) for g in details.downstream]
        assert groups == [(1, ["D"]), (2, ["B", "C"]), (3, ["A"])]
        assert details.downstream_count == 4

    def test_no_focus(self, chain_payload):
        assert focused_node_details(chain_payload, None) is None

    def test_absent_focus(self, chain_payload):
        assert focused_node_details(chain_payload, "ghost") is None
