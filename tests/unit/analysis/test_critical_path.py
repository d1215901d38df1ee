"""Unit tests for critical path expansion."""

from specgraph.analysis.critical_path import expand_critical_path


class TestExpandCriticalPath:
    def test_chain_expansion(self, chain_payload):
        path = expand_critical_path(["A"], chain_payload.edges)
        assert path.ids == {"A", "B", "C"}
        assert path.primary_ids == {"A"}
        assert path.secondary_ids == {"B", "C"}
        assert path.is_secondary("B")
        assert not path.is_secondary("A")
        assert not path.is_secondary("D")

    def test_expands_in_both_directions(self, diamond_payload):
        path = expand_critical_path(["D"], diamond_payload.edges)
        assert path.ids == {"A", "B", "C", "D", "E"}

    def test_isolated_primary(self, chain_payload):
        path = expand_critical_path(["D"], chain_payload.edges)
        assert path.ids == {"D"}
        assert path.edges == []

    def test_related_edges_do_not_expand(self, diamond_payload):
        path = expand_critical_path(["F"], diamond_payload.edges)
        assert path.ids == {"F"}

    def test_idempotent(self, diamond_payload):
        first = expand_critical_path(["B"], diamond_payload.edges)
        second = expand_critical_path(first.ids, diamond_payload.edges)
        assert second.ids == first.ids

    def test_no_dangling_edges(self, diamond_payload):
        path = expand_critical_path(["E", "F"], diamond_payload.edges)
        for edge in path.edges:
            assert edge.source in path.ids
            assert edge.target in path.ids
            assert edge.is_depends_on

    def test_unknown_ids_ignored_with_universe(self, chain_payload):
        path = expand_critical_path(["ghost", "C"], chain_payload.edges, chain_payload.node_ids())
        assert path.ids == {"A", "B", "C"}
        assert "ghost" not in path.primary_ids

    def test_empty_primary(self, chain_payload):
        path = expand_critical_path([], chain_payload.edges)
        assert path.ids == set()
