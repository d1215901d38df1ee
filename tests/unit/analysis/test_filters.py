"""Unit tests for status/search filters and selector ranking."""

from specgraph.analysis.filters import (
    connection_stats,
    matches_search,
    matches_status,
    primary_ids,
    select_specs,
    status_counts,
)
from specgraph.core.types import SpecNode, SpecStatus

from tests.conftest import make_payload


class TestMatching:
    def test_empty_status_filter_matches_all(self):
        node = SpecNode(id="a", number=1, name="A", status=SpecStatus.ARCHIVED)
        assert matches_status(node, ())

    def test_status_filter(self):
        node = SpecNode(id="a", number=1, name="A", status=SpecStatus.COMPLETE)
        assert matches_status(node, (SpecStatus.COMPLETE,))
        assert not matches_status(node, (SpecStatus.PLANNED,))

    def test_search_name_number_and_tags(self):
        node = SpecNode(id="a", number=42, name="Auth Gateway", tags=["Security"])
        assert matches_search(node, "gate")
        assert matches_search(node, "42")
        assert matches_search(node, "secur")
        assert matches_search(node, "  ")
        assert not matches_search(node, "billing")

    def test_primary_ids_keeps_payload_order(self, diamond_payload):
        ids = primary_ids(diamond_payload.nodes, (SpecStatus.COMPLETE, SpecStatus.PLANNED))
        assert ids == ["B", "C", "D", "F"]

    def test_primary_ids_combines_filters(self, diamond_payload):
        assert primary_ids(diamond_payload.nodes, (SpecStatus.COMPLETE,), "data") == ["D"]


class TestSelector:
    def test_newest_first(self, diamond_payload):
        numbers = [s.number for s in select_specs(diamond_payload.nodes)]
        assert numbers == [15, 14, 13, 12, 11, 10]

    def test_query_and_limit(self, diamond_payload):
        results = select_specs(diamond_payload.nodes, "a", limit=2)
        assert [s.id for s in results] == ["F", "D"]

    def test_default_limit(self):
        payload = make_payload([(f"s{i}", i, f"Spec {i}", "planned") for i in range(20)], [])
        assert len(select_specs(payload.nodes)) == 15


class TestAggregates:
    def test_status_counts(self, diamond_payload):
        assert status_counts(diamond_payload.nodes) == {
            "in-progress": 1,
            "planned": 2,
            "complete": 2,
            "archived": 1,
        }

    def test_connection_stats_ignores_related(self, diamond_payload):
        stats = connection_stats(diamond_payload.nodes, diamond_payload.edges)
        assert stats.connected == 5
        assert stats.standalone == 1
