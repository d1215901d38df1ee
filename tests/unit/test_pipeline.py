"""Unit tests for the recomputation pass and the Explorer session."""

from specgraph.core.types import SpecStatus
from specgraph.pipeline import Explorer, compute_view
from specgraph.view.state import ViewMode, ViewState

from tests.conftest import make_payload


def _ids(view):
    return {n.id for n in view.nodes}


class TestComputeView:
    def test_unfocused_pass(self, chain_payload):
        view = compute_view(chain_payload, ViewState())
        assert _ids(view) == {"A", "B", "C"}
        assert view.details is None
        assert view.stats.connected == 3
        assert view.stats.standalone == 1
        assert view.layout == "hierarchical"
        assert view.status_counts == {"planned": 2, "in-progress": 1, "complete": 1}

    def test_focus_details(self, chain_payload):
        view = compute_view(chain_payload, ViewState(focused_id="B"))
        details = view.details
        assert details.node.id == "B"
        assert [[s.id for s in g.specs] for g in details.upstream] == [["C"]]
        assert [[s.id for s in g.specs] for g in details.downstream] == [["A"]]
        depths = {n.id: n.depth for n in view.nodes}
        assert depths == {"A": 1, "B": 0, "C": 1}

    def test_show_standalone(self, chain_payload):
        view = compute_view(chain_payload, ViewState(show_standalone=True))
        assert _ids(view) == {"A", "B", "C", "D"}

    def test_force_layout(self, diamond_payload):
        view = compute_view(diamond_payload, ViewState(layout="force", include_related=True, show_standalone=True))
        assert view.layout == "force"
        assert _ids(view) == {"A", "B", "C", "D", "E", "F"}

    def test_lone_focus_in_focus_mode(self, chain_payload):
        state = ViewState(focused_id="D", view_mode=ViewMode.FOCUS)
        view = compute_view(chain_payload, state)
        assert _ids(view) == {"D"}
        assert view.edges == []

    def test_compact_auto(self):
        nodes = [(f"s{i}", i, f"Spec {i}", "planned") for i in range(31)]
        edges = [(f"s{i}", f"s{i + 1}") for i in range(30)]
        view = compute_view(make_payload(nodes, edges), ViewState())
        assert view.compact
        assert all(n.compact for n in view.nodes)

    def test_no_dangling_edges(self, diamond_payload):
        for state in (
            ViewState(),
            ViewState(status_filter=(SpecStatus.ARCHIVED,)),
            ViewState(focused_id="C", view_mode=ViewMode.FOCUS),
            ViewState(include_related=True),
        ):
            view = compute_view(diamond_payload, state)
            ids = _ids(view)
            assert all(e.source in ids and e.target in ids for e in view.edges)


class TestExplorer:
    def test_initial_focus_from_number(self, diamond_payload):
        explorer = Explorer(diamond_payload, initial_focus="12")
        assert explorer.state.focused_id == "C"
        assert explorer.compute().details.node.id == "C"

    def test_unknown_initial_focus_ignored(self, diamond_payload):
        explorer = Explorer(diamond_payload, initial_focus="999")
        assert explorer.state.focused_id is None

    def test_sanitises_payload(self):
        payload = make_payload(
            [("a", 1, "A", "planned"), ("b", 2, "B", "planned")],
            [("a", "b"), ("a", "ghost")],
        )
        explorer = Explorer(payload)
        assert len(explorer.payload.edges) == 1
        assert explorer.graph.dropped_edge_count == 1

    def test_clearing_filters_restores_totals(self, diamond_payload):
        explorer = Explorer(diamond_payload)
        full = explorer.compute()

        explorer.toggle_status(SpecStatus.ARCHIVED)
        explorer.set_search("event")
        explorer.click_node("D")
        cleared = explorer.clear_filters()

        assert explorer.state.focused_id is None
        assert _ids(cleared) == _ids(full)
        assert len(cleared.edges) == len(full.edges)
        assert cleared.stats == full.stats

    def test_click_cycle(self, chain_payload):
        explorer = Explorer(chain_payload)
        assert explorer.click_node("A").details.node.id == "A"
        assert explorer.click_node("A").details is None
        explorer.click_node("B")
        assert explorer.click_canvas().details is None

    def test_toggle_status_clears_focus(self, chain_payload):
        explorer = Explorer(chain_payload)
        explorer.select_spec("A")
        view = explorer.toggle_status(SpecStatus.COMPLETE)
        assert view.details is None
        assert explorer.state.status_filter == (SpecStatus.COMPLETE,)

    def test_focus_mode(self, diamond_payload):
        explorer = Explorer(diamond_payload)
        explorer.select_spec("B")
        view = explorer.set_view_mode(ViewMode.FOCUS)
        assert _ids(view) == {"A", "B", "D", "E"}

    def test_update(self, chain_payload):
        explorer = Explorer(chain_payload)
        view = explorer.update(layout="force", show_standalone=True)
        assert view.layout == "force"
        assert "D" in _ids(view)

    def test_last_write_wins(self, chain_payload):
        explorer = Explorer(chain_payload)
        older = explorer.compute()
        newer = explorer.click_node("A")
        assert newer.generation > older.generation
        assert explorer.accept(newer)
        assert not explorer.accept(older)
        assert not explorer.accept(newer)
