"""
Recomputation pipeline.

One pass = connectivity BFS -> filter/build -> layout -> details -> stats,
run synchronously over an immutable snapshot. Passes share no state, so the
only ordering rule is "last write wins": ``Explorer.accept`` rejects any
view older than the newest one already accepted.
"""

import logging
import time
from typing import Dict, Optional

from pydantic import BaseModel, Field

from .analysis.connectivity import connection_depths, focused_node_details
from .analysis.filters import connection_stats, status_counts
from .analysis.policy import VisualPolicy
from .config import GraphConfig
from .core.graph import SpecGraph
from .core.types import (
    ConnectionStats,
    FocusedNodeDetails,
    GraphPayload,
    RenderEdge,
    RenderNode,
    SpecStatus,
)
from .layout import get_layout
from .view import state as transitions
from .view.builder import build_render_graph
from .view.state import ViewMode, ViewState

logger = logging.getLogger(__name__)


class GraphView(BaseModel):
    """Everything the rendering collaborator and side panels need."""
    nodes: list[RenderNode] = Field(default_factory=list)
    edges: list[RenderEdge] = Field(default_factory=list)
    details: Optional[FocusedNodeDetails] = None
    stats: ConnectionStats = Field(default_factory=ConnectionStats)
    status_counts: Dict[str, int] = Field(default_factory=dict)
    layout: str = ""
    compact: bool = False
    generation: int = 0


def compute_view(
    payload: GraphPayload,
    state: ViewState,
    config: Optional[GraphConfig] = None,
    generation: int = 0,
) -> GraphView:
    """
    Run one complete, deterministic recomputation pass.

    The payload is expected to be sanitised (see ``SpecGraph.to_payload``);
    edges with unknown endpoints are ignored either way.
    """
    config = config or GraphConfig()
    started = time.perf_counter()

    node_ids = payload.node_ids()
    depths = None
    if state.is_focused:
        depths = connection_depths(
            state.focused_id,
            payload.depends_on_edges,
            max_depth=state.max_depth,
            node_ids=node_ids,
        )

    compact = state.resolve_compact(len(payload.nodes))
    render = build_render_graph(payload, state, depths, compact, VisualPolicy(config.policy))

    strategy = get_layout(state.layout, config.layout, include_related=state.include_related)
    # The builder has already dropped standalone specs the state hides.
    laid_out = strategy.layout(render, compact=compact, show_standalone=True)

    view = GraphView(
        nodes=laid_out.nodes,
        edges=laid_out.edges,
        details=focused_node_details(payload, state.focused_id),
        stats=connection_stats(payload.nodes, payload.edges),
        status_counts=status_counts(payload.nodes),
        layout=strategy.name,
        compact=compact,
        generation=generation,
    )
    logger.debug(
        "Pass %d: %d nodes, %d edges via %s in %.1fms",
        generation, len(view.nodes), len(view.edges), strategy.name,
        (time.perf_counter() - started) * 1000,
    )
    return view


class Explorer:
    """
    Interactive session over one graph snapshot.

    Holds the sanitised payload and the current ViewState, exposes the
    focus/filter transitions, and numbers every pass so a host that
    debounces input can drop stale results.

    Example:
        ```python
        explorer = Explorer(payload, initial_focus="12")
        view = explorer.click_node("spec-007")
        ```
    """

    def __init__(
        self,
        payload: GraphPayload,
        state: Optional[ViewState] = None,
        config: Optional[GraphConfig] = None,
        initial_focus: Optional[str] = None,
    ):
        self.graph = SpecGraph.from_payload(payload)
        self.payload = self.graph.to_payload()
        self.config = config or GraphConfig()
        self.state = state or ViewState()
        self._generation = 0
        self._accepted = -1

        focus = transitions.resolve_initial_focus(self.payload, initial_focus)
        if focus is not None:
            self.state = transitions.select_spec(self.state, focus)

    def compute(self) -> GraphView:
        self._generation += 1
        return compute_view(self.payload, self.state, self.config, self._generation)

    def accept(self, view: GraphView) -> bool:
        """Accept a finished pass unless a newer one was already accepted."""
        if view.generation <= self._accepted:
            logger.debug("Discarding stale pass %d", view.generation)
            return False
        self._accepted = view.generation
        return True

    def _transition(self, new_state: ViewState) -> GraphView:
        self.state = new_state
        return self.compute()

    def click_node(self, node_id: str) -> GraphView:
        return self._transition(transitions.click_node(self.state, node_id))

    def click_canvas(self) -> GraphView:
        return self._transition(transitions.click_canvas(self.state))

    def select_spec(self, node_id: str) -> GraphView:
        return self._transition(transitions.select_spec(self.state, node_id))

    def toggle_status(self, status: SpecStatus) -> GraphView:
        return self._transition(transitions.toggle_status(self.state, status))

    def set_search(self, query: str) -> GraphView:
        return self._transition(transitions.set_search(self.state, query))

    def clear_filters(self) -> GraphView:
        return self._transition(transitions.clear_filters(self.state))

    def set_view_mode(self, mode: ViewMode) -> GraphView:
        return self._transition(transitions.set_view_mode(self.state, mode))

    def update(self, **changes) -> GraphView:
        """Apply display changes (layout, compact, show_standalone, ...)."""
        return self._transition(ViewState.model_validate({**self.state.model_dump(), **changes}))
