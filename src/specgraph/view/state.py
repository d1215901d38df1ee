"""
View state and the focus/selection state machine.

The interactive shell owns a ``ViewState`` value and re-runs the pipeline
whenever it changes. Transitions are plain functions that return a new
state; nothing here holds mutable globals.

States:
    Unfocused  --click node-->        Focused(node)
    Focused(a) --click other node b--> Focused(b)
    Focused(a) --click a / canvas-->   Unfocused
    Focused(*) --toggle status-->      Unfocused
"""

from enum import StrEnum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from ..config import COMPACT_THRESHOLD
from ..core.types import GraphPayload, SpecStatus


class ViewMode(StrEnum):
    """Which subgraph is shown."""
    GRAPH = "graph"
    FOCUS = "focus"


class LayoutName(StrEnum):
    HIERARCHICAL = "hierarchical"
    FORCE = "force"


class ViewState(BaseModel):
    """
    Everything a recomputation pass needs besides the graph itself.

    ``compact=None`` lets the pipeline pick compact cards for large graphs.
    ``max_depth=None`` leaves the focus BFS unbounded.
    """
    status_filter: Tuple[SpecStatus, ...] = ()
    search: str = ""
    focused_id: Optional[str] = None
    view_mode: ViewMode = ViewMode.GRAPH
    layout: LayoutName = LayoutName.HIERARCHICAL
    include_related: bool = False
    compact: Optional[bool] = None
    show_standalone: bool = False
    max_depth: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("max_depth")
    @classmethod
    def _non_negative_depth(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            return None
        return value

    @property
    def is_focused(self) -> bool:
        return self.focused_id is not None

    @property
    def in_focus_mode(self) -> bool:
        return self.view_mode == ViewMode.FOCUS and self.is_focused

    def resolve_compact(self, node_count: int) -> bool:
        if self.compact is not None:
            return self.compact
        return node_count > COMPACT_THRESHOLD

    def with_focus(self, node_id: Optional[str]) -> "ViewState":
        update = {"focused_id": node_id}
        if node_id is None and self.view_mode == ViewMode.FOCUS:
            update["view_mode"] = ViewMode.GRAPH
        return self.model_copy(update=update)


def click_node(state: ViewState, node_id: str) -> ViewState:
    """Focus a spec, or unfocus it when it is already the focus."""
    if state.focused_id == node_id:
        return state.with_focus(None)
    return state.with_focus(node_id)


def click_canvas(state: ViewState) -> ViewState:
    return state.with_focus(None)


def select_spec(state: ViewState, node_id: str) -> ViewState:
    """Focus from the spec selector: never toggles."""
    return state.with_focus(node_id)


def toggle_status(state: ViewState, status: SpecStatus) -> ViewState:
    """
    Add or remove a status from the filter.

    Clears the focus, since its depths may reference filtered-out specs.
    """
    status = SpecStatus(status)
    if status in state.status_filter:
        statuses = tuple(s for s in state.status_filter if s != status)
    else:
        statuses = (*state.status_filter, status)
    return state.model_copy(update={"status_filter": statuses}).with_focus(None)


def set_search(state: ViewState, query: str) -> ViewState:
    return state.model_copy(update={"search": query})


def clear_filters(state: ViewState) -> ViewState:
    return state.model_copy(update={"status_filter": (), "search": ""}).with_focus(None)


def set_view_mode(state: ViewState, mode: ViewMode) -> ViewState:
    """Focus mode needs a focus; without one the view stays on the graph."""
    mode = ViewMode(mode)
    if mode == ViewMode.FOCUS and state.focused_id is None:
        return state.model_copy(update={"view_mode": ViewMode.GRAPH})
    return state.model_copy(update={"view_mode": mode})


def resolve_initial_focus(payload: GraphPayload, spec_ref: Optional[str]) -> Optional[str]:
    """
    Map a shareable identifier (ID or display number) to a spec ID.

    An exact ID wins over a display number, matching ``SpecGraph.find_nodes``.
    """
    if not spec_ref:
        return None
    ids = payload.node_ids()
    if spec_ref in ids:
        return spec_ref
    ref = spec_ref.strip().lstrip("#")
    if ref in ids:
        return ref
    if ref.isdigit():
        for node in payload.nodes:
            if node.number == int(ref):
                return node.id
    return None
