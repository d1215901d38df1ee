"""
Graph Builder.

Turns the raw snapshot plus view state into the node/edge records the
rendering collaborator draws. Positions are left at the origin; a layout
strategy fills them in afterwards.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Set

from ..analysis.connectivity import directional_adjacency, transitive_ids
from ..analysis.critical_path import expand_critical_path
from ..analysis.filters import connected_ids, primary_ids
from ..analysis.policy import EdgeStyle, VisualPolicy
from ..config import ELLIPSIS, LABEL_MAX_LENGTH, LABEL_TRUNCATE_AT
from ..core.types import (
    DependencyEdge,
    GraphPayload,
    RenderEdge,
    RenderGraph,
    RenderNode,
    SpecNode,
    SpecStatus,
)
from .state import ViewState

logger = logging.getLogger(__name__)


def short_label(name: str) -> str:
    if len(name) > LABEL_MAX_LENGTH:
        return name[:LABEL_TRUNCATE_AT] + ELLIPSIS
    return name


def status_badge(status: SpecStatus) -> str:
    if status == SpecStatus.IN_PROGRESS:
        return "WIP"
    return status.value[:3].upper()


def _render_node(
    node: SpecNode,
    *,
    compact: bool,
    standalone: bool,
    depth: Optional[int] = None,
    dimmed: bool = False,
    focused: bool = False,
    secondary: bool = False,
    opacity: float = 1.0,
) -> RenderNode:
    short = short_label(node.name)
    return RenderNode(
        **node.model_dump(),
        label=short if compact else node.name,
        short_label=short,
        badge=status_badge(node.status),
        depth=depth,
        dimmed=dimmed,
        focused=focused,
        secondary=secondary,
        compact=compact,
        standalone=standalone,
        opacity=opacity,
    )


def _render_edge(edge: DependencyEdge, style: EdgeStyle) -> RenderEdge:
    return RenderEdge(
        id=edge.key,
        source=edge.source,
        target=edge.target,
        type=edge.type,
        highlighted=style.highlighted,
        opacity=style.opacity,
        animated=style.animated,
        stroke_width=style.stroke_width,
    )


def _related_edges(edges: Iterable[DependencyEdge], visible: Set[str]) -> List[DependencyEdge]:
    return [
        e for e in edges
        if not e.is_depends_on and e.source in visible and e.target in visible
    ]


def build_render_graph(
    payload: GraphPayload,
    state: ViewState,
    depths: Optional[Mapping[str, int]],
    compact: bool = False,
    policy: Optional[VisualPolicy] = None,
) -> RenderGraph:
    """
    Assemble render records for one pass.

    Args:
        payload: The sanitised snapshot.
        state: Filters, focus and display flags.
        depths: Connectivity depths from the focus, or None/empty when
            nothing (valid) is focused.
        compact: Whether cards are drawn in compact form.
        policy: Depth-to-style mapping.

    Returns:
        RenderGraph with every position at the origin.
    """
    policy = policy or VisualPolicy()
    # An empty map means the focus is not in the snapshot: treat as unfocused.
    active_depths = depths if state.focused_id and depths else None

    if state.in_focus_mode and active_depths is not None:
        return _build_focus_mode(payload, state, active_depths, compact, policy)
    return _build_graph_mode(payload, state, active_depths, compact, policy)


def _build_graph_mode(
    payload: GraphPayload,
    state: ViewState,
    depths: Optional[Mapping[str, int]],
    compact: bool,
    policy: VisualPolicy,
) -> RenderGraph:
    node_ids = payload.node_ids()
    primary = primary_ids(payload.nodes, state.status_filter, state.search)
    path = expand_critical_path(primary, payload.edges, node_ids)

    with_deps = connected_ids(path.edges)
    visible: Dict[str, SpecNode] = {
        n.id: n for n in payload.nodes
        if n.id in path.ids and (state.show_standalone or n.id in with_deps)
    }

    nodes = []
    for node in visible.values():
        depth = depths.get(node.id) if depths is not None else None
        dimmed = policy.is_dimmed(node.id, depths)
        secondary = path.is_secondary(node.id)
        nodes.append(_render_node(
            node,
            compact=compact,
            standalone=node.id not in with_deps,
            depth=depth,
            dimmed=dimmed,
            focused=node.id == state.focused_id,
            secondary=secondary,
            opacity=policy.node_opacity(depth, dimmed, secondary),
        ))

    edges = [
        _render_edge(e, policy.edge_style(e.source, e.target, depths))
        for e in path.edges
        if e.source in visible and e.target in visible
    ]
    if state.include_related:
        edges.extend(
            _render_edge(e, policy.edge_style(e.source, e.target, depths))
            for e in _related_edges(payload.edges, set(visible))
        )

    logger.debug(
        "Built graph view: %d primary, %d secondary, %d visible, %d edges",
        len(path.primary_ids), len(path.secondary_ids), len(nodes), len(edges),
    )
    return RenderGraph(nodes=nodes, edges=edges)


def _build_focus_mode(
    payload: GraphPayload,
    state: ViewState,
    depths: Mapping[str, int],
    compact: bool,
    policy: VisualPolicy,
) -> RenderGraph:
    """Only the focus and its transitive upstream/downstream chains."""
    focused_id = state.focused_id
    upstream, downstream = directional_adjacency(payload.edges)
    visible = {focused_id} | transitive_ids(focused_id, upstream) | transitive_ids(focused_id, downstream)

    depends_on = [
        e for e in payload.depends_on_edges
        if e.source in visible and e.target in visible
    ]
    with_deps = connected_ids(depends_on)

    nodes = []
    for node in payload.nodes:
        if node.id not in visible:
            continue
        depth = 0 if node.id == focused_id else depths.get(node.id)
        nodes.append(_render_node(
            node,
            compact=compact,
            standalone=node.id not in with_deps,
            depth=depth,
            focused=node.id == focused_id,
            opacity=policy.node_opacity(depth, False, False),
        ))

    edges = [
        _render_edge(e, policy.focus_mode_edge_style(e.source, e.target, focused_id))
        for e in depends_on
    ]
    logger.debug("Built focus view around %s: %d nodes", focused_id, len(nodes))
    return RenderGraph(nodes=nodes, edges=edges)
