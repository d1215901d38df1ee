"""
Hierarchical layout.

A layered (Sugiyama-style) layout with left-to-right dependency flow:

1. Break cycles by reversing DFS back-edges (for ranking only).
2. Rank by longest path. Specs that depend on nothing take the rightmost
   rank, so a dependent always sits left of its dependencies.
3. Split long edges with dummy nodes and reduce crossings with alternating
   barycenter sweeps, keeping the best ordering seen.
4. Assign vertical coordinates by pulling each spec towards the median of
   its neighbours while keeping the minimum separation within a rank.

Everything is deterministic: ties fall back to input order.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, List, Sequence, Set, Tuple

import rustworkx as rx

from ..core.types import RenderEdge, RenderNode
from .base import LayoutStrategy, Point, bounding_box, normalize

logger = logging.getLogger(__name__)

COORDINATE_PASSES = 4


def _acyclic_edges(graph: rx.PyDiGraph) -> List[Tuple[int, int]]:
    """Edge list with every DFS back-edge reversed and duplicates removed."""
    state: Dict[int, int] = {}  # 1 = on stack, 2 = finished
    back: Set[Tuple[int, int]] = set()

    for root in graph.node_indices():
        if root in state:
            continue
        state[root] = 1
        stack = [(root, iter(sorted(graph.successor_indices(root))))]
        while stack:
            node, successors = stack[-1]
            descended = False
            for succ in successors:
                seen = state.get(succ)
                if seen is None:
                    state[succ] = 1
                    stack.append((succ, iter(sorted(graph.successor_indices(succ)))))
                    descended = True
                    break
                if seen == 1:
                    back.add((node, succ))
            if not descended:
                state[node] = 2
                stack.pop()

    edges: List[Tuple[int, int]] = []
    seen_edges: Set[Tuple[int, int]] = set()
    for u, v in graph.edge_list():
        edge = (v, u) if (u, v) in back else (u, v)
        if edge not in seen_edges:
            seen_edges.add(edge)
            edges.append(edge)
    if back:
        logger.debug("Reversed %d edge(s) to break dependency cycles", len(back))
    return edges


def _longest_path_ranks(count: int, edges: List[Tuple[int, int]]) -> List[int]:
    """Sinks get the highest rank; every edge spans at least one rank."""
    dag = rx.PyDiGraph()
    dag.add_nodes_from(range(count))
    dag.add_edges_from_no_data(edges)

    rank: Dict[int, int] = {}
    for node in reversed(list(rx.topological_sort(dag))):
        successors = dag.successor_indices(node)
        rank[node] = min(rank[s] for s in successors) - 1 if len(successors) else 0

    lowest = min(rank.values())
    return [rank[i] - lowest for i in range(count)]


def _component_order(graph: rx.PyDiGraph) -> List[int]:
    """Component number per node, components numbered by first appearance."""
    components = sorted(rx.weakly_connected_components(graph), key=min)
    order = [0] * graph.num_nodes()
    for number, component in enumerate(components):
        for idx in component:
            order[idx] = number
    return order


def _median(values: List[float]) -> float:
    mid = len(values) // 2
    if len(values) % 2:
        return values[mid]
    return (values[mid - 1] + values[mid]) / 2


def _crossings(upper: List[int], lower: List[int], succ: Dict[int, List[int]]) -> int:
    lower_pos = {item: i for i, item in enumerate(lower)}
    segments = [
        (i, lower_pos[s])
        for i, item in enumerate(upper)
        for s in succ[item]
    ]
    count = 0
    for a in range(len(segments)):
        ua, la = segments[a]
        for b in range(a + 1, len(segments)):
            ub, lb = segments[b]
            if (ua - ub) * (la - lb) < 0:
                count += 1
    return count


def _reorder(layer: List[int], fixed: List[int], neighbors: Dict[int, List[int]]) -> List[int]:
    """Sort a layer by the barycenter of its neighbours in the fixed layer."""
    pos = {item: i for i, item in enumerate(fixed)}
    keyed = []
    for i, item in enumerate(layer):
        linked = [pos[n] for n in neighbors[item] if n in pos]
        bary = sum(linked) / len(linked) if linked else float(i)
        keyed.append((bary, i, item))
    return [item for _, _, item in sorted(keyed)]


def _pack(desired: List[float], gaps: List[float]) -> List[float]:
    """
    Closest positions to ``desired`` keeping consecutive distances >= gaps.

    gaps[i] is the minimum distance between items i-1 and i. The average of
    the downward-pushed and upward-pushed solutions satisfies both.
    """
    n = len(desired)
    forward = list(desired)
    for i in range(1, n):
        forward[i] = max(desired[i], forward[i - 1] + gaps[i])
    backward = list(desired)
    for i in range(n - 2, -1, -1):
        backward[i] = min(desired[i], backward[i + 1] - gaps[i + 1])
    return [(f + b) / 2 for f, b in zip(forward, backward)]


class HierarchicalLayout(LayoutStrategy):
    """
    Ranked left-to-right layout for dependency flow.

    Connected specs are normalised to start at (0, 0); standalone specs go
    into a grid below, centred when the hierarchy is wider than the grid.
    """

    name = "hierarchical"

    def _layout_connected(
        self,
        nodes: Sequence[RenderNode],
        edges: Sequence[RenderEdge],
        compact: bool,
    ) -> Dict[str, Point]:
        s = self.settings
        width, height = s.node_size(compact)
        rank_sep = s.compact_rank_sep if compact else s.rank_sep
        node_sep = s.compact_node_sep if compact else s.node_sep

        graph = rx.PyDiGraph(multigraph=False)
        index = {node.id: graph.add_node(node.id) for node in nodes}
        for edge in edges:
            u, v = index.get(edge.source), index.get(edge.target)
            if u is None or v is None or u == v:
                continue
            graph.add_edge(u, v, None)

        count = graph.num_nodes()
        dag_edges = _acyclic_edges(graph)
        ranks = _longest_path_ranks(count, dag_edges)
        component = _component_order(graph)

        # Proper layering: long edges become chains of dummy items.
        succ: Dict[int, List[int]] = defaultdict(list)
        pred: Dict[int, List[int]] = defaultdict(list)
        sizes: Dict[int, float] = {i: height for i in range(count)}
        item_rank: Dict[int, int] = {i: ranks[i] for i in range(count)}
        item_component: Dict[int, int] = {i: component[i] for i in range(count)}
        next_item = count
        for u, v in dag_edges:
            prev = u
            for r in range(ranks[u] + 1, ranks[v]):
                dummy = next_item
                next_item += 1
                sizes[dummy] = 0.0
                item_rank[dummy] = r
                item_component[dummy] = component[u]
                succ[prev].append(dummy)
                pred[dummy].append(prev)
                prev = dummy
            succ[prev].append(v)
            pred[v].append(prev)

        layer_count = max(ranks) + 1 if ranks else 0
        layers: List[List[int]] = [[] for _ in range(layer_count)]
        for item in sorted(item_rank, key=lambda i: (item_component[i], i)):
            layers[item_rank[item]].append(item)

        layers = self._order_layers(layers, succ, pred)
        centers = self._assign_coordinates(layers, succ, pred, sizes, node_sep)

        positions = {
            node.id: (ranks[index[node.id]] * (width + rank_sep), centers[index[node.id]] - height / 2)
            for node in nodes
        }
        logger.debug(
            "Hierarchical layout: %d specs, %d ranks, %d dummy nodes",
            count, layer_count, next_item - count,
        )
        return normalize(positions)

    def _order_layers(
        self,
        layers: List[List[int]],
        succ: Dict[int, List[int]],
        pred: Dict[int, List[int]],
    ) -> List[List[int]]:
        def total(candidate: List[List[int]]) -> int:
            return sum(
                _crossings(candidate[r], candidate[r + 1], succ)
                for r in range(len(candidate) - 1)
            )

        best = [list(layer) for layer in layers]
        best_crossings = total(best)
        current = [list(layer) for layer in layers]

        for sweep in range(self.settings.ordering_sweeps):
            if best_crossings == 0:
                break
            if sweep % 2 == 0:
                for r in range(1, len(current)):
                    current[r] = _reorder(current[r], current[r - 1], pred)
            else:
                for r in range(len(current) - 2, -1, -1):
                    current[r] = _reorder(current[r], current[r + 1], succ)
            crossings = total(current)
            if crossings < best_crossings:
                best = [list(layer) for layer in current]
                best_crossings = crossings

        return best

    def _assign_coordinates(
        self,
        layers: List[List[int]],
        succ: Dict[int, List[int]],
        pred: Dict[int, List[int]],
        sizes: Dict[int, float],
        node_sep: float,
    ) -> Dict[int, float]:
        centers: Dict[int, float] = {}
        for layer in layers:
            y = 0.0
            for item in layer:
                centers[item] = y + sizes[item] / 2
                y += sizes[item] + node_sep

        for p in range(COORDINATE_PASSES):
            downward = p % 2 == 0
            order = range(1, len(layers)) if downward else range(len(layers) - 2, -1, -1)
            neighbors = pred if downward else succ
            for r in order:
                layer = layers[r]
                if not layer:
                    continue
                desired = []
                for item in layer:
                    linked = sorted(centers[n] for n in neighbors[item])
                    desired.append(_median(linked) if linked else centers[item])
                gaps = [0.0] + [
                    sizes[layer[i - 1]] / 2 + node_sep + sizes[layer[i]] / 2
                    for i in range(1, len(layer))
                ]
                for item, y in zip(layer, _pack(desired, gaps)):
                    centers[item] = y

        return centers

    def _standalone_origin(self, positions: Dict[str, Point], grid_width: float, compact: bool) -> Point:
        if not positions:
            return 0.0, 0.0
        width, height = self.settings.node_size(compact)
        gap = self.settings.gap(compact)
        min_x, min_y, max_x, max_y = bounding_box(positions, width, height)
        graph_width = max_x - min_x
        start_x = math.floor((graph_width - grid_width) / 2) if graph_width > grid_width else 0.0
        return float(start_x), (max_y - min_y) + gap * 2

