"""
Force-directed layout.

A synchronous velocity-Verlet simulation in the style of d3-force, used for
network exploration where related edges may be shown next to dependsOn:

- link:    springs, shorter and stiffer for dependsOn than for related
- charge:  pairwise repulsion, scaled up for high-degree specs
- center:  translates the layout so its mean sits on the center point
- collide: keeps card centres at least one card width apart

The simulation runs a fixed number of steps (fewer for large graphs) with
no randomness, so identical input produces identical positions.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..config import LayoutSettings
from ..core.types import EdgeType, RenderEdge, RenderGraph, RenderNode
from .base import LayoutStrategy, Point, bounding_box, normalize

logger = logging.getLogger(__name__)

# Minimum squared distance used by the charge force
DISTANCE_MIN_SQ = 1.0


@dataclass
class _Link:
    source: int
    target: int
    distance: float
    strength: float
    bias: float = 0.5


def _jiggle(i: int) -> float:
    """Deterministic nudge for coincident nodes."""
    return ((i * 7919) % 97 + 1) * 1e-6


class ForceLayout(LayoutStrategy):
    """
    Physical simulation for general network views.

    Args:
        settings: Layout tuning.
        include_related: Lay out by related edges as well as dependsOn.
    """

    name = "force"

    def __init__(self, settings: Optional[LayoutSettings] = None, include_related: bool = False):
        super().__init__(settings)
        self.include_related = include_related

    def step_count(self, node_count: int) -> int:
        s = self.settings
        if node_count <= s.force_size_threshold:
            return s.force_steps
        scaled = int(s.force_steps * s.force_size_threshold / node_count)
        return max(s.force_min_steps, scaled)

    def _layout_edges(self, graph: RenderGraph) -> List[RenderEdge]:
        if not self.include_related:
            return super()._layout_edges(graph)
        ids = {n.id for n in graph.nodes}
        return [e for e in graph.edges if e.source in ids and e.target in ids and e.source != e.target]

    def _layout_connected(
        self,
        nodes: Sequence[RenderNode],
        edges: Sequence[RenderEdge],
        compact: bool,
    ) -> Dict[str, Point]:
        s = self.settings
        n = len(nodes)
        width, _ = s.node_size(compact)
        index = {node.id: i for i, node in enumerate(nodes)}

        # Initial placement on a circle around the center point
        xs = [
            math.cos(2 * math.pi * i / n) * s.force_initial_radius + s.force_center_x
            for i in range(n)
        ]
        ys = [
            math.sin(2 * math.pi * i / n) * s.force_initial_radius + s.force_center_y
            for i in range(n)
        ]
        vxs = [0.0] * n
        vys = [0.0] * n

        links = self._build_links(edges, index, compact)
        degree = [0] * n
        for link in links:
            degree[link.source] += 1
            degree[link.target] += 1
        for link in links:
            total = degree[link.source] + degree[link.target]
            link.bias = degree[link.source] / total if total else 0.5

        charge = s.compact_force_charge if compact else s.force_charge
        strengths = [charge * (1 + math.log1p(d)) for d in degree]
        collide_factor = s.compact_force_collide_factor if compact else s.force_collide_factor
        radius = width * collide_factor / 2

        steps = self.step_count(n)
        alpha = 1.0
        alpha_decay = 1 - s.force_alpha_min ** (1 / steps)
        keep = 1 - s.force_velocity_decay

        for _ in range(steps):
            alpha += (0.0 - alpha) * alpha_decay
            self._apply_links(links, xs, ys, vxs, vys, alpha)
            self._apply_charge(strengths, xs, ys, vxs, vys, alpha)
            self._apply_center(xs, ys)
            self._apply_collide(radius, xs, ys, vxs, vys)
            for i in range(n):
                vxs[i] *= keep
                vys[i] *= keep
                xs[i] += vxs[i]
                ys[i] += vys[i]

        self._separate(radius * 2, xs, ys)

        logger.debug("Force layout: %d specs, %d links, %d steps", n, len(links), steps)
        positions = {node.id: (xs[i], ys[i]) for i, node in enumerate(nodes)}
        return normalize(positions, s.force_origin_offset)

    def _build_links(self, edges: Sequence[RenderEdge], index: Dict[str, int], compact: bool) -> List[_Link]:
        s = self.settings
        distance = s.compact_force_link_distance if compact else s.force_link_distance
        links = []
        for edge in edges:
            u, v = index.get(edge.source), index.get(edge.target)
            if u is None or v is None or u == v:
                continue
            if edge.type == EdgeType.RELATED:
                links.append(_Link(u, v, distance * s.related_distance_factor, s.related_link_strength))
            else:
                links.append(_Link(u, v, distance, s.force_link_strength))
        return links

    @staticmethod
    def _apply_links(links, xs, ys, vxs, vys, alpha):
        for link in links:
            src, tgt = link.source, link.target
            dx = xs[tgt] + vxs[tgt] - xs[src] - vxs[src] or _jiggle(tgt)
            dy = ys[tgt] + vys[tgt] - ys[src] - vys[src] or _jiggle(src)
            dist = math.sqrt(dx * dx + dy * dy)
            pull = (dist - link.distance) / dist * alpha * link.strength
            dx *= pull
            dy *= pull
            vxs[tgt] -= dx * link.bias
            vys[tgt] -= dy * link.bias
            vxs[src] += dx * (1 - link.bias)
            vys[src] += dy * (1 - link.bias)

    @staticmethod
    def _apply_charge(strengths, xs, ys, vxs, vys, alpha):
        n = len(xs)
        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                dx = xs[j] - xs[i] or _jiggle(i)
                dy = ys[j] - ys[i] or _jiggle(j)
                dist_sq = dx * dx + dy * dy
                if dist_sq < DISTANCE_MIN_SQ:
                    dist_sq = math.sqrt(DISTANCE_MIN_SQ * dist_sq)
                w = strengths[j] * alpha / dist_sq
                vxs[i] += dx * w
                vys[i] += dy * w

    def _apply_center(self, xs, ys):
        n = len(xs)
        shift_x = sum(xs) / n - self.settings.force_center_x
        shift_y = sum(ys) / n - self.settings.force_center_y
        for i in range(n):
            xs[i] -= shift_x
            ys[i] -= shift_y

    @staticmethod
    def _apply_collide(radius, xs, ys, vxs, vys):
        n = len(xs)
        reach = radius * 2
        reach_sq = reach * reach
        for i in range(n):
            xi = xs[i] + vxs[i]
            yi = ys[i] + vys[i]
            for j in range(i + 1, n):
                dx = xi - xs[j] - vxs[j]
                dy = yi - ys[j] - vys[j]
                dist_sq = dx * dx + dy * dy
                if dist_sq >= reach_sq:
                    continue
                if dist_sq == 0:
                    dx, dy = _jiggle(i), _jiggle(j)
                    dist_sq = dx * dx + dy * dy
                dist = math.sqrt(dist_sq)
                push = (reach - dist) / dist / 2
                dx *= push
                dy *= push
                vxs[i] += dx
                vys[i] += dy
                vxs[j] -= dx
                vys[j] -= dy

    @staticmethod
    def _separate(reach, xs, ys, max_passes=100):
        """
        Push overlapping pairs apart until every pair is at least ``reach``
        apart. The collide force only relaxes overlaps, so a crowded hub
        can end the simulation a fraction short.
        """
        n = len(xs)
        for _ in range(max_passes):
            moved = False
            for i in range(n):
                for j in range(i + 1, n):
                    dx = xs[i] - xs[j]
                    dy = ys[i] - ys[j]
                    if dx == 0 and dy == 0:
                        dx, dy = _jiggle(i), _jiggle(j)
                    dist = math.sqrt(dx * dx + dy * dy)
                    if dist >= reach:
                        continue
                    # Half the shortfall each, with a small margin
                    push = (reach - dist + 1e-7) / dist / 2
                    xs[i] += dx * push
                    ys[i] += dy * push
                    xs[j] -= dx * push
                    ys[j] -= dy * push
                    moved = True
            if not moved:
                return

    def _standalone_origin(self, positions: Dict[str, Point], grid_width: float, compact: bool) -> Point:
        if not positions:
            return 0.0, 0.0
        width, height = self.settings.node_size(compact)
        gap = self.settings.gap(compact)
        _, _, _, max_y = bounding_box(positions, width, height)
        return self.settings.force_origin_offset, max_y + gap * 2
