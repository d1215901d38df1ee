"""
Visual policy: how BFS depth maps to opacity, dimming and highlighting.

Kept apart from the traversal code so the visual tiers can be tuned from
config without touching the analysis.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from ..config import PolicySettings


@dataclass(frozen=True)
class EdgeStyle:
    highlighted: bool
    opacity: float
    animated: bool
    stroke_width: float


class VisualPolicy:
    """
    Three-tier edge hierarchy (direct, indirect, background) and per-depth
    node opacity.
    """

    def __init__(self, settings: Optional[PolicySettings] = None):
        self.settings = settings or PolicySettings()

    def is_dimmed(self, node_id: str, depths: Optional[Mapping[str, int]]) -> bool:
        """Dimmed iff a focus is active and the spec was not reached."""
        return depths is not None and node_id not in depths

    def node_opacity(self, depth: Optional[int], dimmed: bool, secondary: bool) -> float:
        s = self.settings
        if depth is not None and depth in s.depth_opacity:
            opacity = s.depth_opacity[depth]
        elif dimmed:
            opacity = s.dimmed_opacity
        else:
            opacity = 1.0
        if secondary:
            opacity *= s.secondary_factor
        return round(opacity, 4)

    def edge_style(
        self,
        source_id: str,
        target_id: str,
        depths: Optional[Mapping[str, int]],
    ) -> EdgeStyle:
        """
        Style an edge from its endpoints' depths.

        ``depths`` is None when nothing is focused.
        """
        s = self.settings
        if depths is None:
            return EdgeStyle(
                highlighted=True,
                opacity=s.unfocused_edge_opacity,
                animated=False,
                stroke_width=s.highlighted_stroke,
            )

        source_depth = depths.get(source_id)
        target_depth = depths.get(target_id)
        highlighted = source_depth == 0 or target_depth == 0
        reached = source_depth is not None and target_depth is not None

        if highlighted:
            opacity = s.direct_edge_opacity
        elif reached:
            opacity = s.indirect_edge_opacity
        else:
            opacity = s.background_edge_opacity

        return EdgeStyle(
            highlighted=highlighted,
            opacity=opacity,
            animated=highlighted,
            stroke_width=s.highlighted_stroke if highlighted else s.normal_stroke,
        )

    def focus_mode_edge_style(self, source_id: str, target_id: str, focused_id: str) -> EdgeStyle:
        """In focus mode every edge is fully opaque; those touching the focus stand out."""
        s = self.settings
        touches = focused_id in (source_id, target_id)
        return EdgeStyle(
            highlighted=touches,
            opacity=1.0,
            animated=touches,
            stroke_width=s.focus_mode_stroke if touches else s.focus_mode_base_stroke,
        )
