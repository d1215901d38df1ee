"""
Global configuration and layout defaults.

Node sizes and spacings mirror what the dashboard canvas draws, so layouts
computed here line up with the rendered cards. Everything tunable can be
overridden from ``.specgraph/config.yaml``:

    layout:
      rank_sep: 140
      force_steps: 400
    policy:
      dimmed_opacity: 0.2
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.exceptions import PayloadError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".specgraph/config.yaml")

# --- Node geometry ---
NODE_WIDTH = 280
NODE_HEIGHT = 110
COMPACT_NODE_WIDTH = 180
COMPACT_NODE_HEIGHT = 70

# Graphs with more nodes than this switch to compact cards automatically
COMPACT_THRESHOLD = 30

# --- Labels ---
LABEL_MAX_LENGTH = 14
LABEL_TRUNCATE_AT = 12
ELLIPSIS = "…"

# Spec selector shows at most this many matches
SELECTOR_LIMIT = 15


class LayoutSettings(BaseModel):
    """Spacing and simulation parameters shared by the layout strategies."""
    node_width: float = NODE_WIDTH
    node_height: float = NODE_HEIGHT
    compact_node_width: float = COMPACT_NODE_WIDTH
    compact_node_height: float = COMPACT_NODE_HEIGHT

    # Hierarchical
    rank_sep: float = 120
    compact_rank_sep: float = 80
    node_sep: float = 50
    compact_node_sep: float = 30
    ordering_sweeps: int = 8

    # Standalone grid
    grid_gap: float = 50
    compact_grid_gap: float = 30
    grid_aspect: float = 1.5

    # Force
    force_origin_offset: float = 40
    force_center_x: float = 500
    force_center_y: float = 400
    force_initial_radius: float = 300
    force_link_distance: float = 180
    compact_force_link_distance: float = 120
    force_link_strength: float = 0.3
    related_distance_factor: float = 1.5
    related_link_strength: float = 0.1
    force_charge: float = -500
    compact_force_charge: float = -300
    force_collide_factor: float = 1.0
    compact_force_collide_factor: float = 0.8
    force_velocity_decay: float = 0.4
    force_alpha_min: float = 0.001
    force_steps: int = 300
    force_min_steps: int = 60
    force_size_threshold: int = 100

    def node_size(self, compact: bool) -> tuple[float, float]:
        if compact:
            return self.compact_node_width, self.compact_node_height
        return self.node_width, self.node_height

    def gap(self, compact: bool) -> float:
        return self.compact_grid_gap if compact else self.grid_gap


class PolicySettings(BaseModel):
    """Thresholds for the depth-to-opacity visual tiers."""
    direct_edge_opacity: float = 1.0
    indirect_edge_opacity: float = 0.4
    background_edge_opacity: float = 0.1
    unfocused_edge_opacity: float = 0.7
    highlighted_stroke: float = 2.5
    focus_mode_stroke: float = 2.75
    focus_mode_base_stroke: float = 2.0
    normal_stroke: float = 1.5
    depth_opacity: Dict[int, float] = Field(
        default_factory=lambda: {0: 1.0, 1: 0.95, 2: 0.7}
    )
    dimmed_opacity: float = 0.15
    secondary_factor: float = 0.65


class GraphConfig(BaseModel):
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    policy: PolicySettings = Field(default_factory=PolicySettings)


def load_config(config_path: Optional[Path] = None) -> GraphConfig:
    """
    Load configuration from YAML, falling back to defaults.

    A missing file is not an error. A file that exists but does not parse
    or validate raises PayloadError.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return GraphConfig()

    try:
        with open(path, "r") as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}
        config = GraphConfig.model_validate(data)
    except (yaml.YAMLError, ValidationError) as e:
        raise PayloadError(str(path), f"invalid config: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config
