"""
Layout strategies, selected by view-mode name.
"""

from typing import Dict, Optional, Type

from ..config import LayoutSettings
from ..core.exceptions import UnknownLayoutError
from .base import LayoutStrategy, grid_columns, grid_positions, normalize
from .force import ForceLayout
from .hierarchical import HierarchicalLayout

STRATEGIES: Dict[str, Type[LayoutStrategy]] = {
    HierarchicalLayout.name: HierarchicalLayout,
    ForceLayout.name: ForceLayout,
}


def get_layout(
    name: str,
    settings: Optional[LayoutSettings] = None,
    include_related: bool = False,
) -> LayoutStrategy:
    """Instantiate the strategy registered under ``name``."""
    strategy_cls = STRATEGIES.get(str(name))
    if strategy_cls is None:
        raise UnknownLayoutError(str(name), sorted(STRATEGIES))
    if strategy_cls is ForceLayout:
        return ForceLayout(settings, include_related=include_related)
    return strategy_cls(settings)


__all__ = [
    "ForceLayout",
    "HierarchicalLayout",
    "LayoutStrategy",
    "STRATEGIES",
    "get_layout",
    "grid_columns",
    "grid_positions",
    "normalize",
]
