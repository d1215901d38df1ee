"""
Core type definitions for specgraph.

Raw graph data (SpecNode, DependencyEdge) arrives from the fetch collaborator
and is never mutated. Render records (RenderNode, RenderEdge) are derived and
rebuilt on every recomputation pass.
"""

from enum import StrEnum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SpecStatus(StrEnum):
    """Lifecycle status of a specification."""
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    ARCHIVED = "archived"


class SpecPriority(StrEnum):
    """Priority of a specification."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class EdgeType(StrEnum):
    """Types of relationships between specs."""
    DEPENDS_ON = "dependsOn"
    RELATED = "related"


# Payload spellings accepted for each edge type.
_EDGE_TYPE_ALIASES = {
    None: EdgeType.DEPENDS_ON,
    "dependsOn": EdgeType.DEPENDS_ON,
    "depends_on": EdgeType.DEPENDS_ON,
    "related": EdgeType.RELATED,
}


class SpecNode(BaseModel):
    """
    A specification as supplied by the fetch collaborator.
    """
    id: str
    number: int
    name: str
    status: SpecStatus = SpecStatus.PLANNED
    priority: SpecPriority = SpecPriority.MEDIUM
    tags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="ignore")

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, SpecNode):
            return self.id == other.id
        return False


class DependencyEdge(BaseModel):
    """
    Directed relationship between two specs.

    ``source`` depends on ``target``. A ``required_by`` edge in the payload is
    the same relationship seen from the other end, so its endpoints are
    swapped on the way in.
    """
    source: str
    target: str
    type: EdgeType = EdgeType.DEPENDS_ON

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _normalize_direction(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("type") == "required_by":
            data = {
                **data,
                "source": data.get("target"),
                "target": data.get("source"),
                "type": EdgeType.DEPENDS_ON,
            }
        return data

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, EdgeType):
            return value
        return _EDGE_TYPE_ALIASES.get(value, value)

    @property
    def is_depends_on(self) -> bool:
        return self.type == EdgeType.DEPENDS_ON

    @property
    def key(self) -> str:
        return f"{self.source}-{self.target}-{self.type.value}"


class GraphPayload(BaseModel):
    """
    Snapshot of the graph handed over by the fetch collaborator.

    No ordering guarantees on either list.
    """
    nodes: List[SpecNode] = Field(default_factory=list)
    edges: List[DependencyEdge] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def depends_on_edges(self) -> List[DependencyEdge]:
        return [e for e in self.edges if e.is_depends_on]

    def node_ids(self) -> set[str]:
        return {n.id for n in self.nodes}


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0

    model_config = ConfigDict(frozen=True)


class RenderNode(SpecNode):
    """
    A spec plus everything the rendering collaborator needs to draw it.
    """
    position: Position = Field(default_factory=Position)
    label: str = ""
    short_label: str = ""
    badge: str = ""
    depth: Optional[int] = None
    dimmed: bool = False
    focused: bool = False
    secondary: bool = False
    compact: bool = False
    standalone: bool = False
    opacity: float = 1.0

    def at(self, x: float, y: float) -> "RenderNode":
        """Return a copy placed at (x, y)."""
        return self.model_copy(update={"position": Position(x=x, y=y)})


class RenderEdge(BaseModel):
    """
    A dependency edge with style hints derived from the current focus.
    """
    id: str
    source: str
    target: str
    type: EdgeType = EdgeType.DEPENDS_ON
    highlighted: bool = False
    opacity: float = 1.0
    animated: bool = False
    stroke_width: float = 1.5

    model_config = ConfigDict(frozen=True)


class RenderGraph(BaseModel):
    nodes: List[RenderNode] = Field(default_factory=list)
    edges: List[RenderEdge] = Field(default_factory=list)

    def positions(self) -> dict[str, tuple[float, float]]:
        return {n.id: (n.position.x, n.position.y) for n in self.nodes}


class DepthGroup(BaseModel):
    """Specs discovered at the same BFS depth."""
    depth: int
    specs: List[SpecNode] = Field(default_factory=list)


class FocusedNodeDetails(BaseModel):
    """
    Detail-panel data for the focused spec.

    ``upstream`` holds what the spec depends on and ``downstream`` what
    depends on it, each grouped by increasing depth.
    """
    node: SpecNode
    upstream: List[DepthGroup] = Field(default_factory=list)
    downstream: List[DepthGroup] = Field(default_factory=list)

    @property
    def upstream_count(self) -> int:
        return sum(len(g.specs) for g in self.upstream)

    @property
    def downstream_count(self) -> int:
        return sum(len(g.specs) for g in self.downstream)


class ConnectionStats(BaseModel):
    connected: int = 0
    standalone: int = 0
