"""Unit tests for the core data model."""

import pytest
from pydantic import ValidationError

from specgraph.core.types import (
    DependencyEdge,
    DepthGroup,
    EdgeType,
    FocusedNodeDetails,
    GraphPayload,
    RenderNode,
    SpecNode,
    SpecStatus,
)


class TestDependencyEdge:
    def test_missing_type_defaults_to_depends_on(self):
        edge = DependencyEdge.model_validate({"source": "a", "target": "b"})
        assert edge.type == EdgeType.DEPENDS_ON
        assert edge.is_depends_on

    def test_snake_case_alias(self):
        edge = DependencyEdge.model_validate({"source": "a", "target": "b", "type": "depends_on"})
        assert edge.type == EdgeType.DEPENDS_ON

    def test_required_by_swaps_endpoints(self):
        edge = DependencyEdge.model_validate({"source": "a", "target": "b", "type": "required_by"})
        assert (edge.source, edge.target) == ("b", "a")
        assert edge.type == EdgeType.DEPENDS_ON

    def test_related_is_not_depends_on(self):
        edge = DependencyEdge(source="a", target="b", type=EdgeType.RELATED)
        assert not edge.is_depends_on

    def test_key_format(self):
        edge = DependencyEdge(source="a", target="b")
        assert edge.key == "a-b-dependsOn"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            DependencyEdge.model_validate({"source": "a", "target": "b", "type": "blocks"})


class TestSpecNode:
    def test_extra_fields_ignored(self):
        node = SpecNode.model_validate({
            "id": "s1", "number": 1, "name": "One", "status": "planned", "content": "# markdown",
        })
        assert not hasattr(node, "content")

    def test_equality_by_id(self):
        a = SpecNode(id="s1", number=1, name="One")
        b = SpecNode(id="s1", number=99, name="Other", status=SpecStatus.COMPLETE)
        assert a == b
        assert len({a, b}) == 1

    def test_frozen(self):
        node = SpecNode(id="s1", number=1, name="One")
        with pytest.raises(ValidationError):
            node.name = "Changed"


class TestPayloadAndRender:
    def test_depends_on_edges(self, diamond_payload):
        assert len(diamond_payload.edges) == 6
        assert len(diamond_payload.depends_on_edges) == 5

    def test_render_node_at_returns_copy(self):
        node = RenderNode(id="s1", number=1, name="One")
        moved = node.at(10, 20)
        assert (moved.position.x, moved.position.y) == (10, 20)
        assert (node.position.x, node.position.y) == (0, 0)

    def test_details_counts(self):
        a = SpecNode(id="a", number=1, name="A")
        b = SpecNode(id="b", number=2, name="B")
        c = SpecNode(id="c", number=3, name="C")
        details = FocusedNodeDetails(
            node=a,
            upstream=[DepthGroup(depth=1, specs=[b]), DepthGroup(depth=2, specs=[c])],
        )
        assert details.upstream_count == 2
        assert details.downstream_count == 0

    def test_empty_payload(self):
        payload = GraphPayload()
        assert payload.nodes == []
        assert payload.node_ids() == set()
