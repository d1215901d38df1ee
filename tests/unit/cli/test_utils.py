"""Unit tests for CLI utilities."""

import json

import pytest

from specgraph.cli.utils import error_envelope, load_payload, resolve_spec, success_envelope
from specgraph.core.exceptions import NodeNotFoundError, PayloadError
from specgraph.core.graph import SpecGraph


class TestLoadPayload:
    def test_from_json(self, tmp_path):
        f = tmp_path / "graph.json"
        f.write_text(json.dumps({"nodes": [], "edges": []}))
        assert load_payload(str(f)).nodes == []

    def test_from_directory(self, tmp_path):
        specgraph_dir = tmp_path / ".specgraph"
        specgraph_dir.mkdir()
        f = specgraph_dir / "graph.json"
        f.write_text(json.dumps({"nodes": [{"id": "a", "number": 1, "name": "A"}], "edges": []}))
        assert [n.id for n in load_payload(str(tmp_path)).nodes] == ["a"]

    def test_empty_directory(self, tmp_path):
        with pytest.raises(PayloadError):
            load_payload(str(tmp_path))

    def test_missing(self, tmp_path):
        with pytest.raises(PayloadError) as exc_info:
            load_payload(str(tmp_path / "missing.json"))
        assert exc_info.value.message == "file not found"

    def test_not_json(self, tmp_path):
        f = tmp_path / "graph.json"
        f.write_text("{nodes: ")
        with pytest.raises(PayloadError):
            load_payload(str(f))


class TestResolveSpec:
    def test_resolves_number_and_name(self, chain_payload):
        graph = SpecGraph.from_payload(chain_payload)
        assert resolve_spec(graph, "#4") == "D"
        assert resolve_spec(graph, "delta") == "D"

    def test_unknown(self, chain_payload):
        with pytest.raises(NodeNotFoundError) as exc_info:
            resolve_spec(SpecGraph.from_payload(chain_payload), "zzz")
        assert exc_info.value.reference == "zzz"


class TestEnvelopes:
    def test_success(self, chain_payload):
        body = json.loads(success_envelope(chain_payload))
        assert body["meta"] == {"status": "success"}
        assert len(body["data"]["nodes"]) == 4

    def test_error(self):
        body = json.loads(error_envelope(NodeNotFoundError("x")))
        assert body["meta"] == {"status": "error"}
        assert body["error"] == {"message": "Spec not found: x", "type": "NodeNotFoundError"}
