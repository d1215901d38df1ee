"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing, payload loading, spec reference resolution and the
JSON envelope used by every ``--json`` output.
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional

import click
from pydantic import BaseModel, ValidationError

from ..core.exceptions import NodeNotFoundError, PayloadError
from ..core.graph import SpecGraph
from ..core.types import GraphPayload


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def load_payload(payload_file: str) -> GraphPayload:
    """
    Load a graph payload from a JSON file.

    Accepts a bare ``{"nodes": [...], "edges": [...]}`` document or the
    same object wrapped in a ``{"data": ...}`` envelope. A directory is
    resolved to ``.specgraph/graph.json`` or ``graph.json`` inside it.

    Raises:
        PayloadError: If the file is missing or not a valid payload.
    """
    path = Path(payload_file)

    if path.is_dir():
        for candidate in (path / ".specgraph/graph.json", path / "graph.json"):
            if candidate.exists():
                path = candidate
                break
        else:
            raise PayloadError(payload_file, "no graph.json found in directory")

    if not path.exists():
        raise PayloadError(payload_file, "file not found")

    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise PayloadError(payload_file, f"unreadable JSON: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        data = data["data"]

    try:
        return GraphPayload.model_validate(data)
    except ValidationError as e:
        raise PayloadError(payload_file, f"invalid payload: {e.error_count()} error(s)") from e


def resolve_spec(graph: SpecGraph, reference: str) -> str:
    """
    Resolve an ID, display number (``12`` or ``#12``) or name fragment.

    Raises:
        NodeNotFoundError: If nothing matches.
    """
    matches = graph.find_nodes(reference)
    if not matches:
        raise NodeNotFoundError(reference)
    return matches[0]


def success_envelope(data: Any) -> str:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return json.dumps({"meta": {"status": "success"}, "data": data})


def error_envelope(error: Exception) -> str:
    return json.dumps({
        "meta": {"status": "error"},
        "error": {"message": str(error), "type": type(error).__name__},
    })


def fail(error: Exception, as_json: bool, exit_code: int = 1) -> None:
    """Report an error in the requested format and exit."""
    if as_json:
        click.echo(error_envelope(error))
    else:
        echo_error(str(error))
    sys.exit(exit_code)


def write_output(text: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(text)
        echo_success(f"Generated: {output}")
    else:
        click.echo(text)
