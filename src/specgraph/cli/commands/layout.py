"""
Layout Command - Run one recomputation pass and print the render payload.

JSON output is what a rendering collaborator consumes; the table view
is for humans checking filters and focus from a terminal.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from ...config import load_config
from ...core.exceptions import SpecGraphError
from ...core.graph import SpecGraph
from ...core.types import SpecStatus
from ...layout import STRATEGIES
from ...pipeline import Explorer, GraphView
from ...view.state import ViewMode, ViewState
from ..utils import echo_info, fail, load_payload, resolve_spec, success_envelope, write_output

logger = logging.getLogger(__name__)

console = Console()


@click.command()
@click.argument("payload_file")
@click.option("-l", "--layout", "layout_name", default="hierarchical",
              type=click.Choice(sorted(STRATEGIES)), help="Layout strategy")
@click.option("-m", "--mode", default=ViewMode.GRAPH.value,
              type=click.Choice([m.value for m in ViewMode]), help="Graph or focus view")
@click.option("-s", "--status", "statuses", multiple=True,
              type=click.Choice([s.value for s in SpecStatus]), help="Status filter (repeatable)")
@click.option("-q", "--search", default="", help="Filter by name, number or tag")
@click.option("-f", "--focus", "focus_ref", default=None, help="Spec ID, number or name to focus")
@click.option("--max-depth", default=-1, type=int,
              help="Maximum hop distance from the focus (-1 for unlimited)")
@click.option("--compact/--no-compact", default=None, help="Force compact cards on or off")
@click.option("--standalone", is_flag=True, help="Include specs without dependencies")
@click.option("--related", is_flag=True, help="Include related edges")
@click.option("-c", "--config", "config_file", default=None, type=click.Path(),
              help="Path to config.yaml")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-o", "--output", default=None, help="Write JSON output to a file")
def layout(
    payload_file: str,
    layout_name: str,
    mode: str,
    statuses: Tuple[str, ...],
    search: str,
    focus_ref: Optional[str],
    max_depth: int,
    compact: Optional[bool],
    standalone: bool,
    related: bool,
    config_file: Optional[str],
    as_json: bool,
    output: Optional[str],
) -> None:
    """
    Filter, focus and lay out a spec graph.
    """
    try:
        payload = load_payload(payload_file)
        config = load_config(Path(config_file) if config_file else None)

        focused_id = None
        if focus_ref:
            focused_id = resolve_spec(SpecGraph.from_payload(payload), focus_ref)

        state = ViewState(
            focused_id=focused_id,
            status_filter=tuple(SpecStatus(s) for s in statuses),
            search=search,
            layout=layout_name,
            include_related=related,
            compact=compact,
            show_standalone=standalone,
            max_depth=max_depth,
            view_mode=mode,
        )
        explorer = Explorer(payload, state=state, config=config)
        view = explorer.compute()
    except SpecGraphError as e:
        fail(e, as_json or bool(output))
        return

    if as_json or output:
        write_output(success_envelope(view), output)
        return

    _print_view(view, explorer.state)


def _print_view(view: GraphView, state: ViewState) -> None:
    if not view.nodes:
        echo_info("No specs match the current filters.")
        return

    table = Table(title=f"Layout: {view.layout}" + (" (compact)" if view.compact else ""))
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Spec")
    table.add_column("Status")
    table.add_column("Depth", justify="right")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Flags", style="dim")

    for node in view.nodes:
        flags = [
            name for name, on in (
                ("focus", node.focused),
                ("dimmed", node.dimmed),
                ("secondary", node.secondary),
                ("standalone", node.standalone),
            ) if on
        ]
        table.add_row(
            str(node.number),
            node.label,
            node.badge,
            "" if node.depth is None else str(node.depth),
            f"{node.position.x:.0f}",
            f"{node.position.y:.0f}",
            ", ".join(flags),
        )

    console.print(table)
    highlighted = sum(1 for e in view.edges if e.highlighted)
    console.print(
        f"{len(view.nodes)} specs, {len(view.edges)} edges "
        f"({highlighted} highlighted). "
        f"Connected: {view.stats.connected}, standalone: {view.stats.standalone}"
    )
    if state.focused_id and view.details is None:
        console.print("[yellow]Focused spec is not in the graph.[/yellow]")
