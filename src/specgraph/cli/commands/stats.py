"""
Stats Command - Summarize a spec graph.
"""

import click
from rich.console import Console
from rich.table import Table

from ...analysis.filters import status_counts
from ...core.exceptions import SpecGraphError
from ...core.graph import SpecGraph
from ..utils import echo_warning, fail, load_payload, success_envelope

console = Console()


@click.command()
@click.argument("payload_file")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(payload_file: str, as_json: bool) -> None:
    """
    Show connection stats, status counts and dependency cycles.
    """
    try:
        graph = SpecGraph.from_payload(load_payload(payload_file))
    except SpecGraphError as e:
        fail(e, as_json)
        return

    data = graph.get_stats()
    data["status_counts"] = status_counts(graph.iter_nodes())
    data["cycles"] = graph.cycles()

    if as_json:
        click.echo(success_envelope(data))
        return

    table = Table(title="Spec Graph", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right", style="cyan")
    table.add_row("Specs", str(data["total_nodes"]))
    table.add_row("Dependencies", str(data["depends_on_edges"]))
    table.add_row("Related links", str(data["related_edges"]))
    table.add_row("Connected", str(data["connected"]))
    table.add_row("Standalone", str(data["standalone"]))
    for status, count in sorted(data["status_counts"].items()):
        table.add_row(f"  {status}", str(count))
    console.print(table)

    if data["dropped_edges"]:
        echo_warning(f"{data['dropped_edges']} malformed edge(s) ignored")
    if data["cycles"]:
        echo_warning(f"{len(data['cycles'])} dependency cycle(s); run 'specgraph cycles' for details")
