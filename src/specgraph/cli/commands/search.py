"""
Search Command - Spec selector ranking.
"""

import click
from rich.console import Console
from rich.table import Table

from ...analysis.filters import select_specs
from ...config import SELECTOR_LIMIT
from ...core.exceptions import SpecGraphError
from ..utils import echo_info, fail, load_payload, success_envelope

console = Console()


@click.command()
@click.argument("payload_file")
@click.argument("query", default="")
@click.option("-n", "--limit", default=SELECTOR_LIMIT, type=int, help="Maximum results")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def search(payload_file: str, query: str, limit: int, as_json: bool) -> None:
    """
    List specs matching QUERY by name, number or tag, newest first.
    """
    try:
        payload = load_payload(payload_file)
    except SpecGraphError as e:
        fail(e, as_json)
        return

    results = select_specs(payload.nodes, query, limit)

    if as_json:
        click.echo(success_envelope([spec.model_dump(mode="json") for spec in results]))
        return

    if not results:
        echo_info(f"No specs match '{query}'")
        return

    table = Table()
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Tags", style="dim")
    for spec in results:
        table.add_row(str(spec.number), spec.name, spec.status.value, ", ".join(spec.tags))
    console.print(table)
