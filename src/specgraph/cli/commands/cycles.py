"""
Cycles Command - Report circular dependencies.

The hierarchical layout tolerates cycles, but a cycle usually means two
specs each claim to need the other first.
"""

import sys

import click

from ...core.exceptions import SpecGraphError
from ...core.graph import SpecGraph
from ..utils import echo_error, echo_success, fail, load_payload, success_envelope


@click.command()
@click.argument("payload_file")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def cycles(payload_file: str, as_json: bool) -> None:
    """
    List dependency cycles. Exits 1 when any are found.
    """
    try:
        graph = SpecGraph.from_payload(load_payload(payload_file))
    except SpecGraphError as e:
        fail(e, as_json, exit_code=2)
        return

    found = graph.cycles()
    numbers = {n.id: n.number for n in graph.iter_nodes()}

    if as_json:
        click.echo(success_envelope({"acyclic": not found, "cycles": found}))
    elif not found:
        echo_success("No dependency cycles")
    else:
        echo_error(f"{len(found)} dependency cycle(s) found")
        for cycle in found:
            chain = " → ".join(f"#{numbers[node_id]}" for node_id in [*cycle, cycle[0]])
            click.echo(f"  {chain}")

    if found:
        sys.exit(1)
