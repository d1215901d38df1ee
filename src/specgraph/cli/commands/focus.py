"""
Focus Command - Show what a spec depends on and what depends on it.
"""

from typing import List

import click
from rich.console import Console
from rich.tree import Tree

from ...analysis.connectivity import focused_node_details
from ...core.exceptions import SpecGraphError
from ...core.graph import SpecGraph
from ...core.types import DepthGroup, FocusedNodeDetails
from ..utils import fail, load_payload, resolve_spec, success_envelope

console = Console()


@click.command()
@click.argument("payload_file")
@click.argument("reference")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def focus(payload_file: str, reference: str, as_json: bool) -> None:
    """
    Show upstream and downstream specs of REFERENCE, grouped by depth.

    REFERENCE may be a spec ID, a display number (12 or #12) or part of a name.
    """
    try:
        graph = SpecGraph.from_payload(load_payload(payload_file))
        focused_id = resolve_spec(graph, reference)
    except SpecGraphError as e:
        fail(e, as_json)
        return

    details = focused_node_details(graph.to_payload(), focused_id)

    if as_json:
        click.echo(success_envelope(details))
        return

    _print_details(details)


def _print_details(details: FocusedNodeDetails) -> None:
    node = details.node
    tree = Tree(f"[bold]#{node.number} {node.name}[/bold] [dim]({node.status.value})[/dim]")
    _add_branch(tree, f"Depends on ({details.upstream_count})", details.upstream)
    _add_branch(tree, f"Required by ({details.downstream_count})", details.downstream)
    console.print(tree)


def _add_branch(tree: Tree, title: str, groups: List[DepthGroup]) -> None:
    branch = tree.add(f"[cyan]{title}[/cyan]")
    if not groups:
        branch.add("[dim]none[/dim]")
        return
    for group in groups:
        level = branch.add(f"depth {group.depth}")
        for spec in group.specs:
            level.add(f"#{spec.number} {spec.name} [dim]({spec.status.value})[/dim]")
