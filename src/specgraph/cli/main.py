"""
specgraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import cycles, focus, layout, search, stats


@click.group()
@click.version_option(package_name="specgraph")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """specgraph: Dependency graph explorer for specifications.

    Filters a spec graph by status, search and focus, measures hop
    distances from the focused spec and lays the result out for a canvas.

    \b
    Quick Start:
      specgraph stats graph.json
      specgraph layout graph.json --focus 12 --json
      specgraph focus graph.json 12
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(layout.layout)
main.add_command(focus.focus)
main.add_command(stats.stats)
main.add_command(search.search)
main.add_command(cycles.cycles)

if __name__ == "__main__":
    main()
