"""
lineage-view CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import depths, layout, render


@click.group()
@click.version_option(package_name="lineage-view")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """lineage-view: Force-directed lineage graph layout.

    Places dependency graphs in depth columns and exports the result.

    \b
    Quick Start:
      lineage-view depths graph.json
      lineage-view layout graph.json --output layout.json
      lineage-view render graph.json --output lineage.svg
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(layout.layout)
main.add_command(depths.depths)
main.add_command(render.render)

if __name__ == "__main__":
    main()
