"""
Depths Command - Show the depth column of every node.

Usage:
    lineage-view depths graph.json
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from ...core.depth import assign_depths
from ...core.errors import LineageError
from ...core.graph import index_nodes
from ...core.loader import load_nodes
from ..utils import echo_error

console = Console()


@click.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--sort", "sort_by_depth", is_flag=True, help="Order by depth instead of input order")
def depths(graph_file: str, sort_by_depth: bool):
    """
    Print depth and in-degree of each node in GRAPH_FILE.
    """
    try:
        node_map = assign_depths(index_nodes(load_nodes(graph_file)))
    except LineageError as e:
        echo_error(str(e))
        sys.exit(1)

    rows = list(node_map.values())
    if sort_by_depth:
        rows.sort(key=lambda n: (n.depth, n.index))

    table = Table(title=f"Lineage depths ({len(rows)} nodes)")
    table.add_column("Node", style="cyan")
    table.add_column("Depth", justify="right")
    table.add_column("In-degree", justify="right")
    table.add_column("Dependencies", style="dim")

    for layout_node in rows:
        marker = " [green](root)[/green]" if layout_node.is_root else ""
        table.add_row(
            f"{layout_node.name}{marker}",
            str(layout_node.depth),
            str(layout_node.in_degree),
            ", ".join(layout_node.dependencies) or "-",
        )

    console.print(table)
