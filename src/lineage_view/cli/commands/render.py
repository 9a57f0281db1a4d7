"""
Render Command - Export the settled lineage graph as SVG.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from ...render.svg import render_svg
from ..utils import echo_error, echo_info, echo_success, load_view


@click.command()
@click.argument("graph_file", type=click.Path())
@click.option("-o", "--output", default="lineage.svg", show_default=True, help="Output SVG file")
@click.option("--width", default=1200.0, show_default=True, help="Viewport width in pixels")
@click.option("--height", default=800.0, show_default=True, help="Viewport height in pixels")
@click.option("-c", "--config", "config_file", default=None, help="YAML configuration file")
@click.option("--select", "selected", default=None, help="Highlight this node as selected")
def render(
    graph_file: str,
    output: str,
    width: float,
    height: float,
    config_file: Optional[str],
    selected: Optional[str],
):
    """
    Lay out GRAPH_FILE and write it as an SVG image.
    """
    output_path = Path(output)
    if output_path.suffix.lower() != ".svg":
        echo_error(f"Unsupported format: {output_path.suffix}")
        click.echo("Supported: .svg")
        sys.exit(1)

    view = load_view(graph_file, width, height, config_file)
    if view is None:
        sys.exit(1)

    with view:
        view.run()
        if selected is not None and view.controller.select(selected) is None:
            echo_error(f"No node named {selected}")
            sys.exit(1)
        svg = render_svg(view)

    output_path.write_text(svg)
    echo_success(f"Generated: {output_path}")
    echo_info(f"Open: file://{output_path.absolute()}")
