"""
Layout Command - Run the force layout and export its result.

Outputs the settled layout as JSON: depths, positions, connector paths and
the fitted view transform.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ..utils import echo_error, echo_info, echo_success, load_view


@click.command()
@click.argument("graph_file", type=click.Path())
@click.option("-o", "--output", default=None, help="Write JSON to this file instead of stdout")
@click.option("--width", default=1200.0, show_default=True, help="Viewport width in pixels")
@click.option("--height", default=800.0, show_default=True, help="Viewport height in pixels")
@click.option("-c", "--config", "config_file", default=None, help="YAML configuration file")
@click.option("--max-frames", default=None, type=int, help="Stop after this many frames")
def layout(
    graph_file: str,
    output: Optional[str],
    width: float,
    height: float,
    config_file: Optional[str],
    max_frames: Optional[int],
):
    """
    Compute the lineage layout for GRAPH_FILE.
    """
    view = load_view(graph_file, width, height, config_file)
    if view is None:
        sys.exit(1)

    with view:
        frames = view.run(max_frames=max_frames)
        data = view.snapshot()

    payload = json.dumps(data, indent=2)
    if output is None:
        click.echo(payload)
        return

    try:
        Path(output).write_text(payload)
    except OSError as e:
        echo_error(f"Cannot write {output}: {e}")
        sys.exit(1)
    echo_success(f"Generated: {output}")
    echo_info(f"{len(data['nodes'])} nodes, {len(data['edges'])} edges, settled after {frames} frames")
