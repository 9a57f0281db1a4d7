"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing and the loading logic shared by
every command: reading the node file and configuration and mounting a view.
"""

from pathlib import Path
from typing import Optional

import click

from ..config import load_config
from ..core.errors import LineageError
from ..core.loader import load_nodes
from ..core.types import Viewport
from ..view import LineageView


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def load_view(
    graph_file: str,
    width: float,
    height: float,
    config_file: Optional[str] = None,
) -> Optional[LineageView]:
    """
    Mount a LineageView for a node file.

    Args:
        graph_file (str): JSON or YAML file with the node list.
        width (float): Viewport width in pixels.
        height (float): Viewport height in pixels.
        config_file (Optional[str]): YAML configuration; `.lineage/config.yaml` if omitted.

    Returns:
        Optional[LineageView]: The mounted view, or None if loading failed.
    """
    graph_path = Path(graph_file)
    if not graph_path.exists():
        echo_error(f"Graph file not found: {graph_file}")
        return None

    try:
        config = load_config(Path(config_file) if config_file else None)
        nodes = load_nodes(graph_path)
        return LineageView(nodes, Viewport(width, height), config=config)
    except LineageError as e:
        echo_error(str(e))
        return None
