"""
lineage_view: interactive force-directed lineage graph layout.

Places the nodes of a dependency graph in depth columns with a force
simulation, routes curved connectors between them, and handles pan, zoom,
drag, fit-to-view and node selection for a hosting surface.
"""

from .config import ViewConfig, load_config
from .core import (
    LineageError,
    NameCollisionError,
    Node,
    UnresolvedReferenceError,
    Viewport,
    load_nodes,
)
from .interaction import SelectionStore
from .render import render_svg
from .view import LineageView

__version__ = "0.1.0"

__all__ = [
    "LineageView", "Viewport", "Node", "SelectionStore",
    "ViewConfig", "load_config", "load_nodes", "render_svg",
    "LineageError", "UnresolvedReferenceError", "NameCollisionError",
]
