"""
Rendering: per-node renderers and SVG export.
"""

from .nodes import CallableRenderer, NameRenderer, NodeRenderer, as_renderer
from .svg import render_svg

__all__ = ["NodeRenderer", "NameRenderer", "CallableRenderer", "as_renderer", "render_svg"]
