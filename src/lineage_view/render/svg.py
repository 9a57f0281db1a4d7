"""
SVG export of a mounted lineage view.

Paints the current state: edge curves below node boxes, each box with its
rendered markup in a foreignObject, the selected node highlighted, and the
zoom transform on the wrapping group.
"""

import html
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..view import LineageView

STYLE = """
    .node rect { fill: lightblue; stroke: steelblue; stroke-width: 2px; }
    .node.selected rect { fill: lightgreen; }
    .link { fill: none; stroke: #aaa; stroke-width: 2px; }
"""


def _attr(value) -> str:
    return html.escape(str(value), quote=True)


def render_svg(view: "LineageView") -> str:
    box = view.config.box
    width, height = view.viewport.width, view.viewport.height
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height:g}" '
        f'viewBox="0 0 {width:g} {height:g}">',
        f"<style>{STYLE}</style>",
        f'<g transform="{_attr(view.transform.to_svg())}">',
        '<g class="links">',
    ]

    for edge, curve in zip(view.links, view.curves):
        parts.append(
            f'<path class="link{" backward" if curve.backward else ""}" '
            f'data-source="{_attr(edge.source.name)}" data-target="{_attr(edge.target.name)}" '
            f'd="{curve.to_svg()}"/>'
        )
    parts.append("</g>")

    parts.append('<g class="nodes">')
    for layout_node in view.node_map.values():
        x, y = layout_node.position
        classes = "node selected" if view.is_selected(layout_node.name) else "node"
        markup = view.renderer.render(layout_node.node)
        geometry = (
            f'width="{box.width:g}" height="{box.height:g}" '
            f'x="{-box.half_width:g}" y="{-box.half_height:g}"'
        )
        parts.append(
            f'<g class="{classes}" data-name="{_attr(layout_node.name)}" '
            f'transform="translate({x:g},{y:g})">'
            f'<rect {geometry} rx="{box.corner_radius:g}" ry="{box.corner_radius:g}"/>'
            f"<foreignObject {geometry}>"
            f'<div xmlns="http://www.w3.org/1999/xhtml" style="width:100%;height:100%">{markup}</div>'
            f"</foreignObject></g>"
        )
    parts.append("</g>")

    parts.append("</g></svg>")
    return "\n".join(parts)
