"""Unit tests for node renderers and SVG export."""

import pytest

from lineage_view import LineageView
from lineage_view.core.types import Node
from lineage_view.render import CallableRenderer, NameRenderer, as_renderer, render_svg


class BadgeRenderer:
    def render(self, node):
        return f"<b>{node.name}</b> <i>{node.payload.get('owner', '')}</i>"


class TestRenderers:
    def test_default_escapes_name(self):
        assert NameRenderer().render(Node(name="a<b>")) == "a&lt;b&gt;"

    def test_as_renderer(self):
        assert isinstance(as_renderer(None), NameRenderer)
        badge = BadgeRenderer()
        assert as_renderer(badge) is badge
        wrapped = as_renderer(lambda node: node.name.upper())
        assert isinstance(wrapped, CallableRenderer)
        assert wrapped.render(Node(name="x")) == "X"

    def test_rejects_non_renderer(self):
        with pytest.raises(TypeError):
            as_renderer(42)


class TestRenderSvg:
    def test_structure(self, lineage_nodes, viewport):
        with LineageView(lineage_nodes, viewport) as view:
            view.run()
            svg = render_svg(view)

        assert svg.startswith("<svg")
        assert svg.count('<path class="link') == 5
        assert svg.count("<rect ") == 5
        assert f'transform="{view.transform.to_svg()}"' in svg
        assert 'data-source="root" data-target="dep1"' in svg

    def test_selected_node_highlighted(self, lineage_nodes, viewport):
        with LineageView(lineage_nodes, viewport) as view:
            view.controller.select("dep2")
            svg = render_svg(view)

        assert svg.count('class="node selected"') == 1
        assert '<g class="node selected" data-name="dep2"' in svg

    def test_custom_renderer_markup(self, viewport):
        nodes = [{"name": "orders", "owner": "data-eng"}]
        with LineageView(nodes, viewport, renderer=BadgeRenderer()) as view:
            svg = render_svg(view)
        assert "<b>orders</b> <i>data-eng</i>" in svg
