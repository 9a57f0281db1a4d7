"""
Unit tests for pointer handling, selection and fit-to-view.

These run against a mounted LineageView, which wires the controller to a
real simulation and store.
"""

from unittest.mock import MagicMock

import pytest

from lineage_view import LineageView, ViewConfig, Viewport
from lineage_view.config import LayoutConfig


@pytest.fixture
def view(lineage_nodes, viewport):
    view = LineageView(lineage_nodes, viewport)
    view.run()
    yield view
    view.teardown()


def screen_position(view, name):
    return view.transform.apply(view.node_map[name].position)


class TestSelection:

    def test_click_selects_node(self, view):
        subscriber = MagicMock()
        view.store.subscribe(subscriber)

        x, y = screen_position(view, "dep2")
        view.surface.click(x, y)

        node = subscriber.call_args.args[0]
        assert node.name == "dep2"
        assert view.selected is node
        assert [name for name in view.node_map if view.is_selected(name)] == ["dep2"]

    def test_click_on_empty_canvas_keeps_selection(self, view):
        view.controller.select("dep1")
        view.surface.click(-10_000, -10_000)
        assert view.controller.selected_name == "dep1"

    def test_select_unknown_name_clears(self, view):
        view.controller.select("dep1")
        assert view.controller.select("ghost") is None
        assert view.selected is None

    def test_click_after_drag_is_suppressed(self, view):
        x, y = screen_position(view, "dep4")
        view.surface.pointer_down(x, y)
        view.surface.pointer_move(x + 30, y + 30)
        view.surface.pointer_up(x + 30, y + 30)
        view.surface.click(x + 30, y + 30)
        assert view.selected is None

        x, y = screen_position(view, "dep4")
        view.surface.click(x, y)
        assert view.controller.selected_name == "dep4"


class TestFitToView:

    def test_fits_after_first_convergence(self, view):
        assert view.controller.convergence_count == 1
        assert view.controller.fit_count == 1
        assert not view.controller.zoom.transitioning

        bounds = view.controller.content_bounds()
        low, high = view.config.interaction.scale_extent
        top_left = view.transform.apply((bounds.min_x, bounds.min_y))
        bottom_right = view.transform.apply((bounds.max_x, bounds.max_y))
        if low < view.transform.k < high:
            assert top_left[0] >= -1e-6 and top_left[1] >= -1e-6
            assert bottom_right[0] <= view.viewport.width + 1e-6
            assert bottom_right[1] <= view.viewport.height + 1e-6

    def test_fit_only_once_after_drag(self, view):
        fitted = view.transform
        x, y = screen_position(view, "dep3")

        view.surface.pointer_down(x, y)
        for step in range(1, 6):
            view.surface.pointer_move(x + 10 * step, y)
            view.frame()
        view.surface.pointer_up(x + 50, y)
        assert view.simulation.running

        view.run()

        assert view.controller.convergence_count == 2
        assert view.controller.fit_count == 1
        assert view.transform == fitted

    def test_long_drag_release_keeps_settling(self, lineage_nodes, viewport):
        config = ViewConfig(layout=LayoutConfig(max_ticks=50))
        with LineageView(lineage_nodes, viewport, config=config) as view:
            view.run()
            x, y = screen_position(view, "dep3")

            view.surface.pointer_down(x, y)
            for _ in range(60):
                view.frame()
            view.surface.pointer_move(x + 40, y)
            view.surface.pointer_up(x + 40, y)
            view.frame()

            assert view.simulation.running
            assert view.controller.convergence_count == 1

    def test_drag_moves_node_under_pointer(self, view):
        x, y = screen_position(view, "dep3")
        view.surface.pointer_down(x, y)
        view.surface.pointer_move(x + 40, y - 20)
        view.frame()

        moved = screen_position(view, "dep3")
        assert moved[0] == pytest.approx(x + 40)
        assert moved[1] == pytest.approx(y - 20)
        view.surface.pointer_up(x + 40, y - 20)
        assert not view.node_map["dep3"].pinned

    def test_pan_on_empty_canvas(self, view):
        before = view.transform
        view.surface.pointer_down(-10_000, -10_000)
        view.surface.pointer_move(-9_990, -10_000)
        view.surface.pointer_up(-9_990, -10_000)
        assert view.transform.x == pytest.approx(before.x + 10)
        assert view.transform.k == before.k

    def test_wheel_zooms_around_pointer(self, view):
        anchor = screen_position(view, "root")
        view.surface.wheel(anchor[0], anchor[1], delta_y=-100)
        assert screen_position(view, "root") == pytest.approx(anchor)


class TestSingleNode:

    def test_single_node_is_centered(self, viewport):
        with LineageView([{"name": "only", "dependencies": []}], viewport) as view:
            view.run()
            assert view.controller.fit_count == 1
            assert screen_position(view, "only") == pytest.approx(viewport.center)
