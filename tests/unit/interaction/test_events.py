"""Unit tests for pointer event dispatch."""

from unittest.mock import MagicMock

from lineage_view.interaction.events import PointerEvent, PointerEventType, PointerSurface


class TestPointerSurface:
    def test_dispatch_by_type(self):
        surface = PointerSurface()
        on_click, on_wheel = MagicMock(), MagicMock()
        surface.on(PointerEventType.CLICK, on_click)
        surface.on("wheel", on_wheel)

        assert surface.click(10, 20)
        on_click.assert_called_once_with(PointerEvent(PointerEventType.CLICK, 10, 20))
        on_wheel.assert_not_called()

        surface.wheel(0, 0, delta_y=-3, delta_mode=1)
        event = on_wheel.call_args.args[0]
        assert event.delta_y == -3
        assert event.delta_mode == 1

    def test_no_listener(self):
        assert PointerSurface().pointer_down(0, 0) is False

    def test_remove(self):
        surface = PointerSurface()
        handler = MagicMock()
        remove = surface.on(PointerEventType.DOWN, handler)
        assert surface.listener_count() == 1

        remove()
        remove()
        assert surface.listener_count(PointerEventType.DOWN) == 0
        surface.pointer_down(0, 0)
        handler.assert_not_called()
