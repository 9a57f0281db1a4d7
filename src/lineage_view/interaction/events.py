"""
Pointer events delivered by the hosting surface.

The host translates its native input into PointerEvents (screen pixels)
and dispatches them; handlers attach per event type and detach through the
callable `on` returns.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Dict, List, Optional

from ..core.types import Point

logger = logging.getLogger(__name__)


class PointerEventType(StrEnum):
    """Kinds of pointer input the view reacts to."""
    DOWN = "pointerdown"
    MOVE = "pointermove"
    UP = "pointerup"
    CLICK = "click"
    DBLCLICK = "dblclick"
    WHEEL = "wheel"


@dataclass(frozen=True)
class PointerEvent:
    type: PointerEventType
    x: float
    y: float
    delta_y: float = 0.0
    delta_mode: int = 0  # 0 = pixels, 1 = lines, 2 = pages
    pointer_id: int = 0

    @property
    def point(self) -> Point:
        return (self.x, self.y)


Handler = Callable[[PointerEvent], None]


class PointerSurface:
    """Dispatches pointer events to the handlers registered for their type."""

    def __init__(self):
        self._handlers: Dict[PointerEventType, List[Handler]] = defaultdict(list)

    def on(self, event_type: PointerEventType, handler: Handler) -> Callable[[], None]:
        """Register a handler. Returns a callable that removes it."""
        event_type = PointerEventType(event_type)
        self._handlers[event_type].append(handler)

        def remove() -> None:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

        return remove

    def dispatch(self, event: PointerEvent) -> bool:
        """Deliver an event. Returns False when nothing listens for it."""
        handlers = list(self._handlers.get(event.type, []))
        for handler in handlers:
            handler(event)
        return bool(handlers)

    def listener_count(self, event_type: Optional[PointerEventType] = None) -> int:
        if event_type is not None:
            return len(self._handlers.get(PointerEventType(event_type), []))
        return sum(len(handlers) for handlers in self._handlers.values())

    # Convenience constructors for hosts and tests

    def pointer_down(self, x: float, y: float, pointer_id: int = 0) -> bool:
        return self.dispatch(PointerEvent(PointerEventType.DOWN, x, y, pointer_id=pointer_id))

    def pointer_move(self, x: float, y: float, pointer_id: int = 0) -> bool:
        return self.dispatch(PointerEvent(PointerEventType.MOVE, x, y, pointer_id=pointer_id))

    def pointer_up(self, x: float, y: float, pointer_id: int = 0) -> bool:
        return self.dispatch(PointerEvent(PointerEventType.UP, x, y, pointer_id=pointer_id))

    def click(self, x: float, y: float) -> bool:
        return self.dispatch(PointerEvent(PointerEventType.CLICK, x, y))

    def dblclick(self, x: float, y: float) -> bool:
        return self.dispatch(PointerEvent(PointerEventType.DBLCLICK, x, y))

    def wheel(self, x: float, y: float, delta_y: float, delta_mode: int = 0) -> bool:
        return self.dispatch(PointerEvent(PointerEventType.WHEEL, x, y, delta_y=delta_y, delta_mode=delta_mode))
