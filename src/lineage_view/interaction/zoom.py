"""
Zoom and pan.

A ZoomTransform maps layout coordinates to screen pixels:
`screen = layout * k + (x, y)`. ZoomBehavior owns the current transform,
applies gestures to it within the scale extent, and animates transitions
(used by fit-to-view).
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..config import InteractionConfig
from ..core.types import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoomTransform:
    """Uniform scale `k` followed by translation `(x, y)`."""
    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point) -> Point:
        return (point[0] * self.k + self.x, point[1] * self.k + self.y)

    def invert(self, point: Point) -> Point:
        return ((point[0] - self.x) / self.k, (point[1] - self.y) / self.k)

    def translate(self, tx: float, ty: float) -> "ZoomTransform":
        """Translate by (tx, ty) in layout units."""
        return ZoomTransform(self.k, self.x + self.k * tx, self.y + self.k * ty)

    def scale(self, k: float) -> "ZoomTransform":
        return ZoomTransform(self.k * k, self.x, self.y)

    def to_svg(self) -> str:
        return f"translate({self.x:g},{self.y:g}) scale({self.k:g})"

    def to_dict(self) -> dict:
        return {"k": self.k, "x": self.x, "y": self.y}


IDENTITY = ZoomTransform()


def ease_cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


class ZoomTransition:
    """Eased interpolation between two transforms over a fixed duration."""

    def __init__(self, start: ZoomTransform, end: ZoomTransform, duration_ms: float):
        self.start = start
        self.end = end
        self.duration_ms = duration_ms
        self.elapsed_ms = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed_ms >= self.duration_ms

    def advance(self, elapsed_ms: float) -> ZoomTransform:
        self.elapsed_ms += elapsed_ms
        if self.done:
            return self.end
        t = ease_cubic_in_out(self.elapsed_ms / self.duration_ms)
        return ZoomTransform(
            self.start.k + (self.end.k - self.start.k) * t,
            self.start.x + (self.end.x - self.start.x) * t,
            self.start.y + (self.end.y - self.start.y) * t,
        )


ZoomListener = Callable[[ZoomTransform], None]


class ZoomBehavior:
    """
    Current view transform plus the gestures that change it.

    Scale is clamped to `scale_extent` on every change. Any gesture
    interrupts a running transition.
    """

    def __init__(self, config: Optional[InteractionConfig] = None):
        self.config = config or InteractionConfig()
        self.transform = IDENTITY
        self._listeners: List[ZoomListener] = []
        self._transition: Optional[ZoomTransition] = None

    def on_zoom(self, listener: ZoomListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    @property
    def transitioning(self) -> bool:
        return self._transition is not None

    def clamp_scale(self, k: float) -> float:
        low, high = self.config.scale_extent
        return max(low, min(high, k))

    def set_transform(self, transform: ZoomTransform) -> None:
        self.transform = ZoomTransform(self.clamp_scale(transform.k), transform.x, transform.y)
        for listener in list(self._listeners):
            listener(self.transform)

    # =========================================================================
    # Gestures
    # =========================================================================

    def scale_to(self, k: float, anchor: Point) -> None:
        """Zoom to scale k keeping the layout point under `anchor` fixed on screen."""
        self.interrupt()
        k = self.clamp_scale(k)
        lx, ly = self.transform.invert(anchor)
        self.set_transform(ZoomTransform(k, anchor[0] - lx * k, anchor[1] - ly * k))

    def scale_by(self, factor: float, anchor: Point) -> None:
        self.scale_to(self.transform.k * factor, anchor)

    def pan_by(self, dx: float, dy: float) -> None:
        """Shift the view by a screen-pixel delta."""
        self.interrupt()
        self.set_transform(ZoomTransform(self.transform.k, self.transform.x + dx, self.transform.y + dy))

    def wheel(self, anchor: Point, delta_y: float, delta_mode: int = 0) -> None:
        if delta_mode == 1:
            unit = 0.05
        elif delta_mode:
            unit = 1.0
        else:
            unit = self.config.wheel_delta_factor
        self.scale_by(2 ** (-delta_y * unit), anchor)

    def dblclick(self, anchor: Point) -> None:
        self.scale_by(self.config.dblclick_factor, anchor)

    # =========================================================================
    # Transitions
    # =========================================================================

    def transition_to(self, target: ZoomTransform, duration_ms: float) -> None:
        target = ZoomTransform(self.clamp_scale(target.k), target.x, target.y)
        if duration_ms <= 0:
            self.interrupt()
            self.set_transform(target)
            return
        logger.debug(f"Zoom transition to {target} over {duration_ms}ms")
        self._transition = ZoomTransition(self.transform, target, duration_ms)

    def advance(self, elapsed_ms: float) -> None:
        """Move a running transition forward by one frame."""
        if self._transition is None:
            return
        transition = self._transition
        transform = transition.advance(elapsed_ms)
        if transition.done:
            self._transition = None
        self.set_transform(transform)

    def interrupt(self) -> None:
        self._transition = None

    def close(self) -> None:
        self._transition = None
        self._listeners.clear()
