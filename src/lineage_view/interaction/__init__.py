"""
Interaction modules: pointer events, zoom/pan, drag, selection.
"""

from .controller import InteractionController
from .drag import DragGesture, DragHandler
from .events import PointerEvent, PointerEventType, PointerSurface
from .store import ObservableValue, SelectionStore
from .zoom import IDENTITY, ZoomBehavior, ZoomTransform, ZoomTransition

__all__ = [
    "InteractionController",
    "DragGesture", "DragHandler",
    "PointerEvent", "PointerEventType", "PointerSurface",
    "ObservableValue", "SelectionStore",
    "IDENTITY", "ZoomBehavior", "ZoomTransform", "ZoomTransition",
]
