"""
Node dragging.

A dragged node is pinned: the simulation holds it at the pointer while the
rest of the layout reacts. Starting the first concurrent drag warms the
simulation up; ending the last lets it cool down and settle again.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import InteractionConfig
from ..core.types import LayoutNode, Point
from ..layout.simulation import ForceSimulation

logger = logging.getLogger(__name__)


@dataclass
class DragGesture:
    """One active drag; the offset keeps the grab point under the pointer."""
    node: LayoutNode
    offset_x: float
    offset_y: float
    moved: bool = False


class DragHandler:
    def __init__(self, simulation: ForceSimulation, config: Optional[InteractionConfig] = None):
        self.simulation = simulation
        self.config = config or InteractionConfig()
        self.active = 0

    def start(self, node: LayoutNode, point: Point) -> DragGesture:
        """Pin `node` where it is. `point` is the pointer in layout coordinates."""
        if not self.active:
            self.simulation.alpha_target(self.config.drag_alpha_target).restart()
        self.active += 1

        x, y = node.position
        node.pin(x, y)
        logger.debug(f"Drag start on {node.name}")
        return DragGesture(node, x - point[0], y - point[1])

    def move(self, gesture: DragGesture, point: Point) -> None:
        gesture.node.pin(point[0] + gesture.offset_x, point[1] + gesture.offset_y)
        gesture.moved = True

    def end(self, gesture: DragGesture) -> None:
        self.active = max(self.active - 1, 0)
        if not self.active:
            self.simulation.alpha_target(0)
        gesture.node.unpin()
        logger.debug(f"Drag end on {gesture.node.name}")
