"""
Interaction Controller.

Routes pointer input to the behavior it belongs to:
- pointer down on a node box drags the node; anywhere else it pans
- wheel and double click zoom around the pointer
- click on a node box selects that node
It also fits the whole graph into the viewport the first time the layout
settles. Later settles (after a drag) leave the view alone.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..config import BoxConfig, InteractionConfig
from ..core.graph import NodeMap
from ..core.links import LinkSet
from ..core.types import Bounds, LayoutNode, Node, Point, Viewport
from ..layout.routing import EdgeRouter
from ..layout.simulation import ForceSimulation
from .drag import DragGesture, DragHandler
from .events import PointerEvent, PointerEventType, PointerSurface
from .store import SelectionStore
from .zoom import ZoomBehavior, ZoomTransform

logger = logging.getLogger(__name__)


@dataclass
class _PanGesture:
    last: Point
    moved: bool = False


class InteractionController:
    """
    Pointer handling for one mounted view.

    All handlers registered by `attach` are removed by `detach`.
    """

    def __init__(
        self,
        node_map: NodeMap,
        links: LinkSet,
        simulation: ForceSimulation,
        store: SelectionStore,
        router: EdgeRouter,
        viewport: Viewport,
        box: Optional[BoxConfig] = None,
        config: Optional[InteractionConfig] = None,
    ):
        self.node_map = node_map
        self.links = links
        self.simulation = simulation
        self.store = store
        self.router = router
        self.viewport = viewport
        self.box = box or BoxConfig()
        self.config = config or InteractionConfig()

        self.zoom = ZoomBehavior(self.config)
        self.drag = DragHandler(simulation, self.config)

        self.convergence_count = 0
        self.fit_count = 0
        self._fitted = False
        self._drags: Dict[int, DragGesture] = {}
        self._pans: Dict[int, _PanGesture] = {}
        self._suppress_click = False
        self._detachers: List[Callable[[], None]] = []

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def attach(self, surface: PointerSurface) -> None:
        handlers = {
            PointerEventType.DOWN: self.handle_pointer_down,
            PointerEventType.MOVE: self.handle_pointer_move,
            PointerEventType.UP: self.handle_pointer_up,
            PointerEventType.CLICK: self.handle_click,
            PointerEventType.DBLCLICK: self.handle_dblclick,
            PointerEventType.WHEEL: self.handle_wheel,
        }
        for event_type, handler in handlers.items():
            self._detachers.append(surface.on(event_type, handler))
        self.simulation.on("end", self._on_simulation_end)

    def detach(self) -> None:
        for detach in self._detachers:
            detach()
        self._detachers.clear()
        self.simulation.on("end", None)
        self.zoom.close()
        for gesture in self._drags.values():
            gesture.node.unpin()
        self._drags.clear()
        self._pans.clear()

    # =========================================================================
    # Hit testing
    # =========================================================================

    def node_box(self, node: LayoutNode) -> Bounds:
        return Bounds.around(node.position, self.box.half_width, self.box.half_height)

    def node_at(self, screen_point: Point) -> Optional[LayoutNode]:
        """Topmost node whose box contains the screen point. Later nodes paint on top."""
        point = self.zoom.transform.invert(screen_point)
        for layout_node in reversed(list(self.node_map.values())):
            if self.node_box(layout_node).contains(point):
                return layout_node
        return None

    # =========================================================================
    # Pointer handlers
    # =========================================================================

    def handle_pointer_down(self, event: PointerEvent) -> None:
        self._suppress_click = False
        layout_node = self.node_at(event.point)
        if layout_node is not None:
            point = self.zoom.transform.invert(event.point)
            self._drags[event.pointer_id] = self.drag.start(layout_node, point)
        else:
            self.zoom.interrupt()
            self._pans[event.pointer_id] = _PanGesture(last=event.point)

    def handle_pointer_move(self, event: PointerEvent) -> None:
        gesture = self._drags.get(event.pointer_id)
        if gesture is not None:
            self.drag.move(gesture, self.zoom.transform.invert(event.point))
            return

        pan = self._pans.get(event.pointer_id)
        if pan is not None:
            dx = event.x - pan.last[0]
            dy = event.y - pan.last[1]
            if dx or dy:
                self.zoom.pan_by(dx, dy)
                pan.moved = True
            pan.last = event.point

    def handle_pointer_up(self, event: PointerEvent) -> None:
        gesture = self._drags.pop(event.pointer_id, None)
        if gesture is not None:
            self.drag.end(gesture)
            self._suppress_click = gesture.moved
            return

        pan = self._pans.pop(event.pointer_id, None)
        if pan is not None:
            self._suppress_click = pan.moved

    def handle_click(self, event: PointerEvent) -> None:
        if self._suppress_click:
            self._suppress_click = False
            return
        layout_node = self.node_at(event.point)
        if layout_node is not None:
            self.select(layout_node.name)

    def handle_dblclick(self, event: PointerEvent) -> None:
        self.zoom.dblclick(event.point)

    def handle_wheel(self, event: PointerEvent) -> None:
        self.zoom.wheel(event.point, event.delta_y, event.delta_mode)

    # =========================================================================
    # Selection
    # =========================================================================

    def select(self, name: Optional[str]) -> Optional[Node]:
        """
        Publish the node called `name` as the selection.

        An unknown name (stale data) clears the selection instead of failing.
        """
        layout_node = self.node_map.get(name) if name is not None else None
        node = layout_node.node if layout_node is not None else None
        self.store.set_node(node)
        return node

    @property
    def selected_name(self) -> Optional[str]:
        node = self.store.get_node()
        return node.name if node is not None else None

    def is_selected(self, name: str) -> bool:
        return self.selected_name == name

    # =========================================================================
    # Fit to view
    # =========================================================================

    def content_bounds(self) -> Optional[Bounds]:
        """Bounds of all painted geometry in layout coordinates: node boxes and edge curves."""
        bounds: Optional[Bounds] = None
        for layout_node in self.node_map.values():
            box = self.node_box(layout_node)
            bounds = box if bounds is None else bounds.union(box)
        for edge in self.links:
            curve = self.router.route_edge(edge).bounds()
            bounds = curve if bounds is None else bounds.union(curve)
        return bounds

    def fit_transform(self) -> Optional[ZoomTransform]:
        """Transform that shows the whole graph centered, with a margin."""
        bounds = self.content_bounds()
        if bounds is None:
            return None

        width, height = self.viewport.width, self.viewport.height
        ratio = max(bounds.width / width, bounds.height / height)
        if ratio <= 0:
            return None

        scale = self.zoom.clamp_scale(self.config.fit_padding / ratio)
        mid_x, mid_y = bounds.center
        return ZoomTransform(scale, width / 2 - scale * mid_x, height / 2 - scale * mid_y)

    def fit_to_view(self, animate: bool = True) -> Optional[ZoomTransform]:
        target = self.fit_transform()
        if target is None:
            logger.debug("Nothing to fit")
            return None
        duration = self.config.fit_duration_ms if animate else 0
        self.zoom.transition_to(target, duration)
        self.fit_count += 1
        logger.info(f"Fitting view: scale={target.k:.3f}")
        return target

    def _on_simulation_end(self) -> None:
        self.convergence_count += 1
        if self._fitted:
            return
        self._fitted = True
        self.fit_to_view()
