"""
Lineage View.

Mounts one lineage graph: indexes the nodes, assigns depths, resolves
links, starts the simulation and attaches pointer handling. The host then
drives it one animation frame at a time with `frame()` (or `run()` to
settle synchronously) and tears it down when the graph goes away.

Usage:
    with LineageView(nodes, Viewport(1200, 800)) as view:
        view.store.subscribe(lambda node: print(node and node.name))
        view.run()
        svg = render_svg(view)
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .config import FRAME_MS, ViewConfig
from .core.depth import assign_depths
from .core.graph import NodeInput, index_nodes
from .core.links import build_links
from .core.types import DetailEntry, Node, Viewport
from .interaction.controller import InteractionController
from .interaction.events import PointerSurface
from .interaction.store import SelectionStore
from .interaction.zoom import ZoomTransform
from .layout.routing import CurvePath, EdgeRouter
from .layout.simulation import create_force_simulation
from .render.nodes import NodeRenderer, as_renderer

logger = logging.getLogger(__name__)


class LineageView:
    """
    One mounted lineage graph and everything it owns.

    Construction fails before anything is laid out if the node list has a
    dangling dependency or a duplicate name.
    """

    def __init__(
        self,
        nodes: Iterable[NodeInput],
        viewport: Viewport,
        config: Optional[ViewConfig] = None,
        renderer: Union[NodeRenderer, Callable[[Node], str], None] = None,
        store: Optional[SelectionStore] = None,
        surface: Optional[PointerSurface] = None,
    ):
        self.config = config or ViewConfig()
        self.viewport = viewport
        self.renderer = as_renderer(renderer)

        self.node_map = index_nodes(nodes)
        assign_depths(self.node_map)
        self.links = build_links(self.node_map)

        self.store = store or SelectionStore(fullscreen=self.config.fullscreen)
        self.surface = surface or PointerSurface()
        self.router = EdgeRouter(self.config.box, self.config.routing)
        self.simulation = create_force_simulation(
            self.node_map.values(), self.links, viewport, self.config.layout
        )
        self.controller = InteractionController(
            self.node_map,
            self.links,
            self.simulation,
            self.store,
            self.router,
            viewport,
            box=self.config.box,
            config=self.config.interaction,
        )

        self.curves: List[CurvePath] = []
        self.simulation.on("tick", self._update_positions)
        self.controller.attach(self.surface)
        self._update_positions()
        self._mounted = True

        logger.info(f"Mounted lineage view: {len(self.node_map)} nodes, {len(self.links)} links")

    def __enter__(self) -> "LineageView":
        return self

    def __exit__(self, *exc) -> None:
        self.teardown()

    # =========================================================================
    # Driving
    # =========================================================================

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def idle(self) -> bool:
        """No simulation ticks and no zoom transition pending."""
        return not self.simulation.running and not self.controller.zoom.transitioning

    def frame(self, elapsed_ms: float = FRAME_MS) -> None:
        """One animation frame: a simulation tick and the zoom transition's progress."""
        if not self._mounted:
            return
        self.simulation.step()
        self.controller.zoom.advance(elapsed_ms)

    def run(self, max_frames: Optional[int] = None, elapsed_ms: float = FRAME_MS) -> int:
        """Run frames until idle. Returns the number of frames run."""
        limit = max_frames if max_frames is not None else self.config.layout.max_ticks * 2
        frames = 0
        while self._mounted and not self.idle and frames < limit:
            self.frame(elapsed_ms)
            frames += 1
        return frames

    def _update_positions(self) -> None:
        self.curves = [self.router.route_edge(edge) for edge in self.links]

    # =========================================================================
    # Read access for collaborators
    # =========================================================================

    @property
    def transform(self) -> ZoomTransform:
        return self.controller.zoom.transform

    @property
    def selected(self) -> Optional[Node]:
        return self.store.get_node()

    def is_selected(self, name: str) -> bool:
        return self.controller.is_selected(name)

    def details(self) -> List[DetailEntry]:
        """Fields of the selected node, for a details panel. Empty without a selection."""
        node = self.store.get_node()
        if node is None:
            return []
        return [DetailEntry(key, value) for key, value in node.fields().items()]

    def snapshot(self) -> Dict[str, Any]:
        """JSON-serialisable state of the layout and view."""
        return {
            "viewport": {"width": self.viewport.width, "height": self.viewport.height},
            "transform": self.transform.to_dict(),
            "settled": not self.simulation.running,
            "ticks": self.simulation.total_ticks,
            "selected": self.controller.selected_name,
            "nodes": [
                {
                    "name": layout_node.name,
                    "depth": layout_node.depth,
                    "in_degree": layout_node.in_degree,
                    "x": layout_node.x,
                    "y": layout_node.y,
                }
                for layout_node in self.node_map.values()
            ],
            "edges": [
                {
                    "source": edge.source.name,
                    "target": edge.target.name,
                    "path": curve.to_svg(),
                    "backward": curve.backward,
                }
                for edge, curve in zip(self.links, self.curves)
            ],
        }

    # =========================================================================
    # Teardown
    # =========================================================================

    def teardown(self) -> None:
        """Stop the simulation and drop every listener. Safe to call twice."""
        if not self._mounted:
            return
        self.simulation.stop()
        self.simulation.on("tick", None)
        self.controller.detach()
        self.store.close()
        self._mounted = False
        logger.debug("Lineage view torn down")
