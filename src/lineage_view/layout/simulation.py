"""
Force-directed layout simulation.

The simulation cools a temperature `alpha` every tick and applies its
named forces scaled by it, then integrates velocities into positions.
It fires two events:
- tick: after every frame's step, listen to this to repaint
- end: alpha dropped below `alpha_min` (or the tick budget ran out) and the
  simulation stopped; fires again after every restart that settles

A host calls `step()` once per animation frame. `run()` drives the
simulation synchronously until it stops.
"""

import logging
import math
import random
from typing import Callable, Dict, Iterable, List, Optional

from ..config import LayoutConfig
from ..core.links import LinkSet
from ..core.types import LayoutNode, Viewport
from .forces import (
    CenterForce,
    CollideForce,
    Force,
    LinkForce,
    PositionXForce,
    PositionYForce,
    depth_target,
    total_energy,
)

logger = logging.getLogger(__name__)

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))

EVENTS = ("tick", "end")

Listener = Callable[[], None]


class ForceSimulation:
    """
    Iterative physics solver over LayoutNodes.

    Usage:
        simulation = ForceSimulation(nodes, config)
        simulation.add_force("center", CenterForce(400, 300))
        simulation.on("end", lambda: print("settled"))
        simulation.run()
    """

    def __init__(self, nodes: Iterable[LayoutNode], config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()
        self.nodes: List[LayoutNode] = list(nodes)
        self._forces: Dict[str, Force] = {}
        self._listeners: Dict[str, Listener] = {}
        self._random = random.Random(self.config.seed)

        self.alpha = self.config.alpha
        self.alpha_min = self.config.alpha_min
        self.alpha_decay = self.config.resolved_alpha_decay
        self.velocity_decay = self.config.velocity_decay
        self._alpha_target = 0.0

        self._running = True
        self._ticks_since_restart = 0
        self.total_ticks = 0

        self._place_nodes()

    # =========================================================================
    # Configuration
    # =========================================================================

    def add_force(self, name: str, force: Force) -> "ForceSimulation":
        """Register (or replace) a named force and initialize it."""
        force.initialize(self.nodes, self._jiggle)
        self._forces[name] = force
        return self

    def remove_force(self, name: str) -> "ForceSimulation":
        self._forces.pop(name, None)
        return self

    def get_force(self, name: str) -> Optional[Force]:
        return self._forces.get(name)

    def on(self, event: str, listener: Optional[Listener]) -> "ForceSimulation":
        """Set the listener for an event. Passing None removes it."""
        if event not in EVENTS:
            raise ValueError(f"Unknown simulation event: {event}")
        if listener is None:
            self._listeners.pop(event, None)
        else:
            self._listeners[event] = listener
        return self

    # =========================================================================
    # Control
    # =========================================================================

    @property
    def running(self) -> bool:
        return self._running

    @property
    def energy(self) -> float:
        return total_energy(self.nodes)

    def alpha_target(self, value: float) -> "ForceSimulation":
        """
        Set the temperature alpha converges to. A target above alpha_min keeps it warm.

        Cooling down from a warm target starts a fresh tick budget.
        """
        if self._alpha_target >= self.alpha_min > value:
            self._ticks_since_restart = 0
        self._alpha_target = value
        return self

    def restart(self) -> "ForceSimulation":
        if not self._running:
            logger.debug(f"Simulation restarted at alpha={self.alpha:.4f}")
        self._running = True
        self._ticks_since_restart = 0
        return self

    def stop(self) -> "ForceSimulation":
        self._running = False
        return self

    # =========================================================================
    # Stepping
    # =========================================================================

    def tick(self, iterations: int = 1) -> "ForceSimulation":
        """Advance the physics without firing events."""
        for _ in range(iterations):
            self.alpha += (self._alpha_target - self.alpha) * self.alpha_decay

            for force in self._forces.values():
                force.apply(self.alpha)

            for node in self.nodes:
                if node.fx is None:
                    node.vx *= 1 - self.velocity_decay
                    node.x += node.vx
                else:
                    node.x = node.fx
                    node.vx = 0.0
                if node.fy is None:
                    node.vy *= 1 - self.velocity_decay
                    node.y += node.vy
                else:
                    node.y = node.fy
                    node.vy = 0.0
        return self

    def step(self) -> bool:
        """
        Run one animation frame: tick, notify, and stop once settled.

        Returns:
            True while the simulation keeps running.
        """
        if not self._running:
            return False

        self.tick()
        self.total_ticks += 1
        self._ticks_since_restart += 1
        self._emit("tick")

        if self.alpha < self.alpha_min or self._budget_exhausted():
            self._running = False
            logger.debug(
                f"Simulation settled after {self.total_ticks} ticks "
                f"(alpha={self.alpha:.4f}, energy={self.energy:.4f})"
            )
            self._emit("end")
        return self._running

    def run(self, max_frames: Optional[int] = None) -> int:
        """Step until the simulation stops. Returns the number of frames run."""
        limit = max_frames if max_frames is not None else self.config.max_ticks
        frames = 0
        while self._running and frames < limit:
            self.step()
            frames += 1
        return frames

    def _budget_exhausted(self) -> bool:
        # A warm target (an active drag) is allowed to run indefinitely
        if self._alpha_target >= self.alpha_min:
            return False
        return self._ticks_since_restart >= self.config.max_ticks

    def _emit(self, event: str) -> None:
        listener = self._listeners.get(event)
        if listener is not None:
            listener()

    # =========================================================================
    # Initialization
    # =========================================================================

    def _place_nodes(self) -> None:
        """Put unplaced nodes on a phyllotaxis spiral, which avoids coincident starts."""
        for i, node in enumerate(self.nodes):
            if node.fx is not None:
                node.x = node.fx
            if node.fy is not None:
                node.y = node.fy
            if node.x is None or node.y is None:
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = radius * math.cos(angle)
                node.y = radius * math.sin(angle)
            node.vx = node.vx or 0.0
            node.vy = node.vy or 0.0

    def _jiggle(self) -> float:
        return (self._random.random() - 0.5) * 1e-6


def create_force_simulation(
    nodes: Iterable[LayoutNode],
    links: LinkSet,
    viewport: Viewport,
    config: Optional[LayoutConfig] = None,
) -> ForceSimulation:
    """
    Build the lineage layout: depth columns along x, centered on the viewport.

    Forces:
    - link: springs along dependency edges
    - collide: keeps node boxes apart
    - align: weak pull toward the vertical center
    - depth: strong pull toward the node's depth column
    - center: keeps the centroid at the viewport center
    """
    config = config or LayoutConfig()
    simulation = ForceSimulation(nodes, config)
    width, height = viewport.width, viewport.height

    simulation.add_force("link", LinkForce(links, config.link_distance, config.link_strength))
    simulation.add_force("collide", CollideForce(config.collide_radius, config.collide_strength))
    simulation.add_force("align", PositionYForce(height / 2, config.align_strength))
    simulation.add_force(
        "depth",
        PositionXForce(depth_target(width * config.depth_anchor, config.depth_spacing), config.depth_strength),
    )
    simulation.add_force("center", CenterForce(width / 2, height / 2, config.center_strength))

    logger.debug(f"Created simulation for {len(simulation.nodes)} nodes in {width}x{height} viewport")
    return simulation
