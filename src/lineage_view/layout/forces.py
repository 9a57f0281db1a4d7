"""
Forces for the layout simulation.

Each force nudges node velocities (or, for centering, positions) once per
tick. Forces scaled by `alpha` fade out as the simulation cools; collision
is not scaled, so overlap resolution keeps working on a cold layout.
"""

import math
from typing import Callable, List, Union

from ..core.links import LinkSet
from ..core.types import LayoutNode

Jiggle = Callable[[], float]

# Per-node target coordinate, or one coordinate for every node
Target = Union[float, Callable[[LayoutNode], float]]


class Force:
    """Base class. `initialize` runs once, `apply` every tick."""

    def __init__(self):
        self.nodes: List[LayoutNode] = []
        self._jiggle: Jiggle = lambda: 0.0

    def initialize(self, nodes: List[LayoutNode], jiggle: Jiggle) -> None:
        self.nodes = nodes
        self._jiggle = jiggle

    def apply(self, alpha: float) -> None:
        raise NotImplementedError


class LinkForce(Force):
    """
    Spring toward `distance` along every edge.

    The correction is split between endpoints by degree: the better
    connected endpoint moves less.
    """

    def __init__(self, links: LinkSet, distance: float, strength: float, iterations: int = 1):
        super().__init__()
        self.links = links
        self.distance = distance
        self.strength = strength
        self.iterations = iterations
        self._bias: List[float] = []

    def initialize(self, nodes: List[LayoutNode], jiggle: Jiggle) -> None:
        super().initialize(nodes, jiggle)
        self._bias = []
        for edge in self.links:
            source_count = self.links.degree(edge.source.name)
            target_count = self.links.degree(edge.target.name)
            self._bias.append(source_count / (source_count + target_count))

    def apply(self, alpha: float) -> None:
        for _ in range(self.iterations):
            for edge, bias in zip(self.links, self._bias):
                source, target = edge.source, edge.target
                x = target.x + target.vx - source.x - source.vx or self._jiggle()
                y = target.y + target.vy - source.y - source.vy or self._jiggle()
                length = math.sqrt(x * x + y * y)
                length = (length - self.distance) / length * alpha * self.strength
                x *= length
                y *= length
                target.vx -= x * bias
                target.vy -= y * bias
                source.vx += x * (1 - bias)
                source.vy += y * (1 - bias)


class CollideForce(Force):
    """Push apart any two nodes whose circles of `radius` overlap."""

    def __init__(self, radius: float, strength: float, iterations: int = 1):
        super().__init__()
        self.radius = radius
        self.strength = strength
        self.iterations = iterations

    def apply(self, alpha: float) -> None:
        reach = self.radius * 2
        for _ in range(self.iterations):
            for i, node in enumerate(self.nodes):
                xi = node.x + node.vx
                yi = node.y + node.vy
                for other in self.nodes[i + 1:]:
                    x = xi - other.x - other.vx
                    y = yi - other.y - other.vy
                    distance_sq = x * x + y * y
                    if distance_sq >= reach * reach:
                        continue
                    if x == 0:
                        x = self._jiggle()
                        distance_sq += x * x
                    if y == 0:
                        y = self._jiggle()
                        distance_sq += y * y
                    distance = math.sqrt(distance_sq)
                    push = (reach - distance) / distance * self.strength
                    # Equal radii: the push is shared evenly
                    node.vx += x * push * 0.5
                    node.vy += y * push * 0.5
                    other.vx -= x * push * 0.5
                    other.vy -= y * push * 0.5


class _PositionForce(Force):
    def __init__(self, target: Target, strength: float):
        super().__init__()
        self.target = target
        self.strength = strength
        self._targets: List[float] = []

    def initialize(self, nodes: List[LayoutNode], jiggle: Jiggle) -> None:
        super().initialize(nodes, jiggle)
        if callable(self.target):
            self._targets = [float(self.target(node)) for node in nodes]
        else:
            self._targets = [float(self.target)] * len(nodes)


class PositionXForce(_PositionForce):
    """Pull each node's x toward its target coordinate."""

    def apply(self, alpha: float) -> None:
        k = self.strength * alpha
        for node, target in zip(self.nodes, self._targets):
            node.vx += (target - node.x) * k


class PositionYForce(_PositionForce):
    """Pull each node's y toward its target coordinate."""

    def apply(self, alpha: float) -> None:
        k = self.strength * alpha
        for node, target in zip(self.nodes, self._targets):
            node.vy += (target - node.y) * k


class CenterForce(Force):
    """Translate all nodes so their centroid moves toward (x, y)."""

    def __init__(self, x: float, y: float, strength: float = 1.0):
        super().__init__()
        self.x = x
        self.y = y
        self.strength = strength

    def apply(self, alpha: float) -> None:
        n = len(self.nodes)
        if not n:
            return
        shift_x = (sum(node.x for node in self.nodes) / n - self.x) * self.strength
        shift_y = (sum(node.y for node in self.nodes) / n - self.y) * self.strength
        for node in self.nodes:
            node.x -= shift_x
            node.y -= shift_y


def depth_target(anchor_x: float, spacing: float) -> Callable[[LayoutNode], float]:
    """X coordinate of a node's depth column: roots at anchor_x, deeper nodes to the left."""

    def target(node: LayoutNode) -> float:
        return anchor_x - spacing * max(node.depth, 0)

    return target


def total_energy(nodes: List[LayoutNode]) -> float:
    """Sum of squared velocities of the free nodes."""
    return sum(node.vx * node.vx + node.vy * node.vy for node in nodes if not node.pinned)
