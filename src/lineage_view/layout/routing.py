"""
Edge routing.

Edges leave the right side of the upstream box and enter the left side of
the downstream box as a cubic curve. Depth columns make most edges point
left to right, giving a plain S-curve. When an edge points back (its end
port lies left of its start port) an S-curve would cut straight through
the boxes, so it is drawn as a loop bowed above or below instead.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from ..config import BoxConfig, RoutingConfig
from ..core.types import Bounds, Edge, LayoutNode, Point


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


@dataclass(frozen=True)
class CurvePath:
    """A cubic Bezier curve from `start` to `end`."""
    start: Point
    control1: Point
    control2: Point
    end: Point
    backward: bool = False

    def to_svg(self) -> str:
        """SVG path data: `M x,y C c1x,c1y c2x,c2y x,y`."""
        (sx, sy), (ax, ay), (bx, by), (ex, ey) = self.start, self.control1, self.control2, self.end
        return (
            f"M{_fmt(sx)},{_fmt(sy)} "
            f"C{_fmt(ax)},{_fmt(ay)} {_fmt(bx)},{_fmt(by)} {_fmt(ex)},{_fmt(ey)}"
        )

    def point_at(self, t: float) -> Point:
        return (
            _cubic(self.start[0], self.control1[0], self.control2[0], self.end[0], t),
            _cubic(self.start[1], self.control1[1], self.control2[1], self.end[1], t),
        )

    def bounds(self) -> Bounds:
        """Tight bounding box of the drawn curve (not of its control polygon)."""
        xs = _axis_extent(self.start[0], self.control1[0], self.control2[0], self.end[0])
        ys = _axis_extent(self.start[1], self.control1[1], self.control2[1], self.end[1])
        return Bounds(min(xs), min(ys), max(xs), max(ys))


def _cubic(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    u = 1 - t
    return u * u * u * p0 + 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t * p3


def _axis_extent(p0: float, p1: float, p2: float, p3: float) -> List[float]:
    """Curve coordinates at both ends and at every interior extremum on one axis."""
    values = [p0, p3]
    # Derivative of the cubic: a*t^2 + b*t + c
    a = 3 * (-p0 + 3 * p1 - 3 * p2 + p3)
    b = 6 * (p0 - 2 * p1 + p2)
    c = 3 * (p1 - p0)

    roots: List[float] = []
    if abs(a) < 1e-12:
        if abs(b) > 1e-12:
            roots.append(-c / b)
    else:
        discriminant = b * b - 4 * a * c
        if discriminant >= 0:
            sqrt_d = math.sqrt(discriminant)
            roots.extend([(-b + sqrt_d) / (2 * a), (-b - sqrt_d) / (2 * a)])

    for t in roots:
        if 0 < t < 1:
            values.append(_cubic(p0, p1, p2, p3, t))
    return values


class EdgeRouter:
    """
    Computes connector curves between node boxes.

    Usage:
        router = EdgeRouter(BoxConfig(), RoutingConfig())
        path = router.route_edge(edge).to_svg()
    """

    def __init__(self, box: Optional[BoxConfig] = None, config: Optional[RoutingConfig] = None):
        self.box = box or BoxConfig()
        self.config = config or RoutingConfig()

    def route(self, start_node: LayoutNode, end_node: LayoutNode) -> CurvePath:
        """Curve from the right edge of `start_node` to the left edge of `end_node`."""
        sx, sy = start_node.position
        ex, ey = end_node.position
        return self.route_points((sx + self.box.half_width, sy), (ex - self.box.half_width, ey))

    def route_points(self, start: Point, end: Point) -> CurvePath:
        """Curve between two port coordinates."""
        sx, sy = start
        ex, ey = end

        if ex >= sx - self.config.backward_threshold:
            mid_x = sx + (ex - sx) / 2
            return CurvePath(start, (mid_x, sy), (mid_x, ey), end)

        direction = 1.0 if ey >= sy else -1.0
        dx = self.config.backward_offset_x
        dy = self.config.backward_offset_y * direction
        return CurvePath(start, (sx + dx, sy + dy), (ex - dx, ey - dy), end, backward=True)

    def route_edge(self, edge: Edge) -> CurvePath:
        """
        Curve for a dependency edge.

        Dependencies sit in deeper columns to the left, so the curve starts at
        the dependency (`edge.target`) and ends at the node that declares it.
        """
        return self.route(edge.target, edge.source)
