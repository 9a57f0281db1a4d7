"""
Core type definitions for the lineage view.

`Node` is the caller's record and stays immutable. `LayoutNode` is the
engine's mutable working copy: depth, position, velocity and drag pin.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

UNASSIGNED_DEPTH = -1

Point = Tuple[float, float]


class Node(BaseModel):
    """
    A named entity of the lineage graph.

    Any field besides `name` and `dependencies` is payload: the engine
    passes it through untouched to node renderers and the details listing.
    """
    name: str
    dependencies: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def payload(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def fields(self) -> Dict[str, Any]:
        """All fields in declaration order, payload last."""
        return {"name": self.name, "dependencies": list(self.dependencies), **self.payload}

    def __hash__(self):
        return hash(self.name)


@dataclass(eq=False)
class LayoutNode:
    """
    Simulation state of one node.

    Positions stay None until the simulation places the node. `fx`/`fy`
    are only set while a drag gesture holds the node.
    """
    node: Node
    index: int = 0
    depth: int = UNASSIGNED_DEPTH
    in_degree: int = 0
    x: Optional[float] = None
    y: Optional[float] = None
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def dependencies(self) -> List[str]:
        return self.node.dependencies

    @property
    def is_root(self) -> bool:
        return self.in_degree == 0

    @property
    def pinned(self) -> bool:
        return self.fx is not None or self.fy is not None

    @property
    def position(self) -> Point:
        return (self.x or 0.0, self.y or 0.0)

    def pin(self, x: float, y: float) -> None:
        self.fx = x
        self.fy = y

    def unpin(self) -> None:
        self.fx = None
        self.fy = None


@dataclass(frozen=True, eq=False)
class Edge:
    """
    Directed dependency: `source` declares `target` as a dependency.
    """
    source: LayoutNode
    target: LayoutNode

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source.name, self.target.name)


@dataclass
class Bounds:
    """Axis-aligned rectangle given by its corners."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def around(cls, center: Point, half_width: float, half_height: float) -> "Bounds":
        cx, cy = center
        return cls(cx - half_width, cy - half_height, cx + half_width, cy + half_height)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )


@dataclass(frozen=True)
class Viewport:
    """Size of the hosting surface in screen pixels."""
    width: float
    height: float

    @property
    def center(self) -> Point:
        return (self.width / 2, self.height / 2)


@dataclass
class DetailEntry:
    """One row of the selected node's details listing."""
    key: str
    value: Any = None

    def __str__(self) -> str:
        if isinstance(self.value, (list, tuple)):
            return f"{self.key}: {', '.join(str(v) for v in self.value)}"
        return f"{self.key}: {self.value}"
