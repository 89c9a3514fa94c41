from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Generic, List, Optional, Tuple, TypeVar, Union

from quadset.errors import InvalidNodeOperation

from .views import PointView

P = TypeVar("P")


class Quadrant(IntEnum):
    NE = 0
    NW = 1
    SW = 2
    SE = 3


ALL_QUADRANTS: Tuple[Quadrant, ...] = (Quadrant.NE, Quadrant.NW, Quadrant.SW, Quadrant.SE)


def quadrant_of(x: float, y: float, cx: float, cy: float) -> Quadrant:
    """Route ``(x, y)`` against centroid ``(cx, cy)``; ties go north/east."""
    if x >= cx:
        return Quadrant.NE if y >= cy else Quadrant.SE
    return Quadrant.NW if y >= cy else Quadrant.SW


def in_rect(x: float, y: float, xl: float, yl: float, xu: float, yu: float) -> bool:
    return xl <= x <= xu and yl <= y <= yu


def in_one_quadrant(cx: float, cy: float, xl: float, yl: float, xu: float, yu: float) -> bool:
    return ((xl < cx) == (xu < cx)) and ((yl < cy) == (yu < cy))


def quadrants_for_range(
    cx: float, cy: float, xl: float, yl: float, xu: float, yu: float
) -> Tuple[Quadrant, ...]:
    """Quadrants of a split at ``(cx, cy)`` that may hold points of the closed rectangle.

    Three cases:

    * the centroid lies inside the rectangle, so every quadrant may overlap it;
    * all four corners route to the same quadrant, so only that one is searched;
    * the rectangle straddles the centroid along exactly one axis, so the two
      quadrants on its side of the other axis are searched.

    Points with ``x == cx`` (or ``y == cy``) are routed east (or north), so a
    rectangle whose lower bound equals the centroid coordinate lies entirely on
    the upper side.
    """
    if in_rect(cx, cy, xl, yl, xu, yu):
        return ALL_QUADRANTS
    if in_one_quadrant(cx, cy, xl, yl, xu, yu):
        return (quadrant_of(xl, yl, cx, cy),)

    if xl >= cx:
        return (Quadrant.NE, Quadrant.SE)
    if yl >= cy:
        return (Quadrant.NE, Quadrant.NW)
    if xu >= cx:
        return (Quadrant.SW, Quadrant.SE)
    return (Quadrant.NW, Quadrant.SW)


@dataclass
class BucketNode(Generic[P]):
    """Leaf holding points directly.

    ``distinct`` counts occupied coordinates, ``total`` counts stored entries.
    """

    depth: int = 0
    points: List[P] = field(default_factory=list)
    distinct: int = 0
    total: int = 0

    def find(self, p: P, view: PointView[P]) -> Optional[int]:
        for i, q in enumerate(self.points):
            if view.equals(p, q):
                return i
        return None

    def has_coord(self, x: float, y: float, view: PointView[P]) -> bool:
        return any(view.x(q) == x and view.y(q) == y for q in self.points)

    def add_point(self, p: P, view: PointView[P]) -> bool:
        if self.find(p, view) is not None:
            return False
        if not self.has_coord(view.x(p), view.y(p), view):
            self.distinct += 1
        self.points.append(p)
        self.total += 1
        return True

    def remove_point(self, p: P, view: PointView[P]) -> bool:
        i = self.find(p, view)
        if i is None:
            return False
        removed = self.points.pop(i)
        self.total -= 1
        if not self.has_coord(view.x(removed), view.y(removed), view):
            self.distinct -= 1
        return True


@dataclass
class SplitNode(Generic[P]):
    """Internal node: a fixed centroid and one child per quadrant, indexed by :class:`Quadrant`."""

    depth: int
    cx: float
    cy: float
    children: List["Node[P]"]


Node = Union[BucketNode[Any], SplitNode[Any]]


def node_kind(node: Node) -> str:
    return "bucket" if isinstance(node, BucketNode) else "split"


def bucket_points(node: Node) -> List[Any]:
    if not isinstance(node, BucketNode):
        raise InvalidNodeOperation("bucket_points", node_kind(node))
    return list(node.points)


def centroid(node: Node) -> Tuple[float, float]:
    if not isinstance(node, SplitNode):
        raise InvalidNodeOperation("centroid", node_kind(node))
    return (node.cx, node.cy)


def child(node: Node, quadrant: Quadrant) -> Node:
    if not isinstance(node, SplitNode):
        raise InvalidNodeOperation("child", node_kind(node))
    return node.children[Quadrant(quadrant)]
