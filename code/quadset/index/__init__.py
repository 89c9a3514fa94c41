"""Point index data structures.

Exports :class:`QuadTree`, the node variant types and the point views used
to project caller-defined points onto the plane.
"""

from __future__ import annotations

from .nodes import BucketNode, Node, Quadrant, SplitNode, quadrant_of, quadrants_for_range
from .quadtree import QuadTree, build_quadtree
from .views import DEFAULT_VIEW, PointView, QuadPoint, QuadPointView, TupleView

__all__ = [
    "QuadTree",
    "build_quadtree",
    "BucketNode",
    "SplitNode",
    "Node",
    "Quadrant",
    "quadrant_of",
    "quadrants_for_range",
    "PointView",
    "QuadPoint",
    "QuadPointView",
    "TupleView",
    "DEFAULT_VIEW",
]
