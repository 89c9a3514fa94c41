from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

import numpy as np

from quadset.utils.loggers import get_logger

from .nodes import BucketNode, Node, Quadrant, SplitNode, in_rect, quadrant_of, quadrants_for_range
from .views import DEFAULT_VIEW, PointView

if TYPE_CHECKING:
    from quadset.cfg.schema import IndexConfig

P = TypeVar("P")

_log = get_logger("index")


class QuadTree(Generic[P]):
    """A set of 2-D points stored in an adaptive region quadtree.

    Buckets hold up to ``transition_size`` distinct coordinates. One more
    distinct coordinate converts the bucket into a split node centred on the
    mean of its points; the conversion is permanent, even if every point is
    later removed. ``transition_size`` has no externally visible effect on
    results, only on performance.

    ``max_depth`` caps subdivision: a bucket at that depth keeps growing
    instead of splitting, which bounds the re-insertion cascade for
    tightly clustered points.
    """

    def __init__(
        self,
        view: Optional[PointView[P]] = None,
        transition_size: int = 8,
        max_depth: int = 32,
    ) -> None:
        if transition_size < 1:
            raise ValueError("transition_size must be >= 1")
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")

        self.view: PointView[P] = view if view is not None else DEFAULT_VIEW
        self._transition_size = int(transition_size)
        self._max_depth = int(max_depth)
        self.root: Node = BucketNode(depth=0)
        self._size = 0

    @classmethod
    def from_config(cls, cfg: "IndexConfig", view: Optional[PointView[P]] = None) -> "QuadTree[P]":
        return cls(view, transition_size=cfg.transition_size, max_depth=cfg.max_depth)

    @property
    def transition_size(self) -> int:
        return self._transition_size

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __contains__(self, p: object) -> bool:
        return self.contains(p)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[P]:
        return self.iter_points()

    def insert(self, p: P) -> bool:
        """Add ``p`` unless an equal point is already stored. Returns whether it was added."""
        x, y = self._coords(p)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Point coordinates must be finite, got ({x!r}, {y!r})")
        added = self._insert_from(self.root, None, None, p)
        if added:
            self._size += 1
        return added

    add = insert

    def bulk_insert(self, points: Iterable[P]) -> int:
        n = 0
        for p in points:
            if self.insert(p):
                n += 1
        return n

    def remove(self, p: P) -> bool:
        """Remove the first stored entry equal to ``p``. Returns whether one was found."""
        _, _, bucket = self._locate(*self._coords(p))
        removed = bucket.remove_point(p, self.view)
        if removed:
            self._size -= 1
        return removed

    def contains(self, p: P) -> bool:
        _, _, bucket = self._locate(*self._coords(p))
        return bucket.find(p, self.view) is not None

    def clear(self) -> None:
        self.root = BucketNode(depth=0)
        self._size = 0

    def range_query(self, xl: float, yl: float, xu: float, yu: float) -> List[P]:
        """All stored points with ``xl <= x <= xu`` and ``yl <= y <= yu``."""
        out: List[P] = []
        if xl > xu or yl > yu:
            return out
        view = self.view
        stack: List[Node] = [self.root]
        while stack:
            node = stack.pop()
            if isinstance(node, SplitNode):
                quads = quadrants_for_range(node.cx, node.cy, xl, yl, xu, yu)
                stack.extend(node.children[q] for q in reversed(quads))
            else:
                out.extend(p for p in node.points if in_rect(view.x(p), view.y(p), xl, yl, xu, yu))
        return out

    def iter_points(self) -> Iterator[P]:
        for node in self.iter_nodes():
            if isinstance(node, BucketNode):
                yield from list(node.points)

    def iter_nodes(self) -> Iterator[Node]:
        """Pre-order walk; children are visited NE, NW, SW, SE."""
        stack: List[Node] = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, SplitNode):
                stack.extend(reversed(node.children))

    def count_points(self) -> int:
        """Recount stored entries by walking every bucket."""
        return sum(n.total for n in self.iter_nodes() if isinstance(n, BucketNode))

    def num_buckets(self) -> int:
        return sum(1 for n in self.iter_nodes() if isinstance(n, BucketNode))

    def num_splits(self) -> int:
        return sum(1 for n in self.iter_nodes() if isinstance(n, SplitNode))

    def depth(self) -> int:
        return max(n.depth for n in self.iter_nodes())

    def as_dict(self) -> dict:
        view = self.view

        def _node(n: Node) -> dict:
            if isinstance(n, SplitNode):
                return {
                    "kind": "split",
                    "depth": n.depth,
                    "centroid": [n.cx, n.cy],
                    "children": {q.name: _node(n.children[q]) for q in Quadrant},
                }
            return {
                "kind": "bucket",
                "depth": n.depth,
                "distinct": n.distinct,
                "total": n.total,
                "points": [[view.x(p), view.y(p)] for p in n.points],
            }

        return {
            "transition_size": self._transition_size,
            "max_depth": self._max_depth,
            "size": self._size,
            "root": _node(self.root),
        }

    def _coords(self, p: P) -> Tuple[float, float]:
        return float(self.view.x(p)), float(self.view.y(p))

    def _locate(
        self, x: float, y: float, node: Optional[Node] = None
    ) -> Tuple[Optional[SplitNode[P]], Optional[Quadrant], BucketNode[P]]:
        parent: Optional[SplitNode[P]] = None
        quad: Optional[Quadrant] = None
        node = self.root if node is None else node
        while isinstance(node, SplitNode):
            parent = node
            quad = quadrant_of(x, y, node.cx, node.cy)
            node = node.children[quad]
        return parent, quad, node

    def _insert_from(
        self, node: Node, parent: Optional[SplitNode[P]], quad: Optional[Quadrant], p: P
    ) -> bool:
        x, y = self._coords(p)
        if isinstance(node, SplitNode):
            parent, quad, bucket = self._locate(x, y, node)
        else:
            bucket = node
        if not bucket.add_point(p, self.view):
            return False
        if bucket.distinct > self._transition_size:
            if bucket.depth < self._max_depth:
                self._subdivide(bucket, parent, quad)
            else:
                _log.debug(
                    "Bucket at depth=%d holds %d distinct coordinates; max_depth reached, not splitting.",
                    bucket.depth,
                    bucket.distinct,
                )
        return True

    def _subdivide(
        self, bucket: BucketNode[P], parent: Optional[SplitNode[P]], quad: Optional[Quadrant]
    ) -> None:
        coords = np.array([self._coords(p) for p in bucket.points], dtype=np.float64)
        cx, cy = (float(v) for v in coords.mean(axis=0))
        split: SplitNode[P] = SplitNode(
            depth=bucket.depth,
            cx=cx,
            cy=cy,
            children=[BucketNode(depth=bucket.depth + 1) for _ in Quadrant],
        )
        if parent is None:
            self.root = split
        else:
            assert quad is not None
            parent.children[quad] = split
        _log.debug(
            "Subdivided bucket at depth=%d (distinct=%d, total=%d) around centroid (%g, %g).",
            bucket.depth,
            bucket.distinct,
            bucket.total,
            cx,
            cy,
        )

        for p in bucket.points:
            self._insert_from(split, None, None, p)
        bucket.points.clear()
        bucket.distinct = 0
        bucket.total = 0


def build_quadtree(
    points: Iterable[Any],
    *,
    view: Optional[PointView[Any]] = None,
    transition_size: int = 8,
    max_depth: int = 32,
) -> QuadTree[Any]:
    tree: QuadTree[Any] = QuadTree(view, transition_size=transition_size, max_depth=max_depth)
    tree.bulk_insert(points)
    return tree
