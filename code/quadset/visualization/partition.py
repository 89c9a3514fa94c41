from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from quadset.cfg.schema import PlotConfig
from quadset.index.nodes import ALL_QUADRANTS, Node, Quadrant, SplitNode, centroid, child
from quadset.index.quadtree import QuadTree
from quadset.visualization.plot_utils import save_fig_atomic, use_agg_backend
from quadset.visualization.style import (
    BOUNDS_PADDING,
    CENTROID_COLOR,
    FIGSIZE,
    GRID_ALPHA,
    POINT_COLOR,
    QUERY_COLOR,
    SPLIT_COLOR,
)

Box = Tuple[float, float, float, float]
Segment = Tuple[Tuple[float, float], Tuple[float, float]]


def data_bounds(tree: QuadTree[Any]) -> Box:
    view = tree.view
    xy = np.array([(view.x(p), view.y(p)) for p in tree.iter_points()], dtype=np.float64)
    if xy.size == 0:
        return (0.0, 0.0, 1.0, 1.0)
    lo = xy.min(axis=0)
    hi = xy.max(axis=0)
    pad = np.maximum((hi - lo) * BOUNDS_PADDING, 1.0e-9)
    return (float(lo[0] - pad[0]), float(lo[1] - pad[1]), float(hi[0] + pad[0]), float(hi[1] + pad[1]))


def _child_box(box: Box, cx: float, cy: float, q: Quadrant) -> Box:
    xl, yl, xu, yu = box
    cx = min(max(cx, xl), xu)
    cy = min(max(cy, yl), yu)
    if q is Quadrant.NE:
        return (cx, cy, xu, yu)
    if q is Quadrant.NW:
        return (xl, cy, cx, yu)
    if q is Quadrant.SW:
        return (xl, yl, cx, cy)
    return (cx, yl, xu, cy)


def partition_segments(tree: QuadTree[Any], box: Optional[Box] = None) -> List[Segment]:
    """Centroid split lines clipped to each split node's region, in pre-order."""
    segments: List[Segment] = []
    stack: List[Tuple[Node, Box]] = [(tree.root, data_bounds(tree) if box is None else box)]
    while stack:
        node, (xl, yl, xu, yu) = stack.pop()
        if not isinstance(node, SplitNode):
            continue
        cx, cy = centroid(node)
        segments.append(((cx, yl), (cx, yu)))
        segments.append(((xl, cy), (xu, cy)))
        for q in reversed(ALL_QUADRANTS):
            stack.append((child(node, q), _child_box((xl, yl, xu, yu), cx, cy, q)))
    return segments


def plot_partition(
    tree: QuadTree[Any],
    out_path: Path,
    *,
    cfg: PlotConfig = PlotConfig(),
    query: Optional[Sequence[float]] = None,
) -> Path:
    use_agg_backend()
    import matplotlib.pyplot as plt
    from matplotlib.collections import LineCollection
    from matplotlib.patches import Rectangle

    box = data_bounds(tree)
    fig, ax = plt.subplots(figsize=FIGSIZE)
    try:
        segs = partition_segments(tree, box)
        if segs:
            ax.add_collection(LineCollection(segs, colors=SPLIT_COLOR, linewidths=0.8))
        if cfg.show_centroids:
            cents = np.array([centroid(n) for n in tree.iter_nodes() if isinstance(n, SplitNode)])
            if cents.size:
                ax.scatter(cents[:, 0], cents[:, 1], s=cfg.point_size * 2, marker="x", c=CENTROID_COLOR)
        if cfg.show_points:
            view = tree.view
            xy = np.array([(view.x(p), view.y(p)) for p in tree.iter_points()], dtype=np.float64)
            if xy.size:
                ax.scatter(xy[:, 0], xy[:, 1], s=cfg.point_size, c=POINT_COLOR)
        if query is not None:
            xl, yl, xu, yu = (float(v) for v in query)
            ax.add_patch(
                Rectangle((xl, yl), xu - xl, yu - yl, fill=False, edgecolor=QUERY_COLOR, linewidth=1.2)
            )

        ax.set_xlim(box[0], box[2])
        ax.set_ylim(box[1], box[3])
        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.grid(True, alpha=GRID_ALPHA)
        save_fig_atomic(fig, Path(out_path))
    finally:
        plt.close(fig)
    return Path(out_path)
