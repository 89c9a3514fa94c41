from __future__ import annotations

from typing import Any, List

from quadset.index.nodes import ALL_QUADRANTS, Node, Quadrant, SplitNode, bucket_points, centroid, child
from quadset.index.quadtree import QuadTree

INDENTATION = 4


def _line(text: str, indent: int) -> str:
    return " " * (indent * INDENTATION) + text


def _dump(tree: QuadTree[Any], node: Node, indent: int, out: List[str]) -> None:
    if isinstance(node, SplitNode):
        cx, cy = centroid(node)
        out.append("")
        _dump(tree, child(node, Quadrant.NE), indent + 1, out)
        out.append("")
        _dump(tree, child(node, Quadrant.NW), indent + 1, out)
        out.append(_line(f"( {cx:.1f}, {cy:.1f} )", indent))
        _dump(tree, child(node, Quadrant.SW), indent + 1, out)
        out.append("")
        _dump(tree, child(node, Quadrant.SE), indent + 1, out)
        out.append("")
        return
    view = tree.view
    text = "".join(f"( {view.x(p)} , {view.y(p)} ); " for p in bucket_points(node))
    out.append(_line(text, indent))


def format_tree(tree: QuadTree[Any]) -> str:
    """Render the tree sideways: north-side subtrees above each centroid, south below."""
    out: List[str] = []
    _dump(tree, tree.root, 0, out)
    return "\n".join(out) + "\n"


def format_stats(tree: QuadTree[Any]) -> dict:
    return {
        "size": tree.size(),
        "transition_size": tree.transition_size,
        "max_depth": tree.max_depth,
        "buckets": tree.num_buckets(),
        "splits": tree.num_splits(),
        "depth": tree.depth(),
        "quadrants": [q.name for q in ALL_QUADRANTS],
    }
