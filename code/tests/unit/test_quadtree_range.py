from __future__ import annotations

import numpy as np
import pytest

from quadset.index import QuadPoint, QuadTree, SplitNode


def _brute(xy: np.ndarray, xl: float, yl: float, xu: float, yu: float) -> list[int]:
    mask = (xy[:, 0] >= xl) & (xy[:, 0] <= xu) & (xy[:, 1] >= yl) & (xy[:, 1] <= yu)
    return sorted(int(i) for i in np.flatnonzero(mask))


def _labels(points: list[QuadPoint]) -> list[int]:
    return sorted(int(p.label) for p in points)


@pytest.mark.parametrize("transition_size", [1, 2, 4, 8])
def test_range_query_matches_brute_force_on_grid(transition_size: int) -> None:
    rng = np.random.default_rng(0)
    xy = rng.integers(0, 10, size=(300, 2)).astype(np.float64)
    tree = QuadTree(transition_size=transition_size)
    tree.bulk_insert(QuadPoint(float(x), float(y), i) for i, (x, y) in enumerate(xy))
    assert tree.size() == xy.shape[0]

    for _ in range(200):
        a, b = sorted(rng.integers(-1, 11, size=2))
        c, d = sorted(rng.integers(-1, 11, size=2))
        got = _labels(tree.range_query(float(a), float(c), float(b), float(d)))
        assert got == _brute(xy, a, c, b, d)


def test_range_query_bounds_on_centroids() -> None:
    rng = np.random.default_rng(1)
    xy = rng.standard_normal((400, 2))
    tree = QuadTree(transition_size=3)
    tree.bulk_insert(QuadPoint(float(x), float(y), i) for i, (x, y) in enumerate(xy))

    cents = [(n.cx, n.cy) for n in tree.iter_nodes() if isinstance(n, SplitNode)]
    assert cents
    for cx, cy in cents[:40]:
        for dx in (0.0, 0.3):
            for dy in (0.0, 0.3):
                rects = [
                    (cx, cy, cx + dx + 0.5, cy + dy + 0.5),
                    (cx - 0.5, cy - 0.5, cx, cy),
                    (cx - dx - 0.5, cy, cx, cy + 0.5),
                    (cx, cy - dy - 0.5, cx + 0.5, cy),
                    (cx + dx, cy - 1.0, cx + dx + 0.5, cy + 1.0),
                    (cx - 1.0, cy + dy, cx + 1.0, cy + dy + 0.5),
                ]
                for xl, yl, xu, yu in rects:
                    assert _labels(tree.range_query(xl, yl, xu, yu)) == _brute(xy, xl, yl, xu, yu)


def test_range_query_after_removals() -> None:
    rng = np.random.default_rng(2)
    xy = rng.uniform(-5.0, 5.0, size=(250, 2))
    pts = [QuadPoint(float(x), float(y), i) for i, (x, y) in enumerate(xy)]
    tree = QuadTree(transition_size=4)
    tree.bulk_insert(pts)

    keep = np.ones(len(pts), dtype=bool)
    for i in rng.choice(len(pts), size=100, replace=False):
        assert tree.remove(pts[int(i)])
        keep[int(i)] = False

    for _ in range(100):
        xl, xu = sorted(rng.uniform(-6.0, 6.0, size=2))
        yl, yu = sorted(rng.uniform(-6.0, 6.0, size=2))
        expected = [i for i in _brute(xy, xl, yl, xu, yu) if keep[i]]
        assert _labels(tree.range_query(xl, yl, xu, yu)) == expected


def test_range_query_degenerate_rectangles() -> None:
    tree = QuadTree(transition_size=2)
    tree.bulk_insert(QuadPoint(float(x), float(y), (x, y)) for x in range(4) for y in range(4))

    assert [p.label for p in tree.range_query(2, 1, 2, 1)] == [(2, 1)]
    assert sorted(p.label for p in tree.range_query(1, 0, 1, 3)) == [(1, 0), (1, 1), (1, 2), (1, 3)]
    assert tree.range_query(3, 0, 1, 3) == []
    assert tree.range_query(0, 3, 3, 0) == []
    assert len(tree.range_query(float("-inf"), float("-inf"), float("inf"), float("inf"))) == 16


def test_straddling_one_axis_visits_two_quadrants() -> None:
    tree = QuadTree(transition_size=3)
    pts = [
        QuadPoint(-1.0, -1.0, "sw"),
        QuadPoint(1.0, -1.0, "se"),
        QuadPoint(1.0, 1.0, "ne"),
        QuadPoint(-1.0, 1.0, "nw"),
    ]
    tree.bulk_insert(pts)
    assert isinstance(tree.root, SplitNode)
    assert (tree.root.cx, tree.root.cy) == (0.0, 0.0)

    assert sorted(p.label for p in tree.range_query(0.5, -2, 2, 2)) == ["ne", "se"]
    assert sorted(p.label for p in tree.range_query(-2, 0.5, 2, 2)) == ["ne", "nw"]
    assert sorted(p.label for p in tree.range_query(-2, -2, 2, -0.5)) == ["se", "sw"]
    assert sorted(p.label for p in tree.range_query(-2, -2, -0.5, 2)) == ["nw", "sw"]
    assert [p.label for p in tree.range_query(0.5, 0.5, 2, 2)] == ["ne"]
