from __future__ import annotations

FIG_WIDTH: float = 6.0
FIGSIZE: tuple[float, float] = (FIG_WIDTH, FIG_WIDTH)
DPI: int = 150

GRID_ALPHA: float = 0.25
POINT_COLOR: str = "#1f77b4"
SPLIT_COLOR: str = "#7f7f7f"
CENTROID_COLOR: str = "#d62728"
QUERY_COLOR: str = "#2ca02c"
BOUNDS_PADDING: float = 0.05
