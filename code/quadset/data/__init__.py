from __future__ import annotations

from .points import load_points, points_to_frame, save_points

__all__ = ["load_points", "points_to_frame", "save_points"]
