from __future__ import annotations

from .dump import format_stats, format_tree
from .partition import partition_segments, plot_partition

__all__ = ["format_tree", "format_stats", "partition_segments", "plot_partition"]
