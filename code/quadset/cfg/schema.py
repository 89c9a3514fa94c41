from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class IndexConfig:
    transition_size: int = 8
    max_depth: int = 32


@dataclass(frozen=True)
class LoggingConfig:
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@dataclass(frozen=True)
class PlotConfig:
    show_points: bool = True
    show_centroids: bool = True
    point_size: float = 6.0


@dataclass(frozen=True)
class Config:
    index: IndexConfig = field(default_factory=IndexConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)
