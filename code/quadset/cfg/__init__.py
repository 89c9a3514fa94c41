from __future__ import annotations

from .schema import Config, IndexConfig, LoggingConfig, PlotConfig
from .loader import ConfigError, load_config, loads_config, to_dict, validate_config

__all__ = [
    "Config",
    "IndexConfig",
    "LoggingConfig",
    "PlotConfig",
    "ConfigError",
    "load_config",
    "loads_config",
    "validate_config",
    "to_dict",
]
