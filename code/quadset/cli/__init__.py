from __future__ import annotations

from .common import build_index, resolve_config

__all__ = ["build_index", "resolve_config"]
