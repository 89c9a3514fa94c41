from __future__ import annotations

import logging
from logging import Logger

_DEFAULT_LOGGER_NAME = "quadset"


def get_logger(name: str | None = None) -> Logger:
    base = logging.getLogger(_DEFAULT_LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        base.addHandler(handler)
        base.setLevel(logging.INFO)
        base.propagate = False
    return base if name is None else base.getChild(str(name))


def set_level(level: str | int) -> None:
    lvl = logging.getLevelName(str(level).upper()) if isinstance(level, str) else int(level)
    if not isinstance(lvl, int):
        raise ValueError(f"Unknown log level: {level!r}")
    get_logger().setLevel(lvl)


def log_points_loaded(n: int, path: object) -> None:
    get_logger("data").info("Loaded %d point(s) from %s", n, path)


def log_index_built(size: int, buckets: int, splits: int, depth: int) -> None:
    get_logger("index").info(
        "Index built: size=%d buckets=%d splits=%d depth=%d", size, buckets, splits, depth
    )


def log_output_written(kind: str, path: object) -> None:
    get_logger("cli").info("Wrote %s to %s", kind, path)
