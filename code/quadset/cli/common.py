from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

import typer

from quadset.cfg import Config, ConfigError, load_config
from quadset.data import load_points
from quadset.index import QuadTree
from quadset.utils.loggers import log_index_built, log_points_loaded, set_level


def resolve_config(config: Optional[Path], transition_size: Optional[int]) -> Config:
    try:
        cfg = load_config(config) if config is not None else Config()
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if transition_size is not None:
        if int(transition_size) < 1:
            raise typer.BadParameter("must be >= 1", param_hint="--transition-size")
        cfg = replace(cfg, index=replace(cfg.index, transition_size=int(transition_size)))
    return cfg


def build_index(
    points_path: Path,
    *,
    config: Optional[Path] = None,
    transition_size: Optional[int] = None,
    verbose: bool = False,
) -> tuple[QuadTree[Any], Config]:
    cfg = resolve_config(config, transition_size)
    set_level("DEBUG" if verbose else cfg.logging.level)

    try:
        pts = load_points(points_path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="POINTS") from exc
    log_points_loaded(len(pts), points_path)

    tree: QuadTree[Any] = QuadTree.from_config(cfg.index)
    tree.bulk_insert(pts)
    log_index_built(tree.size(), tree.num_buckets(), tree.num_splits(), tree.depth())
    return tree, cfg
