from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

import numpy as np
import pandas as pd

from quadset.index.views import QuadPoint
from quadset.utils.atomic import atomic_write_text

_REQUIRED_COLUMNS = ("x", "y")


def load_points(path: Union[str, Path]) -> List[QuadPoint]:
    """Read ``x``, ``y`` (and optional ``label``) columns into :class:`QuadPoint` rows.

    Rows without a label (no column, or a blank cell) get their zero-based row
    number, so points sharing coordinates stay distinct entries.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Points file not found: {p}")
    df = pd.read_csv(p)
    missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{p}: missing column(s) {', '.join(missing)}")

    try:
        xy = df.loc[:, list(_REQUIRED_COLUMNS)].to_numpy(dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{p}: x/y columns must be numeric") from exc
    if xy.size and not np.isfinite(xy).all():
        bad = int(np.flatnonzero(~np.isfinite(xy).all(axis=1))[0])
        raise ValueError(f"{p}: non-finite coordinate on row {bad}")

    if "label" in df.columns:
        labels = [i if pd.isna(v) else v for i, v in enumerate(df["label"].tolist())]
    else:
        labels = list(range(xy.shape[0]))
    return [QuadPoint(float(x), float(y), lab) for (x, y), lab in zip(xy, labels)]


def points_to_frame(points: Iterable[QuadPoint]) -> pd.DataFrame:
    rows = [{"x": p.x, "y": p.y, "label": p.label} for p in points]
    return pd.DataFrame(rows, columns=["x", "y", "label"])


def save_points(path: Union[str, Path], points: Iterable[QuadPoint]) -> Path:
    path = Path(path)
    atomic_write_text(path, points_to_frame(points).to_csv(index=False))
    return path
