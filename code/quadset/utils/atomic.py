from __future__ import annotations

import os
from pathlib import Path

__all__ = [
    "atomic_replace",
    "atomic_write_text",
]


def atomic_replace(src: Path, dst: Path) -> None:
    os.replace(src, dst)


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    path = Path(path)
    tmp = path.with_suffix(path.suffix + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(tmp, "w", encoding=encoding, newline="") as f:
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
    atomic_replace(tmp, path)
