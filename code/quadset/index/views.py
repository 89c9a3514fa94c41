from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Protocol, Sequence, TypeVar

P = TypeVar("P")
P_contra = TypeVar("P_contra", contravariant=True)


class PointView(Protocol[P_contra]):
    """Projects a caller-defined point type to coordinates and equality.

    ``x`` and ``y`` must be stable for as long as a point is stored in an
    index. ``equals`` may be stricter than coordinate equality: two points
    at the same position can still be distinct entries.
    """

    def x(self, p: P_contra) -> float: ...

    def y(self, p: P_contra) -> float: ...

    def equals(self, a: P_contra, b: P_contra) -> bool: ...


@dataclass(frozen=True)
class QuadPoint:
    x: float
    y: float
    label: Any = None


class QuadPointView(Generic[P]):
    """View for objects exposing ``.x`` / ``.y`` attributes, compared with ``==``."""

    def x(self, p: P) -> float:
        return float(getattr(p, "x"))

    def y(self, p: P) -> float:
        return float(getattr(p, "y"))

    def equals(self, a: P, b: P) -> bool:
        return bool(a == b)


class TupleView:
    """View for ``(x, y, *rest)`` sequences; equality compares the whole tuple."""

    def x(self, p: Sequence[float]) -> float:
        return float(p[0])

    def y(self, p: Sequence[float]) -> float:
        return float(p[1])

    def equals(self, a: Sequence[Any], b: Sequence[Any]) -> bool:
        return tuple(a) == tuple(b)


DEFAULT_VIEW: QuadPointView[Any] = QuadPointView()
