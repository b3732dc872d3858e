"""Coordinate-level primitives used by every derivation.

These helpers only rely on basic Python math so they stay cheap enough to be
called on every pointer event.  Routines that can hit a degenerate
configuration (zero-length segment, anti-parallel rays) return ``None``
instead of producing NaN or raising.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

from .tolerances import DEGENERATE_EPS

Coord = Tuple[float, float]
Vector = Tuple[float, float]


def as_coord(pt: Sequence[float]) -> Coord:
    return (float(pt[0]), float(pt[1]))


def sub(a: Sequence[float], b: Sequence[float]) -> Vector:
    return (float(a[0]) - float(b[0]), float(a[1]) - float(b[1]))


def add(a: Sequence[float], b: Sequence[float]) -> Coord:
    return (float(a[0]) + float(b[0]), float(a[1]) + float(b[1]))


def scale(vec: Sequence[float], factor: float) -> Vector:
    return (float(vec[0]) * factor, float(vec[1]) * factor)


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    return float(a[0]) * float(b[0]) + float(a[1]) * float(b[1])


def cross(a: Sequence[float], b: Sequence[float]) -> float:
    return float(a[0]) * float(b[1]) - float(a[1]) * float(b[0])


def norm(vec: Sequence[float]) -> float:
    return math.hypot(float(vec[0]), float(vec[1]))


def rotate90(vec: Sequence[float]) -> Vector:
    return (-float(vec[1]), float(vec[0]))


def unit(vec: Sequence[float], eps: float = DEGENERATE_EPS) -> Optional[Vector]:
    """Return ``vec`` normalized, or ``None`` when it is effectively zero."""

    length = norm(vec)
    if length < eps:
        return None
    return (float(vec[0]) / length, float(vec[1]) / length)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between ``a`` and ``b``."""

    return math.hypot(float(a[0]) - float(b[0]), float(a[1]) - float(b[1]))


def midpoint(a: Sequence[float], b: Sequence[float]) -> Coord:
    """Return the midpoint between ``a`` and ``b``."""

    ax, ay = as_coord(a)
    bx, by = as_coord(b)
    return ((ax + bx) * 0.5, (ay + by) * 0.5)


def distance_to_line(v: Sequence[float], anchor: Sequence[float], direction: Sequence[float]) -> Optional[float]:
    """Perpendicular distance from ``v`` to the infinite line through ``anchor``."""

    u = unit(direction)
    if u is None:
        return None
    return abs(cross(u, sub(v, anchor)))


def perp_bisector_direction(a: Sequence[float], b: Sequence[float]) -> Optional[Vector]:
    """Direction of the perpendicular bisector of ``ab`` (the segment rotated by 90°)."""

    ab = sub(b, a)
    if norm(ab) < DEGENERATE_EPS:
        return None
    return rotate90(ab)


def bisector_direction(v: Sequence[float], a: Sequence[float], b: Sequence[float]) -> Optional[Vector]:
    """Return the internal angle bisector direction at ``v`` for rays ``va`` and ``vb``.

    The direction is the normalized sum of the two unit rays.  ``None`` is
    returned for a collapsed ray or when the rays are anti-parallel.
    """

    va_unit = unit(sub(a, v))
    vb_unit = unit(sub(b, v))
    if va_unit is None or vb_unit is None:
        return None
    return unit(add(va_unit, vb_unit))
