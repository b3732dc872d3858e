"""Evaluated geometry shared by the derivation routines.

Every line-like element reduces to a :class:`LineValue` holding two points on
the infinite line.  Plain lines use their defining points; constructs that
only know a through-point and a direction get a synthetic pair placed far
apart along that direction, so every pairwise intersection reduces to the
line/line, line/circle or circle/circle routine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .derive import Coord, Vector, add, as_coord, scale, sub, unit

# How many nested perpendicular-line references are followed when resolving a
# perpendicular line's direction.  Deeper chains have no derivable direction.
MAX_REFERENCE_DEPTH = 1

DEFAULT_LINE_EXTENT = 10_000.0


@dataclass(frozen=True)
class LineValue:
    """Infinite line represented by two distinct points on it."""

    p1: Coord
    p2: Coord

    @classmethod
    def through(
        cls,
        point: Sequence[float],
        direction: Sequence[float],
        extent: float = DEFAULT_LINE_EXTENT,
    ) -> Optional["LineValue"]:
        """Build a synthetic sample ``point ± extent * unit(direction)``."""

        u = unit(direction)
        if u is None:
            return None
        anchor = as_coord(point)
        return cls(add(anchor, scale(u, -extent)), add(anchor, scale(u, extent)))

    @classmethod
    def from_points(cls, a: Sequence[float], b: Sequence[float]) -> Optional["LineValue"]:
        if unit(sub(b, a)) is None:
            return None
        return cls(as_coord(a), as_coord(b))

    @property
    def anchor(self) -> Coord:
        return self.p1

    @property
    def direction(self) -> Vector:
        return sub(self.p2, self.p1)

    def sample(self) -> Tuple[Coord, Coord]:
        return self.p1, self.p2


@dataclass(frozen=True)
class CircleValue:
    """Evaluated circle: centre coordinates and recomputed radius."""

    center: Coord
    radius: float
