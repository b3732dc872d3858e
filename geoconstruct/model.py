"""Typed geometry elements.

Elements are immutable; edits produce a new instance via
:func:`dataclasses.replace`, so history snapshots never alias live state.
Derived geometry is always recomputed from the referenced points, and any
missing reference yields ``None`` ("nothing to derive").
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import ClassVar, Mapping, Optional, Tuple, Union

from .constructions import MAX_REFERENCE_DEPTH, CircleValue, LineValue
from .derive import (
    Coord,
    bisector_direction,
    distance,
    midpoint,
    perp_bisector_direction,
    rotate90,
)
from .tolerances import DEGENERATE_EPS

LABELS = tuple(chr(code) for code in range(ord("A"), ord("Z") + 1))


def new_id() -> str:
    """Return a fresh element id; ids are never reused."""

    return uuid.uuid4().hex


@dataclass(frozen=True)
class Point:
    kind: ClassVar[str] = "point"

    x: float
    y: float
    is_fixed: bool = True
    label: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        if self.label is not None and self.label not in LABELS:
            raise ValueError(f"point label must be a single letter A-Z, got {self.label!r}")

    @property
    def coords(self) -> Coord:
        return (self.x, self.y)

    def references(self) -> Tuple[str, ...]:
        return ()


def _point(scene: Mapping[str, "Element"], element_id: str) -> Optional[Coord]:
    el = scene.get(element_id)
    if isinstance(el, Point):
        return el.coords
    return None


class LineLike:
    """Mixin for every element with an infinite straight-line representation."""

    def infinite_line(self, scene: Mapping[str, "Element"]) -> Optional[LineValue]:
        raise NotImplementedError


@dataclass(frozen=True)
class Line(LineLike):
    kind: ClassVar[str] = "line"

    p1_id: str
    p2_id: str
    # Always drawn and derived as infinite; kept for future segment support.
    infinite: bool = True
    id: str = field(default_factory=new_id)

    def references(self) -> Tuple[str, ...]:
        return (self.p1_id, self.p2_id)

    def infinite_line(self, scene: Mapping[str, "Element"]) -> Optional[LineValue]:
        a = _point(scene, self.p1_id)
        b = _point(scene, self.p2_id)
        if a is None or b is None:
            return None
        return LineValue.from_points(a, b)


@dataclass(frozen=True)
class Circle:
    kind: ClassVar[str] = "circle"

    center_id: str
    radius_point_id: str
    id: str = field(default_factory=new_id)

    def references(self) -> Tuple[str, ...]:
        return (self.center_id, self.radius_point_id)

    def circle_value(self, scene: Mapping[str, "Element"]) -> Optional[CircleValue]:
        center = _point(scene, self.center_id)
        through = _point(scene, self.radius_point_id)
        if center is None or through is None:
            return None
        radius = distance(center, through)
        if radius < DEGENERATE_EPS:
            return None
        return CircleValue(center=center, radius=radius)


@dataclass(frozen=True)
class PerpendicularBisector(LineLike):
    kind: ClassVar[str] = "perpendicular_bisector"

    p1_id: str
    p2_id: str
    id: str = field(default_factory=new_id)

    def references(self) -> Tuple[str, ...]:
        return (self.p1_id, self.p2_id)

    def infinite_line(self, scene: Mapping[str, "Element"]) -> Optional[LineValue]:
        a = _point(scene, self.p1_id)
        b = _point(scene, self.p2_id)
        if a is None or b is None:
            return None
        direction = perp_bisector_direction(a, b)
        if direction is None:
            return None
        return LineValue.through(midpoint(a, b), direction)


@dataclass(frozen=True)
class PerpendicularLine(LineLike):
    kind: ClassVar[str] = "perpendicular_line"

    point_id: str
    reference_id: str
    id: str = field(default_factory=new_id)

    def references(self) -> Tuple[str, ...]:
        return (self.point_id, self.reference_id)

    def infinite_line(
        self, scene: Mapping[str, "Element"], _depth: int = 0
    ) -> Optional[LineValue]:
        at = _point(scene, self.point_id)
        ref = scene.get(self.reference_id)
        if at is None or not is_line_like(ref):
            return None
        if isinstance(ref, PerpendicularLine):
            if _depth >= MAX_REFERENCE_DEPTH:
                return None
            base = ref.infinite_line(scene, _depth + 1)
        else:
            base = ref.infinite_line(scene)
        if base is None:
            return None
        return LineValue.through(at, rotate90(base.direction))


@dataclass(frozen=True)
class AngleBisector(LineLike):
    kind: ClassVar[str] = "angle_bisector"

    vertex_id: str
    p1_id: str
    p2_id: str
    id: str = field(default_factory=new_id)

    def references(self) -> Tuple[str, ...]:
        return (self.vertex_id, self.p1_id, self.p2_id)

    def infinite_line(self, scene: Mapping[str, "Element"]) -> Optional[LineValue]:
        v = _point(scene, self.vertex_id)
        a = _point(scene, self.p1_id)
        b = _point(scene, self.p2_id)
        if v is None or a is None or b is None:
            return None
        direction = bisector_direction(v, a, b)
        if direction is None:
            return None
        return LineValue.through(v, direction)


Element = Union[Point, Line, Circle, PerpendicularBisector, PerpendicularLine, AngleBisector]

def is_line_like(element: object) -> bool:
    return isinstance(element, LineLike)


def is_curve(element: object) -> bool:
    """Return ``True`` for elements that can take part in an intersection."""

    return isinstance(element, (LineLike, Circle))


__all__ = [
    "AngleBisector",
    "Circle",
    "Element",
    "LABELS",
    "Line",
    "LineLike",
    "PerpendicularBisector",
    "PerpendicularLine",
    "Point",
    "is_curve",
    "is_line_like",
    "new_id",
]
