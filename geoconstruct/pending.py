"""Staging payloads held between the clicks of a multi-click tool.

Each tool gets its own variant carrying only the fields its next click needs.
Nothing referenced here is committed to the store until the construction
completes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .model import Point


@dataclass(frozen=True)
class StagedPoint:
    """A resolved click position; ``is_new`` points exist only in the payload."""

    point: Point
    is_new: bool


@dataclass(frozen=True)
class PendingLine:
    start: StagedPoint


@dataclass(frozen=True)
class PendingCircle:
    center: StagedPoint


@dataclass(frozen=True)
class PendingPerpendicularBisector:
    first_id: str


@dataclass(frozen=True)
class PendingPerpendicularFromPoint:
    point_id: str


@dataclass(frozen=True)
class PendingPerpendicularFromLine:
    line_id: str


@dataclass(frozen=True)
class PendingAngleVertex:
    vertex_id: str


@dataclass(frozen=True)
class PendingAngleRay:
    vertex_id: str
    ray_id: str


PendingPayload = Union[
    PendingLine,
    PendingCircle,
    PendingPerpendicularBisector,
    PendingPerpendicularFromPoint,
    PendingPerpendicularFromLine,
    PendingAngleVertex,
    PendingAngleRay,
]
