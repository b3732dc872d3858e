"""Pairwise intersection of evaluated lines and circles.

Every routine returns a (possibly empty) list of ``(x, y)`` tuples.  Parallel
lines, circles that are too far apart, nested or concentric circles, and
elements whose references are missing all produce ``[]``.
"""

from __future__ import annotations

import logging
import math
from typing import List, Mapping, Optional, Union

from .constructions import CircleValue, LineValue
from .derive import Coord, add, cross, dot, scale, sub, unit
from .logging_utils import apply_debug_logging
from .model import Circle, Element, is_curve, is_line_like
from .tolerances import COINCIDENT_CENTER_EPS, PARALLEL_EPS, TANGENT_EPS

logger = logging.getLogger(__name__)

Curve = Union[LineValue, CircleValue]


def line_line_intersection(l1: LineValue, l2: LineValue) -> List[Coord]:
    """Intersect two infinite lines given by their parametric forms.

    ``l1: p1 + t*d1`` and ``l2: p3 + s*d2``.  The determinant ``d1 x d2``
    vanishes for parallel or coincident lines, in which case nothing is
    returned.
    """

    d1 = l1.direction
    d2 = l2.direction
    denom = cross(d1, d2)
    if abs(denom) < PARALLEL_EPS:
        return []
    t = cross(sub(l2.p1, l1.p1), d2) / denom
    return [add(l1.p1, scale(d1, t))]


def line_circle_intersection(line: LineValue, circle: CircleValue) -> List[Coord]:
    """Intersect an infinite line with a circle.

    Returns two points for a secant, one for a tangent (within
    ``TANGENT_EPS``) and none when the line misses the circle.
    """

    u = unit(line.direction, PARALLEL_EPS)
    if u is None:
        return []
    radius = circle.radius
    proj = dot(sub(circle.center, line.p1), u)
    closest = add(line.p1, scale(u, proj))
    dist_to_line = math.hypot(circle.center[0] - closest[0], circle.center[1] - closest[1])

    if dist_to_line > radius:
        return []
    if abs(dist_to_line - radius) < TANGENT_EPS:
        return [closest]

    half_chord = math.sqrt(radius * radius - dist_to_line * dist_to_line)
    if half_chord < TANGENT_EPS:
        return [closest]
    return [
        add(closest, scale(u, -half_chord)),
        add(closest, scale(u, half_chord)),
    ]


def circle_circle_intersection(c1: CircleValue, c2: CircleValue) -> List[Coord]:
    """Intersect two circles using the radical line.

    The two results are symmetric about the line joining the centres.
    """

    r1 = c1.radius
    r2 = c2.radius
    dx = c2.center[0] - c1.center[0]
    dy = c2.center[1] - c1.center[1]
    d = math.hypot(dx, dy)

    if d < COINCIDENT_CENTER_EPS or d > r1 + r2 or d < abs(r1 - r2):
        return []

    # distance from c1 along the centre line to the radical line
    a = (r1 * r1 - r2 * r2 + d * d) / (2 * d)
    h = math.sqrt(max(r1 * r1 - a * a, 0.0))

    px = c1.center[0] + a * dx / d
    py = c1.center[1] + a * dy / d
    offset_x = h * dy / d
    offset_y = h * dx / d

    return [
        (px + offset_x, py - offset_y),
        (px - offset_x, py + offset_y),
    ]


def evaluate_curve(element: Optional[Element], scene: Mapping[str, Element]) -> Optional[Curve]:
    """Reduce a line-like element or circle to its evaluated geometry."""

    if is_line_like(element):
        return element.infinite_line(scene)  # type: ignore[union-attr]
    if isinstance(element, Circle):
        return element.circle_value(scene)
    return None


def intersect_curves(a: Curve, b: Curve) -> List[Coord]:
    if isinstance(a, LineValue) and isinstance(b, LineValue):
        return line_line_intersection(a, b)
    if isinstance(a, LineValue) and isinstance(b, CircleValue):
        return line_circle_intersection(a, b)
    if isinstance(a, CircleValue) and isinstance(b, LineValue):
        return line_circle_intersection(b, a)
    if isinstance(a, CircleValue) and isinstance(b, CircleValue):
        return circle_circle_intersection(a, b)
    return []


def find_intersections(a: Element, b: Element, scene: Mapping[str, Element]) -> List[Coord]:
    """Return all intersection points of two elements, in either argument order.

    Points have no intersections; any pairing involving one returns ``[]``.
    """

    if not (is_curve(a) and is_curve(b)):
        return []
    curve_a = evaluate_curve(a, scene)
    curve_b = evaluate_curve(b, scene)
    if curve_a is None or curve_b is None:
        return []
    return intersect_curves(curve_a, curve_b)


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "circle_circle_intersection",
    "evaluate_curve",
    "find_intersections",
    "intersect_curves",
    "line_circle_intersection",
    "line_line_intersection",
]
