"""Snap resolution and hit testing in drawing-space units.

All radii come from :class:`ToleranceConfig` in screen pixels and are divided
by the current zoom, so the perceived pick distance does not change while
zooming.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np

from .derive import distance, distance_to_line
from .model import Circle, Element, Point, is_line_like
from .tolerances import ToleranceConfig, get_tolerance_config

logger = logging.getLogger(__name__)


def snap_radius(zoom: float, config: Optional[ToleranceConfig] = None) -> float:
    config = config or get_tolerance_config()
    return config.scaled(config.pick_radius_px, zoom)


def nearest_point(
    cursor: Sequence[float],
    points: Sequence[Point],
    radius: float,
) -> Optional[Point]:
    """Return the point closest to ``cursor`` strictly within ``radius``."""

    if not points:
        return None
    coords = np.array([(p.x, p.y) for p in points], dtype=float)
    dists = np.hypot(coords[:, 0] - float(cursor[0]), coords[:, 1] - float(cursor[1]))
    idx = int(np.argmin(dists))
    if dists[idx] < radius:
        return points[idx]
    return None


def find_snap_target(
    cursor: Sequence[float],
    elements: Iterable[Element],
    zoom: float = 1.0,
    *,
    config: Optional[ToleranceConfig] = None,
    extra: Sequence[Point] = (),
) -> Optional[Point]:
    """Return the existing point (fixed or derived) to snap ``cursor`` to.

    ``extra`` lets a caller add staged points that are not in the store yet.
    """

    points = [el for el in elements if isinstance(el, Point)]
    points.extend(extra)
    target = nearest_point(cursor, points, snap_radius(zoom, config))
    if target is not None:
        logger.debug("snap: cursor=(%.4g, %.4g) -> point %s", cursor[0], cursor[1], target.id)
    return target


def _curve_distance(element: Element, cursor: Sequence[float], scene: Mapping[str, Element]) -> Optional[float]:
    if is_line_like(element):
        line = element.infinite_line(scene)  # type: ignore[union-attr]
        if line is None:
            return None
        return distance_to_line(cursor, line.anchor, line.direction)
    if isinstance(element, Circle):
        circle = element.circle_value(scene)
        if circle is None:
            return None
        return abs(distance(cursor, circle.center) - circle.radius)
    return None


def _nearest(
    cursor: Sequence[float],
    scene: Mapping[str, Element],
    radius: float,
    *,
    lines_only: bool,
) -> Optional[Element]:
    best: Optional[Tuple[float, Element]] = None
    for element in scene.values():
        if lines_only and not is_line_like(element):
            continue
        dist = _curve_distance(element, cursor, scene)
        if dist is None or dist >= radius:
            continue
        if best is None or dist < best[0]:
            best = (dist, element)
    return best[1] if best else None


def nearest_line_like(
    cursor: Sequence[float],
    scene: Mapping[str, Element],
    zoom: float = 1.0,
    *,
    config: Optional[ToleranceConfig] = None,
) -> Optional[Element]:
    """Return the line-like element whose infinite line passes closest to ``cursor``."""

    return _nearest(cursor, scene, snap_radius(zoom, config), lines_only=True)


def nearest_curve(
    cursor: Sequence[float],
    scene: Mapping[str, Element],
    zoom: float = 1.0,
    *,
    config: Optional[ToleranceConfig] = None,
) -> Optional[Element]:
    """Return the line-like element or circle under ``cursor``."""

    return _nearest(cursor, scene, snap_radius(zoom, config), lines_only=False)


__all__ = [
    "find_snap_target",
    "nearest_curve",
    "nearest_line_like",
    "nearest_point",
    "snap_radius",
]
