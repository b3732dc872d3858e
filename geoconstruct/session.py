"""Tool state machine turning pointer events into committed constructions.

The session is Idle when ``store.pending`` is ``None`` and Pending otherwise.
A click that does not fit the next slot of the active tool (wrong kind,
repeated id, duplicate construction, degenerate geometry) silently discards
the payload and returns to Idle; staged points that were never committed are
simply dropped with it.  Each completed construction is written with a single
store call, so it occupies exactly one history entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .derive import Coord, as_coord, distance
from .intersections import find_intersections
from .model import (
    LABELS,
    AngleBisector,
    Circle,
    Element,
    Line,
    PerpendicularBisector,
    PerpendicularLine,
    Point,
    is_curve,
)
from .pending import (
    PendingAngleRay,
    PendingAngleVertex,
    PendingCircle,
    PendingLine,
    PendingPerpendicularBisector,
    PendingPerpendicularFromLine,
    PendingPerpendicularFromPoint,
    StagedPoint,
)
from .snap import find_snap_target, nearest_curve, nearest_line_like, nearest_point, snap_radius
from .store import ElementStore
from .tolerances import ToleranceConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _DragState:
    point_id: str
    origin: Coord
    grab: Coord
    current: Coord
    revision: int

    def moved_to(self, cursor: Coord) -> Coord:
        return (
            self.origin[0] + cursor[0] - self.grab[0],
            self.origin[1] + cursor[1] - self.grab[1],
        )


class ConstructionSession:
    """Interprets drawing-space pointer and key events for the store's current tool."""

    def __init__(self, store: ElementStore, config: Optional[ToleranceConfig] = None) -> None:
        self.store = store
        self.config = config or store.config
        self.zoom = 1.0
        self.snap_target: Optional[Point] = None
        self._candidates: Tuple[Coord, ...] = ()
        self._nearest_index: Optional[int] = None
        self._preview_revision: Optional[int] = None
        self._drag: Optional[_DragState] = None
        self._click_handlers: Dict[str, Callable[[Coord], None]] = {
            "point": self._click_point,
            "line": self._click_line,
            "circle": self._click_circle,
            "perpendicular_bisector": self._click_perpendicular_bisector,
            "perpendicular_line": self._click_perpendicular_line,
            "angle_bisector": self._click_angle_bisector,
            "intersect": self._click_intersect,
            "label": self._click_label,
        }

    # -- outbound state --------------------------------------------------

    @property
    def drag_position(self) -> Optional[Tuple[str, Coord]]:
        """Transient overlay position of the point being dragged, if any."""

        if not self._drag_is_live():
            return None
        return self._drag.point_id, self._drag.current  # type: ignore[union-attr]

    @property
    def pick_radius(self) -> float:
        return snap_radius(self.zoom, self.config)

    @property
    def intersection_candidates(self) -> Tuple[Coord, ...]:
        """Candidates for the hovered curve; empty once the tool or elements change."""

        if self._preview_is_stale():
            return ()
        return self._candidates

    @property
    def intersection_nearest_index(self) -> Optional[int]:
        if self._preview_is_stale():
            return None
        return self._nearest_index

    @property
    def intersection_candidate(self) -> Optional[Coord]:
        index = self.intersection_nearest_index
        if index is None:
            return None
        return self._candidates[index]

    # -- inbound events --------------------------------------------------

    def set_zoom(self, zoom: float) -> None:
        if zoom <= 0:
            raise ValueError(f"zoom must be positive, got {zoom!r}")
        self.zoom = float(zoom)

    def pointer_move(self, x: float, y: float) -> None:
        cursor = (float(x), float(y))
        tool = self.store.selected_tool
        if not self._drag_is_live():
            self._drag = None
        if self._drag is not None:
            self._drag = replace(self._drag, current=self._drag.moved_to(cursor))
            return
        if tool == "intersect":
            self._update_intersection_preview(cursor)
            return
        self.snap_target = self._snap(cursor)
        if self.snap_target is not None:
            self.store.set_hovered_element_id(self.snap_target.id)
        else:
            hovered = nearest_curve(cursor, self.store.scene(), self.zoom, config=self.config)
            self.store.set_hovered_element_id(hovered.id if hovered else None)

    def pointer_down(self, x: float, y: float) -> None:
        cursor = (float(x), float(y))
        tool = self.store.selected_tool
        if tool == "select":
            self._begin_drag(cursor)
            return
        self._click_handlers[tool](cursor)

    def pointer_up(self, x: float, y: float) -> None:
        if self._drag is not None:
            self._end_drag((float(x), float(y)))

    def click(self, x: float, y: float) -> None:
        """Press and release at the same position."""

        self.pointer_down(x, y)
        self.pointer_up(x, y)

    def key_press(self, key: str, ctrl: bool = False, shift: bool = False) -> None:
        lowered = key.lower()
        if ctrl and lowered == "z" and not shift:
            self.cancel()
            self.store.undo()
        elif ctrl and (lowered == "y" or (lowered == "z" and shift)):
            self.cancel()
            self.store.redo()
        elif key in ("Delete", "Backspace"):
            selected = self.store.selected_element_id
            if selected is not None:
                self.cancel()
                self.store.remove_element(selected)
                self.store.set_selected_tool("select")
        elif key == "Escape":
            self.cancel()

    def cancel(self) -> None:
        """Drop any staged construction or drag without touching the store's elements."""

        if self.store.pending is not None:
            logger.debug("%s: cancelled (explicit)", self.store.selected_tool)
            self.store.complete_construction()
        self._drag = None
        self._clear_preview()

    # -- helpers ---------------------------------------------------------

    def _snap(self, cursor: Coord, extra: Sequence[Point] = ()) -> Optional[Point]:
        return find_snap_target(cursor, self.store.elements, self.zoom, config=self.config, extra=extra)

    def _pick_point(self, cursor: Coord) -> Optional[Point]:
        return nearest_point(cursor, self.store.points(), self.pick_radius)

    def _point_at(self, position: Sequence[float]) -> Optional[Point]:
        return nearest_point(position, self.store.points(), self.config.coincidence_eps)

    def _resolve_point(self, cursor: Coord, extra: Sequence[Point] = ()) -> StagedPoint:
        target = self._snap(cursor, extra)
        if target is not None:
            return StagedPoint(point=target, is_new=False)
        return StagedPoint(point=Point(cursor[0], cursor[1], is_fixed=True), is_new=True)

    def _abort(self, reason: str) -> None:
        logger.debug("%s: cancelled (%s)", self.store.selected_tool, reason)
        self.store.complete_construction()

    def _exists(self, *element_ids: str) -> bool:
        return all(self.store.get(element_id) is not None for element_id in element_ids)

    def _clear_preview(self) -> None:
        self._candidates = ()
        self._nearest_index = None
        self._preview_revision = None

    def _preview_is_stale(self) -> bool:
        return (
            self.store.selected_tool != "intersect"
            or self._preview_revision != self.store.revision
        )

    def _drag_is_live(self) -> bool:
        # only the select tool moves points, and only over the elements it grabbed
        return (
            self._drag is not None
            and self.store.selected_tool == "select"
            and self._drag.revision == self.store.revision
        )

    # -- point -----------------------------------------------------------

    def _click_point(self, cursor: Coord) -> None:
        target = self._snap(cursor)
        position = target.coords if target is not None else cursor
        existing = self._point_at(position)
        if existing is not None:
            logger.debug("point: reusing %s", existing.id)
            self.store.set_selected_element_id(existing.id)
            return
        self.store.add_element(Point(position[0], position[1], is_fixed=True))

    # -- line / circle ---------------------------------------------------

    def _click_line(self, cursor: Coord) -> None:
        pending = self.store.pending
        if not isinstance(pending, PendingLine):
            self.store.start_construction(PendingLine(start=self._resolve_point(cursor)))
            return
        self._finish_two_point(pending.start, cursor, lambda a, b: Line(p1_id=a, p2_id=b))

    def _click_circle(self, cursor: Coord) -> None:
        pending = self.store.pending
        if not isinstance(pending, PendingCircle):
            self.store.start_construction(PendingCircle(center=self._resolve_point(cursor)))
            return
        self._finish_two_point(
            pending.center, cursor, lambda a, b: Circle(center_id=a, radius_point_id=b)
        )

    def _finish_two_point(
        self,
        first: StagedPoint,
        cursor: Coord,
        build: Callable[[str, str], Element],
    ) -> None:
        extra = [first.point] if first.is_new else []
        second = self._resolve_point(cursor, extra)
        if not first.is_new and not self._exists(first.point.id):
            self._abort("first point no longer exists")
            return
        if second.point.id == first.point.id:
            self._abort("same point clicked twice")
            return
        if distance(first.point.coords, second.point.coords) < self.config.coincidence_eps:
            self._abort("coincident points")
            return
        batch: List[Element] = [staged.point for staged in (first, second) if staged.is_new]
        batch.append(build(first.point.id, second.point.id))
        self.store.complete_construction()
        self.store.add_elements_batch(batch)

    # -- perpendicular bisector -----------------------------------------

    def _has_perpendicular_bisector(self, a: str, b: str) -> bool:
        pair = {a, b}
        return any(
            isinstance(el, PerpendicularBisector) and {el.p1_id, el.p2_id} == pair
            for el in self.store.elements
        )

    def _click_perpendicular_bisector(self, cursor: Coord) -> None:
        picked = self._pick_point(cursor)
        pending = self.store.pending
        if not isinstance(pending, PendingPerpendicularBisector):
            if picked is not None:
                self.store.start_construction(PendingPerpendicularBisector(first_id=picked.id))
            elif pending is not None:
                self._abort("no point under cursor")
            return

        if picked is None:
            self._abort("no point under cursor")
            return
        first_id = pending.first_id
        if picked.id == first_id:
            self._abort("same point clicked twice")
            return
        if not self._exists(first_id):
            self._abort("first point no longer exists")
            return
        if self._has_perpendicular_bisector(first_id, picked.id):
            self._abort("bisector already exists")
            return
        self.store.complete_construction()
        self.store.add_element(PerpendicularBisector(p1_id=first_id, p2_id=picked.id))

    # -- perpendicular line ---------------------------------------------

    def _has_perpendicular_line(self, point_id: str, reference_id: str) -> bool:
        return any(
            isinstance(el, PerpendicularLine)
            and el.point_id == point_id
            and el.reference_id == reference_id
            for el in self.store.elements
        )

    def _click_perpendicular_line(self, cursor: Coord) -> None:
        scene = self.store.scene()
        pending = self.store.pending

        if isinstance(pending, PendingPerpendicularFromPoint):
            line = nearest_line_like(cursor, scene, self.zoom, config=self.config)
            if line is None:
                self._abort("expected a line")
                return
            self._finish_perpendicular(pending.point_id, line.id)
            return

        if isinstance(pending, PendingPerpendicularFromLine):
            picked = self._pick_point(cursor)
            if picked is None:
                self._abort("expected a point")
                return
            self._finish_perpendicular(picked.id, pending.line_id)
            return

        picked = self._pick_point(cursor)
        if picked is not None:
            self.store.start_construction(PendingPerpendicularFromPoint(point_id=picked.id))
            return
        line = nearest_line_like(cursor, scene, self.zoom, config=self.config)
        if line is not None:
            self.store.start_construction(PendingPerpendicularFromLine(line_id=line.id))
        elif pending is not None:
            self._abort("nothing under cursor")

    def _finish_perpendicular(self, point_id: str, reference_id: str) -> None:
        if not self._exists(point_id, reference_id):
            self._abort("selection no longer exists")
            return
        if self._has_perpendicular_line(point_id, reference_id):
            self._abort("perpendicular already exists")
            return
        candidate = PerpendicularLine(point_id=point_id, reference_id=reference_id)
        if candidate.infinite_line(self.store.scene()) is None:
            self._abort("reference has no derivable direction")
            return
        self.store.complete_construction()
        self.store.add_element(candidate)

    # -- angle bisector --------------------------------------------------

    def _has_angle_bisector(self, vertex_id: str, a: str, b: str) -> bool:
        pair = {a, b}
        return any(
            isinstance(el, AngleBisector)
            and el.vertex_id == vertex_id
            and {el.p1_id, el.p2_id} == pair
            for el in self.store.elements
        )

    def _click_angle_bisector(self, cursor: Coord) -> None:
        picked = self._pick_point(cursor)
        pending = self.store.pending
        if picked is None:
            if pending is not None:
                self._abort("no point under cursor")
            return

        if isinstance(pending, PendingAngleVertex):
            if picked.id == pending.vertex_id:
                self._abort("ray point repeats the vertex")
                return
            self.store.start_construction(PendingAngleRay(vertex_id=pending.vertex_id, ray_id=picked.id))
            return

        if isinstance(pending, PendingAngleRay):
            if picked.id in (pending.vertex_id, pending.ray_id):
                self._abort("point already used")
                return
            if not self._exists(pending.vertex_id, pending.ray_id):
                self._abort("selection no longer exists")
                return
            if self._has_angle_bisector(pending.vertex_id, pending.ray_id, picked.id):
                self._abort("bisector already exists")
                return
            candidate = AngleBisector(vertex_id=pending.vertex_id, p1_id=pending.ray_id, p2_id=picked.id)
            if candidate.infinite_line(self.store.scene()) is None:
                self._abort("rays are anti-parallel")
                return
            self.store.complete_construction()
            self.store.add_element(candidate)
            return

        self.store.start_construction(PendingAngleVertex(vertex_id=picked.id))

    # -- intersection ----------------------------------------------------

    def _update_intersection_preview(self, cursor: Coord) -> None:
        """Recompute candidates for the curve under the cursor.

        Costs one pairwise intersection per other curve in the scene.
        """

        scene = self.store.scene()
        hovered = nearest_curve(cursor, scene, self.zoom, config=self.config)
        self.store.set_hovered_element_id(hovered.id if hovered else None)
        candidates: List[Coord] = []
        if hovered is not None:
            for other in scene.values():
                if other.id == hovered.id or not is_curve(other):
                    continue
                candidates.extend(find_intersections(hovered, other, scene))
        self._candidates = tuple(candidates)
        self._nearest_index = None
        self._preview_revision = self.store.revision
        if candidates:
            coords = np.asarray(candidates, dtype=float)
            dists = np.hypot(coords[:, 0] - cursor[0], coords[:, 1] - cursor[1])
            idx = int(np.argmin(dists))
            if dists[idx] < self.pick_radius:
                self._nearest_index = idx

    def _click_intersect(self, cursor: Coord) -> None:
        self._update_intersection_preview(cursor)
        target = self.intersection_candidate
        if target is None:
            return
        existing = self._point_at(target)
        if existing is not None:
            logger.debug("intersect: point %s already at (%.6g, %.6g)", existing.id, *target)
            return
        x, y = as_coord(target)
        self.store.add_element(Point(x, y, is_fixed=False))

    # -- select / move ---------------------------------------------------

    def _begin_drag(self, cursor: Coord) -> None:
        picked = self._pick_point(cursor)
        if picked is not None:
            self.store.set_selected_element_id(picked.id)
            if picked.is_fixed:
                self._drag = _DragState(
                    point_id=picked.id,
                    origin=picked.coords,
                    grab=cursor,
                    current=picked.coords,
                    revision=self.store.revision,
                )
            return
        curve = nearest_curve(cursor, self.store.scene(), self.zoom, config=self.config)
        self.store.set_selected_element_id(curve.id if curve else None)

    def _end_drag(self, cursor: Coord) -> None:
        drag = self._drag if self._drag_is_live() else None
        self._drag = None
        if drag is None:
            return
        target = drag.moved_to(cursor)
        threshold = self.config.scaled(self.config.drag_threshold_px, self.zoom)
        if distance(drag.origin, target) <= threshold:
            return
        if not self._exists(drag.point_id):
            return
        self.store.update_element(drag.point_id, x=target[0], y=target[1])

    # -- label -----------------------------------------------------------

    def _click_label(self, cursor: Coord) -> None:
        picked = self._pick_point(cursor)
        if picked is None:
            return
        if picked.label is not None:
            self.store.update_element(picked.id, label=None)
            return
        used = {p.label for p in self.store.points() if p.label is not None}
        free = next((letter for letter in LABELS if letter not in used), None)
        if free is None:
            logger.debug("label: all letters in use")
            return
        self.store.update_element(picked.id, label=free)
