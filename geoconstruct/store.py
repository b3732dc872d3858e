"""Element store: the single owner of the live element collection."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Literal, Optional, Set, Tuple, get_args

from .history import HistoryManager
from .model import Element, Point
from .pending import PendingPayload
from .tolerances import ToleranceConfig, get_tolerance_config

logger = logging.getLogger(__name__)

Tool = Literal[
    "select",
    "point",
    "line",
    "circle",
    "perpendicular_bisector",
    "perpendicular_line",
    "angle_bisector",
    "intersect",
    "label",
]

TOOLS: Tuple[str, ...] = get_args(Tool)


class ElementStore:
    """Owns elements, selection/hover ids, the current tool and its Pending payload.

    Every mutating call writes exactly one history snapshot.  Everything else
    in the package only reads the collection through :attr:`elements` or
    :meth:`scene`.

    ``revision`` changes whenever the element list is replaced, so readers can
    tell when derived state built from it has gone stale.
    """

    def __init__(
        self,
        history: Optional[HistoryManager] = None,
        config: Optional[ToleranceConfig] = None,
    ) -> None:
        self.config = config or get_tolerance_config()
        self.history = history or HistoryManager(limit=self.config.history_limit)
        self._elements: List[Element] = list(self.history.current)
        self.selected_tool: Tool = "select"
        self.selected_element_id: Optional[str] = None
        self.hovered_element_id: Optional[str] = None
        self.pending: Optional[PendingPayload] = None
        self.revision = 0

    # -- read access -----------------------------------------------------

    @property
    def elements(self) -> Tuple[Element, ...]:
        return tuple(self._elements)

    def scene(self) -> Dict[str, Element]:
        return {el.id: el for el in self._elements}

    def get(self, element_id: Optional[str]) -> Optional[Element]:
        if element_id is None:
            return None
        for el in self._elements:
            if el.id == element_id:
                return el
        return None

    def points(self) -> List[Point]:
        return [el for el in self._elements if isinstance(el, Point)]

    @property
    def is_drawing(self) -> bool:
        return self.pending is not None

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    # -- transient state -------------------------------------------------

    def set_selected_tool(self, tool: Tool) -> None:
        if tool not in TOOLS:
            raise ValueError(f"unknown tool {tool!r}")
        if self.pending is not None:
            logger.debug("store: tool switch discards pending %s", type(self.pending).__name__)
        self.pending = None
        self.selected_tool = tool

    def set_hovered_element_id(self, element_id: Optional[str]) -> None:
        self.hovered_element_id = element_id

    def set_selected_element_id(self, element_id: Optional[str]) -> None:
        self.selected_element_id = element_id

    def start_construction(self, payload: PendingPayload) -> None:
        self.pending = payload

    def complete_construction(self) -> None:
        self.pending = None

    # -- mutations -------------------------------------------------------

    def _commit(self, elements: List[Element], reason: str) -> None:
        _check_labels(elements)
        self._elements = elements
        self.history.push(elements)
        self.revision += 1
        logger.info("store: %s (elements=%d)", reason, len(elements))

    def _check_new_ids(self, new: Iterable[Element]) -> None:
        seen: Set[str] = {el.id for el in self._elements}
        for el in new:
            if el.id in seen:
                raise ValueError(f"duplicate element id {el.id!r}")
            seen.add(el.id)

    def add_element(self, element: Element) -> None:
        self._check_new_ids([element])
        self._commit(self._elements + [element], f"add {element.kind}")

    def add_elements_batch(self, elements: Iterable[Element]) -> None:
        """Append all ``elements`` as one construction (one history entry)."""

        batch = list(elements)
        if not batch:
            return
        self._check_new_ids(batch)
        kinds = ", ".join(el.kind for el in batch)
        self._commit(self._elements + batch, f"add batch [{kinds}]")

    def update_element(self, element_id: str, **changes: Any) -> None:
        """Replace fields of an existing element.

        Only fields declared by the element's own type are accepted; ``id``
        is immutable.  Unknown ids are ignored without a history entry.
        """

        current = self.get(element_id)
        if current is None:
            logger.debug("store: update of unknown id %s ignored", element_id)
            return
        allowed = {f.name for f in dataclasses.fields(current)} - {"id"}
        for name in changes:
            if name not in allowed:
                raise ValueError(f"{current.kind} has no updatable field {name!r}")
        updated = dataclasses.replace(current, **changes)
        self._commit(
            [updated if el.id == element_id else el for el in self._elements],
            f"update {current.kind}",
        )

    def dependents_of(self, element_id: str) -> Set[str]:
        """Ids of every element that references ``element_id``, transitively."""

        found: Set[str] = set()
        frontier = {element_id}
        while frontier:
            nxt: Set[str] = set()
            for el in self._elements:
                if el.id in found or el.id == element_id:
                    continue
                if frontier.intersection(el.references()):
                    found.add(el.id)
                    nxt.add(el.id)
            frontier = nxt
        return found

    def remove_element(self, element_id: str) -> None:
        """Delete an element together with everything built on it."""

        if self.get(element_id) is None:
            logger.debug("store: removal of unknown id %s ignored", element_id)
            return
        doomed = self.dependents_of(element_id) | {element_id}
        self._commit(
            [el for el in self._elements if el.id not in doomed],
            f"remove {len(doomed)} element(s)",
        )
        self._drop_stale_ids()

    def clear_canvas(self) -> None:
        self.pending = None
        self._commit([], "clear canvas")
        self._drop_stale_ids()

    def undo(self) -> None:
        snapshot = self.history.undo()
        if snapshot is None:
            return
        self._restore(snapshot)

    def redo(self) -> None:
        snapshot = self.history.redo()
        if snapshot is None:
            return
        self._restore(snapshot)

    def _restore(self, snapshot: Tuple[Element, ...]) -> None:
        self._elements = list(snapshot)
        self.revision += 1
        self.pending = None
        self._drop_stale_ids()
        logger.info("store: restored history index=%d (elements=%d)", self.history.index, len(snapshot))

    def _drop_stale_ids(self) -> None:
        ids = {el.id for el in self._elements}
        if self.selected_element_id not in ids:
            self.selected_element_id = None
        if self.hovered_element_id not in ids:
            self.hovered_element_id = None


def _check_labels(elements: Iterable[Element]) -> None:
    seen: Set[str] = set()
    for el in elements:
        label = getattr(el, "label", None)
        if label is None:
            continue
        if label in seen:
            raise ValueError(f"label {label!r} is already used by another point")
        seen.add(label)
