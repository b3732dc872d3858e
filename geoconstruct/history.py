"""Linear, bounded undo/redo log of element snapshots."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .model import Element

logger = logging.getLogger(__name__)

Snapshot = Tuple[Element, ...]

DEFAULT_HISTORY_LIMIT = 50


class HistoryManager:
    """Append-only snapshot stack with a cursor.

    Index 0 is the undo floor.  It starts as the empty baseline; once more than
    ``limit`` entries exist the oldest is dropped and the floor moves up.  Snapshots
    are stored as tuples of frozen elements, so nothing done to the live
    collection afterwards can leak into the log.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"history limit must be at least 1, got {limit}")
        self.limit = limit
        self._stack: List[Snapshot] = [()]
        self._index = 0

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Snapshot:
        return self._stack[self._index]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._stack) - 1

    def push(self, snapshot: Iterable[Element]) -> None:
        del self._stack[self._index + 1 :]
        self._stack.append(tuple(snapshot))
        self._index += 1
        if len(self._stack) > self.limit:
            self._stack.pop(0)
            self._index -= 1
        logger.debug("history: push index=%d size=%d", self._index, len(self._stack))

    def undo(self) -> Optional[Snapshot]:
        if not self.can_undo:
            return None
        self._index -= 1
        logger.debug("history: undo -> index=%d", self._index)
        return self._stack[self._index]

    def redo(self) -> Optional[Snapshot]:
        if not self.can_redo:
            return None
        self._index += 1
        logger.debug("history: redo -> index=%d", self._index)
        return self._stack[self._index]
