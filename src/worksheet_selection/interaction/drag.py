"""DragGestureArbiter: decide whether a press starts a drag or a selection."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable

logger = logging.getLogger(__name__)


class DragDecision(str, Enum):
    START_DRAG = "startDrag"
    START_SELECTION = "startSelection"


class DragGestureArbiter:
    """Two-phase drag detection over mouse press/release history.

    Selection changes reach the host before drag notifications, so one press
    cannot tell "drag the existing selection" from "start a new selection".
    The arbiter answers START_DRAG only for a second consecutive press on a
    row that was selected when the mouse was last released. A press on a
    different row of that selection starts a new selection instead: after
    dragging out rows 1..3 from row 1, only another press on row 1 drags.

    ``source`` returns the currently selected row indices; it is read on
    every release.
    """

    def __init__(self, source: Callable[[], Iterable[int]]) -> None:
        self._source = source
        self._snapshot: frozenset[int] = frozenset()
        self._pressed_row: int | None = None
        self._previous_press_row: int | None = None
        self._candidate_row: int | None = None

    @property
    def snapshot(self) -> frozenset[int]:
        """Rows selected at the last release (cleared by the next press)."""
        return self._snapshot

    @property
    def candidate_row(self) -> int | None:
        return self._candidate_row

    def on_pressed(self, row: int) -> DragDecision:
        decision = DragDecision.START_SELECTION
        if row in self._snapshot and self._previous_press_row == row:
            decision = DragDecision.START_DRAG
            self._candidate_row = row
        self._pressed_row = row
        self._snapshot = frozenset()
        logger.debug("press on row %d -> %s", row, decision.value)
        return decision

    def on_released(self) -> None:
        self._snapshot = frozenset(self._source())
        self._previous_press_row = self._pressed_row
        self._pressed_row = None
        self._candidate_row = None

    def reset(self) -> None:
        """Forget all press history (e.g. after the table data is replaced)."""
        self._snapshot = frozenset()
        self._pressed_row = None
        self._previous_press_row = None
        self._candidate_row = None

    def __repr__(self) -> str:
        return (
            f"DragGestureArbiter(snapshot={sorted(self._snapshot)}, "
            f"candidate={self._candidate_row})"
        )
