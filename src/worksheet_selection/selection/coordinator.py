"""SelectionCoordinator: owner of the rectangular selection state.

The coordinator holds the double-buffered mask, the per-axis interval
bookkeeping and the "current"/"start" cell that ties the two axes together.
Row and column access go through two thin facades (``row_axis()`` and
``column_axis()``), so neither axis needs a reference to the other.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import numpy as np

from ..core.buffer import DragBuffer
from ..core.matrix import SelectionMatrix
from ..core.validation import validate_count, validate_dimensions
from .axis import AxisState, ColumnAxisModel, RowAxisModel, collapse_index
from .config import SelectionConfig
from .notifier import SelectionCallback, SelectionEvent, SelectionNotifier, guarded

logger = logging.getLogger(__name__)

_KINDS = ("set", "add", "toggle")


class SelectionCoordinator:
    """Spreadsheet-style cell selection over an ``n_rows x n_cols`` grid.

    Usage::

        sel = SelectionCoordinator(10, 4)
        sel.row_axis().set_selection_interval(2, 5)
        sel.column_axis().set_selection_interval(1, 2)
        sel.is_cell_selected(3, 1)   # True
        sel.on_change(lambda event: widget.repaint(event.first_index, event.last_index))

    All calls are expected on the UI thread. Mutators invoked from inside a
    change callback are queued and applied after the callback returns.
    """

    def __init__(
        self,
        n_rows: int,
        n_cols: int,
        config: SelectionConfig | None = None,
    ) -> None:
        n_rows, n_cols = validate_dimensions(n_rows, n_cols)
        self._config = config if config is not None else SelectionConfig()
        self._masks = DragBuffer(n_rows, n_cols)
        self._notifier = SelectionNotifier()
        self._states: dict[str, AxisState] = {"row": AxisState(), "col": AxisState()}

        # Cell the most recent interval call pointed at, per axis
        self._current: dict[str, int] = {"row": -1, "col": -1}
        # Where the current gesture started, per axis
        self._start: dict[str, int] = {"row": -1, "col": -1}

        self._value_is_adjusting = False

        self._row_axis = RowAxisModel(self)
        self._column_axis = ColumnAxisModel(self)

    # --- Wiring ---

    def row_axis(self) -> RowAxisModel:
        return self._row_axis

    def column_axis(self) -> ColumnAxisModel:
        return self._column_axis

    @property
    def config(self) -> SelectionConfig:
        return self._config

    @property
    def notifier(self) -> SelectionNotifier:
        return self._notifier

    def on_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(SelectionEvent)."""
        self._notifier.on_change(callback)

    def remove_listener(self, callback: SelectionCallback) -> None:
        self._notifier.remove_listener(callback)

    # --- Shape and cursor ---

    @property
    def n_rows(self) -> int:
        return self._masks.shape[0]

    @property
    def n_cols(self) -> int:
        return self._masks.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._masks.shape

    @property
    def current_row(self) -> int:
        return self._current["row"]

    @property
    def current_column(self) -> int:
        return self._current["col"]

    @property
    def start_row(self) -> int:
        return self._start["row"]

    @property
    def start_column(self) -> int:
        return self._start["col"]

    def set_current_cell(self, row: int, col: int) -> None:
        """Point the axis reads at ``(row, col)`` without changing the selection."""
        self._current["row"] = row
        self._current["col"] = col

    @property
    def value_is_adjusting(self) -> bool:
        return self._value_is_adjusting

    @property
    def drawing_to_buffer(self) -> bool:
        return self._masks.drawing_to_buffer

    @property
    def mask(self) -> SelectionMatrix:
        """The authoritative mask (scratch during a gesture, else committed)."""
        return self._masks.authoritative

    def _length(self, axis: str) -> int:
        return self.n_rows if axis == "row" else self.n_cols

    def _axis_state(self, axis: str) -> AxisState:
        return self._states[axis]

    def _span(self, axis: str) -> tuple[int, int]:
        """Interval of ``axis`` used when painting the other axis."""
        span = self._states[axis].span()
        if span is None:
            return (0, self._length(axis) - 1)
        return span

    # --- Gesture lifecycle ---

    @guarded
    def set_value_is_adjusting(self, adjusting: bool) -> None:
        """Mark a gesture in progress; clearing the flag commits the gesture."""
        adjusting = bool(adjusting)
        if adjusting == self._value_is_adjusting:
            return
        self._value_is_adjusting = adjusting
        if not adjusting:
            self._masks.commit()
            self._notify(0, self.n_rows - 1)

    @guarded
    def cancel_gesture(self) -> None:
        """Throw away the gesture being drawn; the committed selection stays."""
        self._value_is_adjusting = False
        self._masks.cancel()
        self._notify(0, self.n_rows - 1)

    # --- Mutators ---

    @guarded
    def select_block(
        self,
        row0: int,
        row1: int,
        col0: int,
        col1: int,
        additive: bool = False,
    ) -> None:
        """Select the rectangle ``[row0, row1] x [col0, col1]``.

        ``additive`` keeps the existing selection (multiple-interval mode only).
        """
        if not self._config.selectable:
            return
        if self._config.is_single:
            row0, col0 = row1, col1
        kind = "add" if additive and self._config.is_multiple_interval else "set"
        lead_only = self._config.use_lead_only_interval_semantics
        for axis, (i0, i1) in (("row", (row0, row1)), ("col", (col0, col1))):
            state = self._states[axis]
            if kind == "set":
                state.reset()
            state.mark(i0, i1)
            self._current[axis] = i1 if lead_only else i0
            self._start[axis] = i0
        logger.debug("select_block(%d, %d, %d, %d, %s)", row0, row1, col0, col1, kind)
        self._masks.mark_origin(clear=(kind == "set"))
        with self._editing((row0, row1)) as mask:
            if kind == "set":
                mask.clear()
            mask.fill((row0, row1), (col0, col1))

    def select_cell(self, row: int, col: int) -> None:
        """Replace the selection with the single cell ``(row, col)``."""
        self.select_block(row, row, col, col)

    @guarded
    def extend_selection(self, row: int, col: int) -> None:
        """Move the lead of both axes to ``(row, col)`` (shift-click / drag)."""
        if not self._config.selectable:
            return
        no_anchor = self._states["row"].anchor < 0 or self._states["col"].anchor < 0
        if no_anchor or self._config.is_single:
            self.select_block(row, row, col, col)
            return
        for axis, lead in (("row", row), ("col", col)):
            state = self._states[axis]
            state.lead = lead
            state.touch(lead)
            self._current[axis] = lead
        rows, cols = self._span("row"), self._span("col")
        with self._editing(rows, rewind=True) as mask:
            mask.fill(rows, cols)

    @guarded
    def select_row(self, row: int, clear: bool = True) -> None:
        """Select every cell of ``row``, optionally keeping other selections."""
        if not self._config.selectable or not 0 <= row < self.n_rows:
            return
        row_state, col_state = self._states["row"], self._states["col"]
        if clear:
            row_state.reset()
            col_state.reset()
        row_state.mark(row, row)
        col_state.mark(0, self.n_cols - 1)
        self._current["row"] = self._start["row"] = row
        self._current["col"] = self._start["col"] = 0
        self._masks.mark_origin(clear=clear)
        with self._editing((row, row)) as mask:
            if clear:
                mask.clear()
            mask.fill((row, row), (0, self.n_cols - 1))

    @guarded
    def deselect_row(self, row: int) -> None:
        """Deselect every cell of ``row``; other rows are untouched."""
        if not self._config.selectable or not 0 <= row < self.n_rows:
            return
        with self._editing((row, row)) as mask:
            mask.fill((row, row), (0, self.n_cols - 1), value=False)
        self._masks.mark_origin(clear=False)

    @guarded
    def select_column(self, col: int) -> None:
        """Replace the selection with every cell of column ``col``."""
        if not self._config.selectable or not 0 <= col < self.n_cols:
            return
        row_state, col_state = self._states["row"], self._states["col"]
        row_state.reset()
        col_state.reset()
        row_state.mark(0, self.n_rows - 1)
        col_state.mark(col, col)
        self._current["row"] = self._start["row"] = 0
        self._current["col"] = self._start["col"] = col
        self._masks.mark_origin(clear=True)
        with self._editing((0, self.n_rows - 1)) as mask:
            mask.clear()
            mask.fill((0, self.n_rows - 1), (col, col))

    @guarded
    def select_all(self) -> None:
        if not self._config.selectable:
            return
        for axis in ("row", "col"):
            state = self._states[axis]
            state.reset()
            state.mark(0, self._length(axis) - 1)
        self._masks.mark_origin(clear=True)
        with self._editing((0, self.n_rows - 1)) as mask:
            mask.fill((0, self.n_rows - 1), (0, self.n_cols - 1))

    @guarded
    def clear_selection(self) -> None:
        """Deselect every cell and forget both axes' intervals."""
        self._masks.clear()
        self._states["row"].reset()
        self._states["col"].reset()
        self._notify(0, self.n_rows - 1)

    # --- Axis plumbing (called by the facades) ---

    def _apply_interval(self, axis: str, index0: int, index1: int, kind: str) -> None:
        if kind not in _KINDS:
            raise ValueError(f"kind must be one of {_KINDS}, got {kind!r}.")
        if not self._config.selectable:
            return
        if self._config.is_single:
            index0 = index1
        if kind == "add" and not self._config.is_multiple_interval:
            kind = "set"

        state = self._states[axis]
        lead_only = self._config.use_lead_only_interval_semantics
        if lead_only and index0 != index1 and kind != "toggle":
            if state.anchor < 0:
                self._apply_interval(axis, index0, index0, kind)
            self._extend(axis, index1)
            return

        logger.debug("%s interval %s(%d, %d)", axis, kind, index0, index1)
        if kind == "set":
            state.reset()
        state.mark(index0, index1)
        self._current[axis] = index1 if lead_only else index0
        self._start[axis] = index0

        rows, cols = self._block(axis, index0, index1)
        if kind == "toggle":
            with self._editing(rows) as mask:
                mask.toggle(rows, cols)
            self._masks.mark_origin(clear=False)
            return
        self._masks.mark_origin(clear=(kind == "set"))
        with self._editing(rows) as mask:
            if kind == "set":
                mask.clear()
            mask.fill(rows, cols)

    def _block(
        self, axis: str, index0: int, index1: int
    ) -> tuple[tuple[int, int], tuple[int, int]]:
        """Rectangle addressed by an interval on ``axis``."""
        own = (min(index0, index1), max(index0, index1))
        if axis == "row":
            cols = self._span("col")
            if self._config.one_click_row_selection and self._states["col"].anchor == 0:
                cols = (0, self.n_cols - 1)
            return own, cols
        return self._span("row"), own

    def _extend(self, axis: str, lead: int) -> None:
        if not self._config.selectable:
            return
        state = self._states[axis]
        if state.anchor < 0 or self._config.is_single:
            self._apply_interval(axis, lead, lead, "set")
            return
        logger.debug("%s lead -> %d", axis, lead)
        state.lead = lead
        state.touch(lead)
        self._current[axis] = lead
        rows, cols = self._span("row"), self._span("col")
        with self._editing(rows, rewind=True) as mask:
            mask.fill(rows, cols)

    def _is_selected_on_axis(self, axis: str, index: int) -> bool:
        mask = self._masks.authoritative
        if axis == "row":
            col = self._current["col"]
            if col < 0:
                return mask.any_in_row(index)
            return mask.get(index, col)
        row = self._current["row"]
        if row < 0:
            return mask.any_in_col(index)
        return mask.get(row, index)

    @contextmanager
    def _editing(
        self, rows: tuple[int, int], rewind: bool = False
    ) -> Iterator[SelectionMatrix]:
        """Yield the writable mask; commit (unless adjusting) and notify after."""
        mask = self._masks.rewind() if rewind else self._masks.begin()
        yield mask
        if not self._value_is_adjusting:
            self._masks.commit()
        self._notify(min(rows), max(rows))

    def _notify(self, first: int, last: int) -> None:
        first = max(first, 0)
        last = max(last, first)
        self._notifier.notify(SelectionEvent(first, last, self._value_is_adjusting))

    # --- Reshaping ---

    @guarded
    def insert_rows(self, position: int, count: int = 1, inherit_from: int | None = None) -> None:
        """Insert ``count`` rows before ``position``; see SelectionMatrix.insert."""
        self._insert("row", position, count, inherit_from)

    @guarded
    def insert_columns(self, position: int, count: int = 1, inherit_from: int | None = None) -> None:
        self._insert("col", position, count, inherit_from)

    @guarded
    def remove_rows(self, first: int, last: int | None = None) -> None:
        """Remove rows ``[first, last]`` (``last`` defaults to ``first``)."""
        self._remove("row", first, first if last is None else last)

    @guarded
    def remove_columns(self, first: int, last: int | None = None) -> None:
        self._remove("col", first, first if last is None else last)

    @guarded
    def reset(self, n_rows: int, n_cols: int) -> None:
        """Replace the grid shape after the table data was swapped out."""
        n_rows, n_cols = validate_dimensions(n_rows, n_cols)
        self._masks.reset(n_rows, n_cols)
        for axis in ("row", "col"):
            self._states[axis].reset()
            self._current[axis] = -1
            self._start[axis] = -1
        self._value_is_adjusting = False
        self._notify(0, n_rows - 1)

    def _insert(self, axis: str, position: int, count: int, inherit_from: int | None) -> None:
        count = validate_count(count, "length")
        position = min(max(position, 0), self._length(axis))
        logger.debug(
            "insert %d %s(s) at %d (inherit from %s)", count, axis, position, inherit_from
        )
        self._masks.insert(axis, position, count, inherit_from)
        self._states[axis].shift(position, count)
        for cursor in (self._current, self._start):
            if cursor[axis] >= position:
                cursor[axis] += count
        self._notify(position if axis == "row" else 0, self.n_rows - 1)

    def _remove(self, axis: str, first: int, last: int) -> None:
        lo, hi = min(first, last), max(first, last)
        lo = max(lo, 0)
        hi = min(hi, self._length(axis) - 1)
        if lo > hi:
            return
        logger.debug("remove %s(s) %d..%d", axis, lo, hi)
        self._masks.remove(axis, lo, hi)
        self._states[axis].collapse(lo, hi)
        for cursor in (self._current, self._start):
            cursor[axis] = collapse_index(cursor[axis], lo, hi)
        self._notify(lo if axis == "row" else 0, self.n_rows - 1)

    # --- Queries (authoritative mask) ---

    def is_cell_selected(self, row: int, col: int) -> bool:
        return self._masks.authoritative.get(row, col)

    def selected_rows(self) -> list[int]:
        return self._masks.authoritative.selected_rows().tolist()

    def selected_columns(self) -> list[int]:
        return self._masks.authoritative.selected_cols().tolist()

    def selected_row(self) -> int:
        """First row with a selected cell, or -1."""
        rows = self._masks.authoritative.selected_rows()
        return int(rows[0]) if len(rows) else -1

    def selected_column(self) -> int:
        """First column with a selected cell, or -1."""
        cols = self._masks.authoritative.selected_cols()
        return int(cols[0]) if len(cols) else -1

    def all_cells_in_row_selected(self, row: int) -> bool:
        return self._masks.authoritative.row_is_full(row)

    def selected_cell_count(self) -> int:
        return self._masks.authoritative.count()

    def selected_cells(self) -> list[tuple[int, int]]:
        rows, cols = np.nonzero(self._masks.authoritative.as_grid())
        return list(zip(rows.tolist(), cols.tolist()))

    def selection_mask(self) -> np.ndarray:
        """Copy of the authoritative mask as an (n_rows, n_cols) bool array."""
        return np.array(self._masks.authoritative.as_grid())

    def __repr__(self) -> str:
        return (
            f"SelectionCoordinator(rows={self.n_rows}, cols={self.n_cols}, "
            f"selected={self.selected_cell_count()})"
        )
