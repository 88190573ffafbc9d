"""Worksheet: a table plus its rectangular selection (the host grid boundary)."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence

import numpy as np
import pandas as pd

from .clipboard.adapter import Clipboard, CopyPasteAdapter
from .core.validation import validate_worksheet_frame
from .interaction.drag import DragDecision, DragGestureArbiter
from .selection.config import SelectionConfig
from .selection.coordinator import SelectionCoordinator
from .selection.notifier import SelectionEvent


class Worksheet:
    """Spreadsheet-like table with cell selection and copy/paste.

    Usage::

        import worksheet_selection as ws

        sheet = ws.Worksheet(df, read_only_columns=["id"])
        sheet.mouse_pressed(1, 1)
        sheet.mouse_dragged(3, 2)
        sheet.mouse_released()
        print(sheet.selected_rows(), sheet.selected_columns())
        text = sheet.copy()

        sheet.on_selection_change(lambda event: print(event))

    The frame is held with a positional index: row ``i`` of the selection is
    row ``i`` of ``sheet.data``.
    """

    def __init__(
        self,
        data: pd.DataFrame,
        config: SelectionConfig | None = None,
        clipboard: Clipboard | None = None,
        read_only_columns: Iterable[Any] = (),
    ) -> None:
        validate_worksheet_frame(data)
        self._data = data.reset_index(drop=True).copy()
        self._config = config if config is not None else SelectionConfig()

        self._read_only: set[Any] = set()
        for name in read_only_columns:
            if name not in self._data.columns:
                raise ValueError(f"Unknown read-only column {name!r}.")
            self._read_only.add(name)

        self._selection = SelectionCoordinator(
            self._data.shape[0], self._data.shape[1], config=self._config
        )
        self._clipboard = CopyPasteAdapter(self, clipboard)
        self._arbiter = DragGestureArbiter(self._selection.selected_rows)

        # Row of the last plain/ctrl row-header click; shift-clicks extend from it
        self._last_row_selected = -1

    # --- Accessors ---

    @property
    def data(self) -> pd.DataFrame:
        return self._data

    @property
    def config(self) -> SelectionConfig:
        return self._config

    @property
    def selection(self) -> SelectionCoordinator:
        return self._selection

    @property
    def clipboard(self) -> CopyPasteAdapter:
        return self._clipboard

    @property
    def arbiter(self) -> DragGestureArbiter:
        return self._arbiter

    @property
    def n_rows(self) -> int:
        return self._data.shape[0]

    @property
    def n_cols(self) -> int:
        return self._data.shape[1]

    @property
    def read_only_columns(self) -> frozenset:
        return frozenset(self._read_only)

    def on_selection_change(self, callback: Callable[[SelectionEvent], Any]) -> None:
        """Register a callback: fn(SelectionEvent)."""
        self._selection.on_change(callback)

    # --- Host grid notifications (selection only) ---

    def row_inserted(self, at: int, count: int = 1) -> None:
        """The host grid gained ``count`` rows at ``at``."""
        axis = self._selection.row_axis()
        if at > 0:
            axis.insert_index_interval(at - 1, count, before=False)
        else:
            axis.insert_index_interval(0, count, before=True)

    def row_removed(self, at: int, count: int = 1) -> None:
        self._selection.row_axis().remove_index_interval(at, at + count - 1)

    def column_inserted(self, at: int, count: int = 1) -> None:
        """The host grid gained ``count`` columns at ``at``."""
        axis = self._selection.column_axis()
        if at > 0:
            axis.insert_index_interval(at - 1, count, before=False)
        else:
            axis.insert_index_interval(0, count, before=True)

    def column_removed(self, at: int, count: int = 1) -> None:
        self._selection.column_axis().remove_index_interval(at, at + count - 1)

    # --- Data operations ---

    def _check_row(self, row: int, upper: int | None = None) -> None:
        upper = self.n_rows if upper is None else upper
        if not 0 <= row < upper:
            raise IndexError(f"Row {row} out of range [0, {upper}).")

    def _check_col(self, col: int, upper: int | None = None) -> None:
        upper = self.n_cols if upper is None else upper
        if not 0 <= col < upper:
            raise IndexError(f"Column {col} out of range [0, {upper}).")

    def _row_values(self, values: Mapping[Any, Any] | Sequence[Any]) -> dict[Any, Any]:
        """Map new-row values to column names, checking them against the frame."""
        if isinstance(values, Mapping):
            for name in values:
                if name not in self._data.columns:
                    raise ValueError(f"Unknown column {name!r}.")
            return dict(values)
        values = list(values)
        if len(values) != self.n_cols:
            raise ValueError(
                f"Row has {len(values)} value(s), the worksheet has {self.n_cols} column(s)."
            )
        return dict(zip(self._data.columns, values))

    def add_row(self, values: Mapping[Any, Any] | Sequence[Any] | None = None) -> int:
        """Append a row; returns its index."""
        at = self.n_rows
        self.insert_row(at, values)
        return at

    def insert_row(
        self, at: int, values: Mapping[Any, Any] | Sequence[Any] | None = None
    ) -> None:
        """Insert a row before ``at``; missing values are NaN.

        The new row takes the selection of the row above it.
        """
        self._check_row(at, self.n_rows + 1)
        row_values = {} if values is None else self._row_values(values)
        order = list(range(at)) + [-1] + list(range(at, self.n_rows))
        self._data = self._data.reindex(order).reset_index(drop=True)
        for name, value in row_values.items():
            self._data.at[at, name] = value
        self.row_inserted(at)

    def delete_row(self, row: int) -> None:
        self._check_row(row)
        self._data = self._data.drop(index=row).reset_index(drop=True)
        self.row_removed(row)

    def delete_rows(self, rows: Iterable[int]) -> None:
        """Delete several rows given by their current indices."""
        targets = sorted(set(rows), reverse=True)
        for row in targets:
            self._check_row(row)
        self._data = self._data.drop(index=targets).reset_index(drop=True)
        for row in targets:
            self.row_removed(row)

    def insert_column(self, at: int, name: Any, values: Any = None) -> None:
        """Insert column ``name`` before position ``at``."""
        self._check_col(at, self.n_cols + 1)
        if name in self._data.columns:
            raise ValueError(f"Column {name!r} already exists.")
        self._data.insert(at, name, np.nan if values is None else values)
        self.column_inserted(at)

    def delete_column(self, col: int) -> None:
        self._check_col(col)
        name = self._data.columns[col]
        self._data = self._data.drop(columns=[name])
        self._read_only.discard(name)
        self.column_removed(col)

    def is_cell_editable(self, row: int, col: int) -> bool:
        if not (0 <= row < self.n_rows and 0 <= col < self.n_cols):
            return False
        return self._data.columns[col] not in self._read_only

    def value_at(self, row: int, col: int) -> Any:
        self._check_row(row)
        self._check_col(col)
        return self._data.iat[row, col]

    def set_value_at(self, row: int, col: int, value: Any) -> None:
        self._check_row(row)
        self._check_col(col)
        if not self.is_cell_editable(row, col):
            raise ValueError(f"Column {self._data.columns[col]!r} is read-only.")
        self._data.iat[row, col] = value

    def replace_data(self, data: pd.DataFrame) -> None:
        """Swap in new table contents; the selection is cleared."""
        validate_worksheet_frame(data)
        self._data = data.reset_index(drop=True).copy()
        self._read_only &= set(self._data.columns)
        self._selection.reset(self._data.shape[0], self._data.shape[1])
        self._arbiter.reset()
        self._last_row_selected = -1

    # --- Mouse input ---

    def mouse_pressed(
        self, row: int, col: int, control: bool = False, shift: bool = False
    ) -> DragDecision:
        """Press on cell ``(row, col)``.

        Returns START_DRAG when the host should drag the existing selection;
        the selection is left untouched in that case.
        """
        decision = self._arbiter.on_pressed(row)
        if decision is DragDecision.START_DRAG:
            return decision

        sel = self._selection
        sel.set_value_is_adjusting(True)
        if shift:
            sel.extend_selection(row, col)
        elif control:
            sel.select_block(row, row, col, col, additive=True)
        elif self._config.one_click_row_selection and col == 0:
            sel.select_row(row)
        else:
            sel.select_cell(row, col)
        return decision

    def mouse_dragged(self, row: int, col: int) -> None:
        if self._arbiter.candidate_row is not None:
            return
        if self._selection.value_is_adjusting:
            self._selection.extend_selection(row, col)

    def mouse_released(self) -> None:
        self._selection.set_value_is_adjusting(False)
        self._arbiter.on_released()

    def header_pressed(self, col: int) -> None:
        """Column header click: selects the column with one-click selection on."""
        if not self._config.one_click_column_selection:
            return
        if 0 <= col < self.n_cols:
            self._selection.select_column(col)

    def row_header_pressed(self, row: int, control: bool = False, shift: bool = False) -> None:
        """Row header click with one-click row selection on.

        Plain click selects the row. Ctrl toggles it. Shift selects the range
        from the last clicked row, replacing the rest of the selection.
        """
        if not self._config.one_click_row_selection:
            return
        if not 0 <= row < self.n_rows:
            return

        sel = self._selection
        if (not control and not shift) or self._last_row_selected == -1:
            sel.select_row(row, clear=True)
        elif control and not shift:
            if sel.all_cells_in_row_selected(row):
                sel.deselect_row(row)
            else:
                sel.select_row(row, clear=False)
        else:
            low = min(row, self._last_row_selected)
            high = max(row, self._last_row_selected)
            if shift and not control:
                sel.clear_selection()
            for i in range(low, high + 1):
                sel.select_row(i, clear=False)

        if not (shift and not control):
            self._last_row_selected = row

    # --- Selection conveniences ---

    def select_all(self) -> None:
        self._selection.select_all()

    def deselect_all(self) -> None:
        self._selection.clear_selection()

    def select_row(self, row: int) -> None:
        self._selection.select_row(row)

    def select_column(self, col: int) -> None:
        self._selection.select_column(col)

    def select_cell(self, row: int, col: int) -> None:
        self._selection.select_cell(row, col)

    def selected_rows(self) -> list[int]:
        return self._selection.selected_rows()

    def selected_columns(self) -> list[int]:
        return self._selection.selected_columns()

    def is_cell_selected(self, row: int, col: int) -> bool:
        return self._selection.is_cell_selected(row, col)

    # --- Clipboard ---

    def copy(self, include_header: bool = False) -> str | None:
        return self._clipboard.copy(include_header)

    def copy_all(self, include_header: bool = False) -> str:
        return self._clipboard.copy_all(include_header)

    def paste(self) -> int:
        return self._clipboard.paste()

    def __repr__(self) -> str:
        return (
            f"Worksheet({self.n_rows}x{self.n_cols}, "
            f"selected_cells={self._selection.selected_cell_count()})"
        )
