"""SelectionMatrix: flattened boolean mask over a rows x cols grid."""

from __future__ import annotations

import numpy as np

from .validation import validate_axis, validate_count, validate_dimensions


class SelectionMatrix:
    """Row-major boolean mask: the single source of truth for "is (r, c) selected".

    Cells are held in a flat ``bool`` array of length ``n_rows * n_cols``.
    Reads never raise for out-of-range coordinates (they return False), because
    the host can ask about stale geometry while the grid is being resized.
    Structural changes (insert/remove/resize) replace the array in one step so
    the length invariant holds before any read.
    """

    __slots__ = ("_cells", "_n_rows", "_n_cols")

    def __init__(self, n_rows: int, n_cols: int) -> None:
        n_rows, n_cols = validate_dimensions(n_rows, n_cols)
        self._n_rows = n_rows
        self._n_cols = n_cols
        self._cells: np.ndarray = np.zeros(n_rows * n_cols, dtype=bool)

    @classmethod
    def from_grid(cls, grid: np.ndarray) -> SelectionMatrix:
        """Create a matrix from a 2-D array-like of truthy values."""
        arr = np.asarray(grid, dtype=bool)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2-D grid, got {arr.ndim} dimension(s).")
        obj = cls(arr.shape[0], arr.shape[1])
        obj._cells = np.ascontiguousarray(arr).reshape(-1).copy()
        return obj

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def n_cols(self) -> int:
        return self._n_cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._n_rows, self._n_cols)

    @property
    def size(self) -> int:
        return self._cells.shape[0]

    @property
    def cells(self) -> np.ndarray:
        """Flat row-major mask, read-only view."""
        v = self._cells.view()
        v.flags.writeable = False
        return v

    def as_grid(self) -> np.ndarray:
        """2-D (n_rows, n_cols) read-only view of the mask."""
        v = self._cells.reshape(self._n_rows, self._n_cols)
        v.flags.writeable = False
        return v

    def _grid(self) -> np.ndarray:
        return self._cells.reshape(self._n_rows, self._n_cols)

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._n_rows and 0 <= col < self._n_cols

    # --- Cell access ---

    def get(self, row: int, col: int) -> bool:
        """Return whether (row, col) is selected; False when out of range."""
        if not self._in_bounds(row, col):
            return False
        return bool(self._cells[row * self._n_cols + col])

    def is_cell_selected(self, row: int, col: int) -> bool:
        """Alias of :meth:`get`, so a bare matrix can feed a ContiguityValidator."""
        return self.get(row, col)

    def set(self, row: int, col: int, value: bool) -> None:
        """Set one cell. Out-of-range coordinates are ignored."""
        if not self._in_bounds(row, col):
            return
        self._cells[row * self._n_cols + col] = bool(value)

    def clear(self) -> None:
        """Deselect every cell."""
        self._cells[:] = False

    def fill(
        self,
        row_range: tuple[int, int],
        col_range: tuple[int, int],
        value: bool = True,
    ) -> None:
        """Set every cell in the closed block ``row_range x col_range``.

        Ranges are clipped to the grid; a block entirely outside it is a no-op.
        """
        rows = self._clip(row_range, self._n_rows)
        cols = self._clip(col_range, self._n_cols)
        if rows is None or cols is None:
            return
        self._grid()[rows, cols] = bool(value)

    def toggle(self, row_range: tuple[int, int], col_range: tuple[int, int]) -> None:
        """Flip every cell in the closed block ``row_range x col_range``."""
        rows = self._clip(row_range, self._n_rows)
        cols = self._clip(col_range, self._n_cols)
        if rows is None or cols is None:
            return
        grid = self._grid()
        grid[rows, cols] = ~grid[rows, cols]

    @staticmethod
    def _clip(bounds: tuple[int, int], limit: int) -> slice | None:
        lo, hi = min(bounds), max(bounds)
        lo = max(lo, 0)
        hi = min(hi, limit - 1)
        if lo > hi:
            return None
        return slice(lo, hi + 1)

    def copy_from(self, other: SelectionMatrix) -> None:
        """Overwrite this mask (shape included) with the contents of ``other``."""
        self._n_rows = other._n_rows
        self._n_cols = other._n_cols
        self._cells = other._cells.copy()

    def copy(self) -> SelectionMatrix:
        obj = object.__new__(SelectionMatrix)
        obj._n_rows = self._n_rows
        obj._n_cols = self._n_cols
        obj._cells = self._cells.copy()
        return obj

    # --- Projections ---

    def selected_rows(self) -> np.ndarray:
        """Indices of rows with at least one selected cell, ascending."""
        return np.flatnonzero(self._grid().any(axis=1))

    def selected_cols(self) -> np.ndarray:
        """Indices of columns with at least one selected cell, ascending."""
        return np.flatnonzero(self._grid().any(axis=0))

    def row_is_full(self, row: int) -> bool:
        """True when every cell of ``row`` is selected (False when out of range)."""
        if not 0 <= row < self._n_rows or self._n_cols == 0:
            return False
        return bool(self._grid()[row].all())

    def any_in_row(self, row: int) -> bool:
        if not 0 <= row < self._n_rows:
            return False
        return bool(self._grid()[row].any())

    def any_in_col(self, col: int) -> bool:
        if not 0 <= col < self._n_cols:
            return False
        return bool(self._grid()[:, col].any())

    def count(self) -> int:
        return int(self._cells.sum())

    # --- Reshaping ---

    def insert(
        self,
        axis: str,
        position: int,
        count: int = 1,
        inherit_from: int | None = None,
    ) -> None:
        """Insert ``count`` rows or columns before index ``position``.

        ``inherit_from`` names a row/column (in pre-insert numbering) whose
        selection state is copied into every inserted line; None inserts
        unselected lines. ``position`` is clipped to ``[0, length]``.
        """
        validate_axis(axis)
        count = validate_count(count)
        ax = 0 if axis == "row" else 1
        grid = self._grid()
        length = grid.shape[ax]
        position = min(max(position, 0), length)

        if inherit_from is not None and 0 <= inherit_from < length:
            source = np.take(grid, [inherit_from], axis=ax)
            block = np.repeat(source, count, axis=ax)
        else:
            shape = list(grid.shape)
            shape[ax] = count
            block = np.zeros(shape, dtype=bool)

        head = grid[:position] if ax == 0 else grid[:, :position]
        tail = grid[position:] if ax == 0 else grid[:, position:]
        new_grid = np.concatenate([head, block, tail], axis=ax)
        self._replace(new_grid)

    def remove(self, axis: str, first: int, last: int) -> None:
        """Remove the closed range ``[first, last]`` of rows or columns.

        The range is clipped to the grid; nothing happens if it lies outside.
        """
        validate_axis(axis)
        ax = 0 if axis == "row" else 1
        grid = self._grid()
        span = self._clip((first, last), grid.shape[ax])
        if span is None:
            return
        self._replace(np.delete(grid, span, axis=ax))

    def resize(
        self,
        n_rows: int,
        n_cols: int,
        inserted_at: int | None = None,
        axis: str | None = None,
    ) -> None:
        """Change the grid shape.

        With ``inserted_at`` and ``axis`` the change is an insert (growth) or a
        delete (shrink) of lines starting at ``inserted_at`` along that axis;
        inserted lines inherit the selection of the line they were inserted
        next to (the one above/left, or the old first line when inserting at 0).
        Without them the top-left region is kept and new cells are unselected.
        """
        n_rows, n_cols = validate_dimensions(n_rows, n_cols)
        if inserted_at is None or axis is None:
            new_grid = np.zeros((n_rows, n_cols), dtype=bool)
            keep_r = min(n_rows, self._n_rows)
            keep_c = min(n_cols, self._n_cols)
            new_grid[:keep_r, :keep_c] = self._grid()[:keep_r, :keep_c]
            self._replace(new_grid)
            return

        validate_axis(axis)
        if axis == "row":
            if n_cols != self._n_cols:
                raise ValueError("A row insert/delete cannot change the column count.")
            delta = n_rows - self._n_rows
        else:
            if n_rows != self._n_rows:
                raise ValueError("A column insert/delete cannot change the row count.")
            delta = n_cols - self._n_cols

        if delta > 0:
            neighbour = inserted_at - 1 if inserted_at > 0 else 0
            self.insert(axis, inserted_at, delta, inherit_from=neighbour)
        elif delta < 0:
            self.remove(axis, inserted_at, inserted_at - delta - 1)

    def _replace(self, grid: np.ndarray) -> None:
        self._n_rows, self._n_cols = grid.shape
        self._cells = np.ascontiguousarray(grid, dtype=bool).reshape(-1).copy()

    def to_bytes(self) -> bytes:
        """Bit-packed row-major mask for transfer to the host renderer."""
        return np.packbits(self._cells).tobytes()

    def __repr__(self) -> str:
        return (
            f"SelectionMatrix(rows={self._n_rows}, cols={self._n_cols}, "
            f"selected={self.count()})"
        )
