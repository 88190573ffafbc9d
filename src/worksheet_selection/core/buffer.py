"""DragBuffer: committed and scratch selection masks for drag gestures."""

from __future__ import annotations

import logging

from .matrix import SelectionMatrix

logger = logging.getLogger(__name__)


class DragBuffer:
    """Double-buffered selection storage.

    ``committed`` holds the selection the user has settled on. While a
    selection gesture is being drawn, mutations go to ``scratch`` and
    ``drawing_to_buffer`` is True; readers then consult ``scratch``. When the
    gesture completes, ``commit()`` copies scratch into committed.

    ``origin`` is the mask as it stood when the current gesture began (empty
    for a replacing gesture). Extending the gesture to a new lead cell
    repaints scratch from it, so dragging back over cells un-highlights them.

    Only the mask returned by ``authoritative`` may be read.
    """

    def __init__(self, n_rows: int, n_cols: int) -> None:
        self._committed = SelectionMatrix(n_rows, n_cols)
        self._scratch = SelectionMatrix(n_rows, n_cols)
        self._origin: SelectionMatrix | None = None
        self._drawing_to_buffer = False

    @property
    def drawing_to_buffer(self) -> bool:
        return self._drawing_to_buffer

    @property
    def committed(self) -> SelectionMatrix:
        return self._committed

    @property
    def scratch(self) -> SelectionMatrix:
        return self._scratch

    @property
    def authoritative(self) -> SelectionMatrix:
        """The mask readers must use."""
        return self._scratch if self._drawing_to_buffer else self._committed

    @property
    def shape(self) -> tuple[int, int]:
        return self._committed.shape

    def begin(self) -> SelectionMatrix:
        """Start (or continue) drawing into scratch. Returns the scratch mask."""
        if not self._drawing_to_buffer:
            self._scratch.copy_from(self._committed)
            self._drawing_to_buffer = True
        return self._scratch

    def mark_origin(self, clear: bool) -> None:
        """Record the base a new gesture draws on top of."""
        if clear:
            self._origin = SelectionMatrix(*self.shape)
        else:
            self._origin = self.authoritative.copy()

    def rewind(self) -> SelectionMatrix:
        """Reset scratch to the gesture origin and return it."""
        scratch = self.begin()
        scratch.copy_from(self._origin if self._origin is not None else self._committed)
        return scratch

    def commit(self) -> None:
        """Copy scratch into committed; committed becomes authoritative."""
        if not self._drawing_to_buffer:
            return
        self._committed.copy_from(self._scratch)
        self._drawing_to_buffer = False
        logger.debug("Committed selection (%d cells)", self._committed.count())

    def cancel(self) -> None:
        """Discard scratch; the committed selection is authoritative again."""
        self._drawing_to_buffer = False
        self._scratch.copy_from(self._committed)

    def clear(self) -> None:
        """Deselect everything in every mask and end any gesture."""
        self._committed.clear()
        self._scratch.clear()
        self._origin = None
        self._drawing_to_buffer = False

    # --- Reshaping (applied to every mask in one step) ---

    def _masks(self) -> list[SelectionMatrix]:
        masks = [self._committed, self._scratch]
        if self._origin is not None:
            masks.append(self._origin)
        return masks

    def insert(
        self, axis: str, position: int, count: int, inherit_from: int | None
    ) -> None:
        for mask in self._masks():
            mask.insert(axis, position, count, inherit_from=inherit_from)

    def remove(self, axis: str, first: int, last: int) -> None:
        for mask in self._masks():
            mask.remove(axis, first, last)

    def reset(self, n_rows: int, n_cols: int) -> None:
        """Replace all masks with empty ones of a new shape."""
        self._committed = SelectionMatrix(n_rows, n_cols)
        self._scratch = SelectionMatrix(n_rows, n_cols)
        self._origin = None
        self._drawing_to_buffer = False
