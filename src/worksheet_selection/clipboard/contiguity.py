"""ContiguityValidator: is the selection one unbroken rectangle?"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

COLUMNS_MESSAGE = "You must select a contiguous block of columns."
ROWS_MESSAGE = "You must select a contiguous block of rows."
BLOCK_MESSAGE = "You must select a contiguous block of rows and columns."
PASTE_MESSAGE = "Must select a contiguous range of cells."


class CellSource(Protocol):
    def is_cell_selected(self, row: int, col: int) -> bool: ...


@dataclass(frozen=True)
class ContiguityResult:
    """Outcome of a contiguity check; ``message`` is empty when it passed."""

    contiguous: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.contiguous


def _span_matches(indices: Sequence[int]) -> bool:
    return indices[-1] - indices[0] + 1 == len(indices)


class ContiguityValidator:
    """Pure query against a mask: rows and columns must form one block.

    ``source`` is anything with ``is_cell_selected(row, col)``, normally a
    SelectionCoordinator. Index lists are expected sorted ascending.
    """

    def __init__(self, source: CellSource) -> None:
        self._source = source

    def is_contiguous_block(
        self, selected_rows: Sequence[int], selected_cols: Sequence[int]
    ) -> bool:
        if len(selected_rows) == 0 or len(selected_cols) == 0:
            return True
        if len(selected_rows) == 1 and len(selected_cols) == 1:
            return True
        if not _span_matches(selected_cols) or not _span_matches(selected_rows):
            return False
        # A matching span still allows holes (L shapes, donuts)
        for row in range(selected_rows[0], selected_rows[-1] + 1):
            for col in range(selected_cols[0], selected_cols[-1] + 1):
                if not self._source.is_cell_selected(row, col):
                    return False
        return True

    def check(
        self, selected_rows: Sequence[int], selected_cols: Sequence[int]
    ) -> ContiguityResult:
        """Like :meth:`is_contiguous_block`, with the message to show on failure."""
        if self.is_contiguous_block(selected_rows, selected_cols):
            return ContiguityResult(True)
        if len(selected_rows) == 1:
            message = COLUMNS_MESSAGE
        elif len(selected_cols) == 1:
            message = ROWS_MESSAGE
        else:
            message = BLOCK_MESSAGE
        return ContiguityResult(False, message)
