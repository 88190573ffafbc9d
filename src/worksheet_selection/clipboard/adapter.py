"""Copy/paste between a worksheet selection and a text clipboard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np
import pandas as pd

from ..core.errors import NonContiguousSelectionError, OperationDisabledError, PasteError
from .contiguity import PASTE_MESSAGE, ContiguityValidator
from .tsv import format_block, parse_block

if TYPE_CHECKING:
    from ..api import Worksheet

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "t", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "f", "no", "n", "0"}


class Clipboard(Protocol):
    """Anything that can hold a piece of text (the system clipboard, a test double)."""

    def get_text(self) -> str | None: ...

    def set_text(self, text: str) -> None: ...


class MemoryClipboard:
    """In-process clipboard."""

    def __init__(self, text: str | None = None) -> None:
        self._text = text

    def get_text(self) -> str | None:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text

    def __repr__(self) -> str:
        return f"MemoryClipboard({self._text!r})"


def coerce_value(value: str, dtype: Any, column: Any = None) -> Any:
    """Convert clipboard text to a value that fits a column of ``dtype``.

    Raises PasteError when the text cannot be represented in the column.
    """
    text = value.strip()
    try:
        if pd.api.types.is_bool_dtype(dtype):
            lowered = text.lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
            raise ValueError(f"not a boolean: {value!r}")
        if pd.api.types.is_integer_dtype(dtype):
            return int(text)
        if pd.api.types.is_float_dtype(dtype):
            return np.nan if text == "" else float(text)
        if pd.api.types.is_datetime64_any_dtype(dtype):
            return pd.NaT if text == "" else pd.Timestamp(text)
    except ValueError as exc:
        raise PasteError(
            f"Cannot paste {value!r} into column {column!r} ({dtype}): {exc}"
        ) from exc
    return value


class CopyPasteAdapter:
    """Moves the selected block of a worksheet to and from a clipboard.

    Usage::

        adapter = CopyPasteAdapter(worksheet, MemoryClipboard())
        adapter.copy()        # selected block as tab-separated text
        adapter.paste()       # clipboard text into the selected block
    """

    def __init__(self, worksheet: Worksheet, clipboard: Clipboard | None = None) -> None:
        self._worksheet = worksheet
        self._clipboard = clipboard if clipboard is not None else MemoryClipboard()
        self._validator = ContiguityValidator(worksheet.selection)

    @property
    def clipboard(self) -> Clipboard:
        return self._clipboard

    @property
    def validator(self) -> ContiguityValidator:
        return self._validator

    def copy(self, include_header: bool = False) -> str | None:
        """Copy the selected block. Returns the text, or None with nothing selected."""
        if not self._worksheet.config.copy_enabled:
            raise OperationDisabledError("Copy is disabled for this worksheet.")
        selection = self._worksheet.selection
        rows = selection.selected_rows()
        cols = selection.selected_columns()
        if not rows or not cols:
            return None
        result = self._validator.check(rows, cols)
        if not result:
            logger.info("Copy rejected: %s", result.message)
            raise NonContiguousSelectionError(result.message)
        text = format_block(self._worksheet.data.iloc[rows, cols], include_header)
        self._clipboard.set_text(text)
        logger.debug("Copied %d row(s) x %d column(s)", len(rows), len(cols))
        return text

    def copy_all(self, include_header: bool = False) -> str:
        """Copy the whole table regardless of the selection."""
        if not self._worksheet.config.copy_enabled:
            raise OperationDisabledError("Copy is disabled for this worksheet.")
        text = format_block(self._worksheet.data, include_header)
        self._clipboard.set_text(text)
        return text

    def paste(self) -> int:
        """Write the clipboard into the selected block. Returns cells written.

        One clipboard value with several cells selected fills them all.
        Otherwise values are laid out from the top-left selected cell; values
        past the table edge are dropped and read-only columns are skipped.
        Nothing is written if any value fails to convert.
        """
        if not self._worksheet.config.paste_enabled:
            raise OperationDisabledError("Paste is disabled for this worksheet.")
        selection = self._worksheet.selection
        rows = selection.selected_rows()
        cols = selection.selected_columns()
        if not rows or not cols or not self._validator.is_contiguous_block(rows, cols):
            logger.info("Paste rejected: selection is not one block")
            raise NonContiguousSelectionError(PASTE_MESSAGE)

        text = self._clipboard.get_text()
        if not text:
            logger.info("Paste ignored: clipboard is empty")
            return 0
        values = parse_block(text)

        if len(values) == 1 and len(values[0]) == 1 and (len(rows) > 1 or len(cols) > 1):
            fill = values[0][0]
            targets = [(r, c, fill) for r in rows for c in cols]
        else:
            targets = []
            for i, line in enumerate(values):
                for j, value in enumerate(line):
                    targets.append((rows[0] + i, cols[0] + j, value))

        return self._write(targets)

    def _write(self, targets: list[tuple[int, int, str]]) -> int:
        frame = self._worksheet.data
        n_rows, n_cols = frame.shape
        converted = []
        for row, col, value in targets:
            if not (0 <= row < n_rows and 0 <= col < n_cols):
                continue
            if not self._worksheet.is_cell_editable(row, col):
                continue
            dtype = frame.dtypes.iloc[col]
            converted.append((row, col, coerce_value(value, dtype, frame.columns[col])))
        for row, col, value in converted:
            frame.iat[row, col] = value
        logger.debug("Pasted %d cell(s)", len(converted))
        return len(converted)
