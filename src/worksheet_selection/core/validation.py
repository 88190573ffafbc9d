"""Input validation with clear error messages."""

from __future__ import annotations

from typing import Any

import pandas as pd

VALID_AXES = ("row", "col")


def validate_dimensions(n_rows: Any, n_cols: Any) -> tuple[int, int]:
    """Validate a grid shape. Returns ``(n_rows, n_cols)`` as ints."""
    for name, value in (("n_rows", n_rows), ("n_cols", n_cols)):
        if isinstance(value, bool) or not hasattr(value, "__index__"):
            raise TypeError(
                f"{name} must be an integer, got {type(value).__name__}."
            )
        if int(value) < 0:
            raise ValueError(f"{name} must be >= 0, got {value}.")
    return int(n_rows), int(n_cols)


def validate_axis(axis: Any) -> str:
    """Validate an axis name ('row' or 'col')."""
    if axis not in VALID_AXES:
        raise ValueError(f"axis must be one of {VALID_AXES}, got {axis!r}.")
    return axis


def validate_count(count: Any, what: str = "count") -> int:
    """Validate the length of an insert/remove interval."""
    if isinstance(count, bool) or not hasattr(count, "__index__"):
        raise TypeError(f"{what} must be an integer, got {type(count).__name__}.")
    if int(count) < 1:
        raise ValueError(f"{what} must be >= 1, got {count}.")
    return int(count)


def validate_worksheet_frame(data: Any) -> pd.DataFrame:
    """Validate that data is a DataFrame usable as worksheet contents.

    Returns the validated DataFrame (unchanged).
    """
    if not isinstance(data, pd.DataFrame):
        raise TypeError(
            f"Expected a pandas DataFrame, got {type(data).__name__}. "
            "Wrap your data with pd.DataFrame(rows, columns=names)."
        )
    if data.columns.has_duplicates:
        dupes = data.columns[data.columns.duplicated()].unique().tolist()
        raise ValueError(
            f"Column names must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    return data
