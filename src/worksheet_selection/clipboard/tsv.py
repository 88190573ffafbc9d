"""Tab-separated clipboard text, the format spreadsheets paste."""

from __future__ import annotations

import pandas as pd


def format_block(frame: pd.DataFrame, include_header: bool = False) -> str:
    """Render ``frame`` as tab/newline separated text.

    Every row (the last included) ends with a newline. Missing values become
    empty strings. Cell text is written as is, without CSV quoting.
    """
    if frame.shape[1] == 0:
        return ""
    cells = frame.astype(object).where(frame.notna(), "").astype(str)
    lines = ["\t".join(row) for row in cells.itertuples(index=False, name=None)]
    if include_header:
        lines.insert(0, "\t".join(str(name) for name in frame.columns))
    return "".join(line + "\n" for line in lines)


def parse_block(text: str) -> list[list[str]]:
    """Split clipboard text into rows of cell strings."""
    if not text:
        return []
    lines = text.replace("\r\n", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.split("\t") for line in lines]
