"""worksheet-selection: spreadsheet-style rectangular cell selection for grid widgets."""

from ._version import __version__
from .api import Worksheet
from .clipboard import ContiguityValidator, CopyPasteAdapter, MemoryClipboard
from .core.errors import (
    NonContiguousSelectionError,
    OperationDisabledError,
    PasteError,
    WorksheetSelectionError,
)
from .core.matrix import SelectionMatrix
from .interaction import DragDecision, DragGestureArbiter
from .logging_config import setup_logging
from .selection import (
    ColumnAxisModel,
    RowAxisModel,
    SelectionConfig,
    SelectionCoordinator,
    SelectionEvent,
)

__all__ = [
    "__version__",
    "Worksheet",
    "SelectionCoordinator",
    "SelectionConfig",
    "SelectionEvent",
    "SelectionMatrix",
    "RowAxisModel",
    "ColumnAxisModel",
    "ContiguityValidator",
    "CopyPasteAdapter",
    "MemoryClipboard",
    "DragDecision",
    "DragGestureArbiter",
    "WorksheetSelectionError",
    "NonContiguousSelectionError",
    "PasteError",
    "OperationDisabledError",
    "setup_logging",
]
