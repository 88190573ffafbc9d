"""Rectangular selection state: config, notification, axes and coordinator."""

from .axis import AxisSelectionModel, AxisState, ColumnAxisModel, RowAxisModel
from .config import (
    MULTIPLE_INTERVAL_SELECTION,
    SELECTION_MODES,
    SINGLE_INTERVAL_SELECTION,
    SINGLE_SELECTION,
    SelectionConfig,
)
from .coordinator import SelectionCoordinator
from .notifier import SelectionEvent, SelectionNotifier, guarded

__all__ = [
    "AxisSelectionModel",
    "AxisState",
    "ColumnAxisModel",
    "RowAxisModel",
    "MULTIPLE_INTERVAL_SELECTION",
    "SELECTION_MODES",
    "SINGLE_INTERVAL_SELECTION",
    "SINGLE_SELECTION",
    "SelectionConfig",
    "SelectionCoordinator",
    "SelectionEvent",
    "SelectionNotifier",
    "guarded",
]
