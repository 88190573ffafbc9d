"""Serializers: selection state in formats the host renderer consumes."""

from __future__ import annotations

import json

from ..selection.coordinator import SelectionCoordinator
from ..selection.notifier import SelectionEvent


def serialize_mask(coordinator: SelectionCoordinator) -> bytes:
    """Serialize the authoritative mask as bit-packed row-major bytes."""
    return coordinator.mask.to_bytes()


def serialize_selection(coordinator: SelectionCoordinator) -> str:
    """Serialize the selection summary as JSON string."""
    rows = coordinator.row_axis()
    cols = coordinator.column_axis()
    return json.dumps({
        "nRows": coordinator.n_rows,
        "nCols": coordinator.n_cols,
        "selectedRows": coordinator.selected_rows(),
        "selectedColumns": coordinator.selected_columns(),
        "anchor": {
            "row": rows.anchor_selection_index,
            "col": cols.anchor_selection_index,
        },
        "lead": {
            "row": rows.lead_selection_index,
            "col": cols.lead_selection_index,
        },
        "adjusting": coordinator.value_is_adjusting,
        "drawingToBuffer": coordinator.drawing_to_buffer,
    })


def serialize_event(event: SelectionEvent) -> str:
    """Serialize a change notification as JSON string."""
    return json.dumps(event.to_dict())
