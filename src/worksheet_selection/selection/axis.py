"""Row and column axis models: 1-D facades over the shared selection mask."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .notifier import SelectionNotifier, guarded

if TYPE_CHECKING:
    from .coordinator import SelectionCoordinator

logger = logging.getLogger(__name__)


@dataclass
class AxisState:
    """Interval bookkeeping for one axis. -1 means "unset"."""

    anchor: int = -1
    lead: int = -1
    min_index: int = -1
    max_index: int = -1

    def reset(self) -> None:
        self.anchor = self.lead = self.min_index = self.max_index = -1

    def mark(self, index0: int, index1: int) -> None:
        """Record an interval call: anchor/lead plus min/max widening."""
        self.anchor = index0
        self.lead = index1
        self.touch(index0, index1)

    def touch(self, *indices: int) -> None:
        for i in indices:
            if i < 0:
                continue
            if self.min_index < 0 or i < self.min_index:
                self.min_index = i
            if i > self.max_index:
                self.max_index = i

    def span(self) -> tuple[int, int] | None:
        """Closed range between anchor and lead, or None without a gesture."""
        if self.anchor < 0 or self.lead < 0:
            return None
        return (min(self.anchor, self.lead), max(self.anchor, self.lead))

    def shift(self, position: int, count: int) -> None:
        """Move indices at or after ``position`` down by ``count`` (insert)."""
        self.anchor = shift_index(self.anchor, position, count)
        self.lead = shift_index(self.lead, position, count)
        self.min_index = shift_index(self.min_index, position, count)
        self.max_index = shift_index(self.max_index, position, count)

    def collapse(self, first: int, last: int) -> None:
        """Adjust indices for the removal of ``[first, last]``."""
        self.anchor = collapse_index(self.anchor, first, last)
        self.lead = collapse_index(self.lead, first, last)
        self.min_index = collapse_index(self.min_index, first, last)
        self.max_index = collapse_index(self.max_index, first, last)
        if self.max_index < 0:
            self.min_index = -1
        elif self.min_index < 0:
            self.min_index = 0


def shift_index(index: int, position: int, count: int) -> int:
    if index >= 0 and index >= position:
        return index + count
    return index


def collapse_index(index: int, first: int, last: int) -> int:
    if index < first:
        return index
    if index > last:
        return index - (last - first + 1)
    return first - 1


class AxisSelectionModel(ABC):
    """Interval-selection contract shared by the row and column axes.

    A facade owns no storage: every call is forwarded to the
    :class:`SelectionCoordinator` it is attached to. Until attached, reads
    report "nothing selected" and mutators are ignored.
    """

    def __init__(self, coordinator: SelectionCoordinator | None = None) -> None:
        self._coordinator = coordinator

    @property
    @abstractmethod
    def axis(self) -> str:
        """'row' or 'col'."""

    def attach(self, coordinator: SelectionCoordinator) -> None:
        self._coordinator = coordinator

    @property
    def coordinator(self) -> SelectionCoordinator | None:
        return self._coordinator

    @property
    def is_attached(self) -> bool:
        return self._coordinator is not None

    @property
    def notifier(self) -> SelectionNotifier | None:
        if self._coordinator is None:
            return None
        return self._coordinator.notifier

    def _bound(self, operation: str) -> SelectionCoordinator | None:
        if self._coordinator is None:
            logger.warning(
                "%s axis %s() called before attachment; ignored", self.axis, operation
            )
        return self._coordinator

    # --- Mutators ---

    @guarded
    def set_selection_interval(self, index0: int, index1: int) -> None:
        """Replace the selection with ``[index0, index1]`` on this axis.

        The other axis contributes its current interval (all of it when it
        has none), so the result is a rectangle.
        """
        c = self._bound("set_selection_interval")
        if c is not None:
            c._apply_interval(self.axis, index0, index1, "set")

    @guarded
    def add_selection_interval(self, index0: int, index1: int) -> None:
        """Add ``[index0, index1]`` to the selection.

        Only multiple-interval mode is additive; other modes replace.
        """
        c = self._bound("add_selection_interval")
        if c is not None:
            c._apply_interval(self.axis, index0, index1, "add")

    @guarded
    def remove_selection_interval(self, index0: int, index1: int) -> None:
        """Toggle every cell addressed by ``[index0, index1]``.

        This flips rather than clears: calling it twice with the same
        arguments restores the previous selection.
        """
        c = self._bound("remove_selection_interval")
        if c is not None:
            c._apply_interval(self.axis, index0, index1, "toggle")

    @guarded
    def set_lead_selection_index(self, lead: int) -> None:
        """Extend the current gesture from its anchor to ``lead``."""
        c = self._bound("set_lead_selection_index")
        if c is not None:
            c._extend(self.axis, lead)

    @guarded
    def set_anchor_selection_index(self, anchor: int) -> None:
        """Move the anchor without repainting."""
        c = self._bound("set_anchor_selection_index")
        if c is not None:
            c._axis_state(self.axis).anchor = anchor

    @guarded
    def clear_selection(self) -> None:
        c = self._bound("clear_selection")
        if c is not None:
            c.clear_selection()

    @guarded
    def insert_index_interval(self, index: int, length: int, before: bool = True) -> None:
        """Grow the axis by ``length`` lines next to ``index``.

        In multiple-interval mode the new lines copy the selection of the
        line at ``index``; otherwise they are unselected.
        """
        c = self._bound("insert_index_interval")
        if c is None:
            return
        position = index if before else index + 1
        inherit = index if c.config.is_multiple_interval else None
        c._insert(self.axis, position, length, inherit)

    @guarded
    def remove_index_interval(self, index0: int, index1: int) -> None:
        """Shrink the axis by removing lines ``[index0, index1]``."""
        c = self._bound("remove_index_interval")
        if c is not None:
            c._remove(self.axis, index0, index1)

    # --- Queries ---

    def is_selected_index(self, index: int) -> bool:
        """Whether ``index`` is selected at the other axis's current index."""
        if self._coordinator is None:
            return False
        return self._coordinator._is_selected_on_axis(self.axis, index)

    @property
    def anchor_selection_index(self) -> int:
        if self._coordinator is None:
            return -1
        return self._coordinator._axis_state(self.axis).anchor

    @property
    def lead_selection_index(self) -> int:
        if self._coordinator is None:
            return -1
        return self._coordinator._axis_state(self.axis).lead

    @property
    def min_selection_index(self) -> int:
        """Smallest index touched since the last reset (scans the mask if none)."""
        if self._coordinator is None:
            return -1
        cached = self._coordinator._axis_state(self.axis).min_index
        if cached >= 0:
            return cached
        selected = self.selected_indices()
        return selected[0] if selected else -1

    @property
    def max_selection_index(self) -> int:
        """Largest index touched since the last reset (scans the mask if none)."""
        if self._coordinator is None:
            return -1
        cached = self._coordinator._axis_state(self.axis).max_index
        if cached >= 0:
            return cached
        selected = self.selected_indices()
        return selected[-1] if selected else -1

    @property
    def is_selection_empty(self) -> bool:
        return not self.selected_indices()

    @property
    def length(self) -> int:
        if self._coordinator is None:
            return 0
        return self._coordinator._length(self.axis)

    @abstractmethod
    def selected_indices(self) -> list[int]:
        """Indices along this axis with at least one selected cell."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(anchor={self.anchor_selection_index}, "
            f"lead={self.lead_selection_index}, attached={self.is_attached})"
        )


class RowAxisModel(AxisSelectionModel):
    """Row-addressed facade; reads use the coordinator's current column."""

    axis = "row"

    def selected_indices(self) -> list[int]:
        if self._coordinator is None:
            return []
        return self._coordinator.selected_rows()

    @property
    def current_column(self) -> int:
        if self._coordinator is None:
            return -1
        return self._coordinator.current_column

    @property
    def selection_start_column(self) -> int:
        if self._coordinator is None:
            return -1
        return self._coordinator.start_column


class ColumnAxisModel(AxisSelectionModel):
    """Column-addressed facade; reads use the coordinator's current row."""

    axis = "col"

    def selected_indices(self) -> list[int]:
        if self._coordinator is None:
            return []
        return self._coordinator.selected_columns()

    @property
    def current_row(self) -> int:
        if self._coordinator is None:
            return -1
        return self._coordinator.current_row
