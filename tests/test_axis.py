"""Tests for the row and column axis facades."""

import logging

import pytest

from worksheet_selection.selection.axis import (
    AxisState,
    ColumnAxisModel,
    RowAxisModel,
    collapse_index,
    shift_index,
)
from worksheet_selection.selection.config import SelectionConfig
from worksheet_selection.selection.coordinator import SelectionCoordinator


class TestAxisState:
    def test_mark_sets_anchor_lead_and_range(self):
        s = AxisState()
        s.mark(4, 2)
        assert (s.anchor, s.lead) == (4, 2)
        assert (s.min_index, s.max_index) == (2, 4)
        assert s.span() == (2, 4)

    def test_min_max_widen(self):
        s = AxisState()
        s.mark(3, 3)
        s.mark(1, 1)
        assert (s.min_index, s.max_index) == (1, 3)

    def test_span_none_when_unset(self):
        assert AxisState().span() is None

    def test_shift(self):
        s = AxisState()
        s.mark(1, 5)
        s.shift(3, 2)
        assert (s.anchor, s.lead) == (1, 7)

    def test_shift_leaves_unset(self):
        s = AxisState()
        s.shift(0, 3)
        assert s.anchor == -1

    def test_collapse(self):
        s = AxisState()
        s.mark(2, 6)
        s.collapse(0, 1)
        assert (s.anchor, s.lead) == (0, 4)
        assert (s.min_index, s.max_index) == (0, 4)

    @pytest.mark.parametrize("index,expected", [(1, 1), (2, 1), (4, 1), (5, 2), (9, 6)])
    def test_collapse_index(self, index, expected):
        assert collapse_index(index, 2, 4) == expected

    def test_shift_index(self):
        assert shift_index(2, 2, 3) == 5
        assert shift_index(1, 2, 3) == 1
        assert shift_index(-1, 0, 3) == -1


class TestRowAxis:
    def test_set_interval_without_columns_selects_full_rows(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(1, 3)
        assert coordinator.selected_rows() == [1, 2, 3]
        assert coordinator.selected_columns() == [0, 1, 2, 3, 4]
        assert rows.anchor_selection_index == 1
        assert rows.lead_selection_index == 3

    def test_set_interval_replaces(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(0, 1)
        rows.set_selection_interval(4, 4)
        assert rows.selected_indices() == [4]

    def test_set_interval_uses_column_interval(self, coordinator):
        coordinator.column_axis().set_selection_interval(1, 2)
        coordinator.row_axis().set_selection_interval(3, 4)
        assert coordinator.selected_columns() == [1, 2]
        assert coordinator.selected_rows() == [3, 4]

    def test_add_interval(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(0, 0)
        rows.add_selection_interval(3, 4)
        assert rows.selected_indices() == [0, 3, 4]
        assert rows.min_selection_index == 0
        assert rows.max_selection_index == 4

    def test_add_interval_in_single_interval_mode_replaces(self):
        c = SelectionCoordinator(5, 2, SelectionConfig(mode="single_interval"))
        c.row_axis().set_selection_interval(0, 0)
        c.row_axis().add_selection_interval(3, 4)
        assert c.selected_rows() == [3, 4]

    def test_single_mode_forces_lead(self, single_config):
        c = SelectionCoordinator(5, 2, single_config)
        c.row_axis().set_selection_interval(1, 3)
        assert c.selected_rows() == [3]
        assert c.row_axis().anchor_selection_index == 3

    def test_remove_interval_toggles(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(2, 4)
        rows.remove_selection_interval(3, 5)
        assert rows.selected_indices() == [2, 5]

    def test_set_lead_extends_and_shrinks(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(1, 1)
        rows.set_lead_selection_index(4)
        assert rows.selected_indices() == [1, 2, 3, 4]
        rows.set_lead_selection_index(2)
        assert rows.selected_indices() == [1, 2]
        assert rows.lead_selection_index == 2

    def test_set_lead_without_anchor(self, coordinator):
        coordinator.row_axis().set_lead_selection_index(3)
        assert coordinator.selected_rows() == [3]

    def test_set_anchor_does_not_repaint(self, coordinator, events):
        rows = coordinator.row_axis()
        rows.set_anchor_selection_index(2)
        assert rows.anchor_selection_index == 2
        assert coordinator.selected_cell_count() == 0
        assert events == []

    def test_clear_selection(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(0, 5)
        rows.clear_selection()
        assert rows.is_selection_empty
        assert rows.min_selection_index == -1

    def test_is_selected_index_reads_current_column(self, coordinator):
        coordinator.row_axis().set_selection_interval(1, 3)
        coordinator.column_axis().set_selection_interval(2, 3)
        rows = coordinator.row_axis()
        assert rows.current_column == 2
        assert rows.is_selected_index(2)
        assert not rows.is_selected_index(0)
        coordinator.set_current_cell(2, 0)
        assert not rows.is_selected_index(2)

    def test_is_selected_index_without_current_column(self, coordinator):
        coordinator.row_axis().set_selection_interval(1, 3)
        assert coordinator.current_column == -1
        assert coordinator.row_axis().is_selected_index(2)
        assert not coordinator.row_axis().is_selected_index(0)

    @pytest.mark.parametrize("index", [-1, 6, 1000])
    def test_is_selected_index_out_of_range(self, coordinator, index):
        coordinator.select_all()
        assert coordinator.row_axis().is_selected_index(index) is False

    def test_insert_after_inherits(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(2, 2)
        rows.insert_index_interval(2, 2, before=False)
        assert rows.length == 8
        assert rows.selected_indices() == [2, 3, 4]

    def test_insert_before_inherits(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(2, 2)
        rows.insert_index_interval(2, 1, before=True)
        assert rows.selected_indices() == [2, 3]
        assert rows.anchor_selection_index == 3

    def test_insert_without_inherit_outside_multiple_mode(self):
        c = SelectionCoordinator(4, 2, SelectionConfig(mode="single_interval"))
        rows = c.row_axis()
        rows.set_selection_interval(1, 1)
        rows.insert_index_interval(1, 1, before=False)
        assert rows.selected_indices() == [1]

    def test_insert_rejects_non_positive_length(self, coordinator):
        with pytest.raises(ValueError, match="length"):
            coordinator.row_axis().insert_index_interval(0, 0)

    def test_remove_index_interval(self, coordinator):
        rows = coordinator.row_axis()
        rows.set_selection_interval(4, 5)
        rows.remove_index_interval(0, 2)
        assert rows.length == 3
        assert rows.selected_indices() == [1, 2]

    def test_selection_start_column(self, coordinator):
        coordinator.column_axis().set_selection_interval(3, 1)
        assert coordinator.row_axis().selection_start_column == 3


class TestColumnAxis:
    def test_set_interval_without_rows_selects_full_columns(self, coordinator):
        cols = coordinator.column_axis()
        cols.set_selection_interval(1, 2)
        assert coordinator.selected_columns() == [1, 2]
        assert coordinator.selected_rows() == list(range(6))

    def test_set_interval_keeps_row_interval(self, coordinator):
        coordinator.row_axis().set_selection_interval(2, 3)
        coordinator.column_axis().set_selection_interval(0, 1)
        assert coordinator.selected_cells() == [(2, 0), (2, 1), (3, 0), (3, 1)]

    def test_add_interval(self, coordinator):
        coordinator.row_axis().set_selection_interval(2, 3)
        cols = coordinator.column_axis()
        cols.set_selection_interval(0, 0)
        cols.add_selection_interval(4, 4)
        assert cols.selected_indices() == [0, 4]
        assert coordinator.selected_rows() == [2, 3]

    def test_remove_interval_toggles(self, coordinator):
        coordinator.row_axis().set_selection_interval(0, 1)
        cols = coordinator.column_axis()
        cols.set_selection_interval(0, 2)
        cols.remove_selection_interval(1, 1)
        assert cols.selected_indices() == [0, 2]
        cols.remove_selection_interval(1, 1)
        assert cols.selected_indices() == [0, 1, 2]

    def test_is_selected_index_reads_current_row(self, coordinator):
        coordinator.row_axis().set_selection_interval(1, 2)
        coordinator.column_axis().set_selection_interval(3, 4)
        cols = coordinator.column_axis()
        assert cols.current_row == 1
        assert cols.is_selected_index(3)
        assert not cols.is_selected_index(0)
        coordinator.set_current_cell(5, 3)
        assert not cols.is_selected_index(3)

    def test_updates_current_and_start_column(self, coordinator):
        coordinator.column_axis().set_selection_interval(2, 4)
        assert coordinator.current_column == 2
        assert coordinator.start_column == 2

    def test_insert_and_remove(self, coordinator):
        cols = coordinator.column_axis()
        cols.set_selection_interval(4, 4)
        cols.insert_index_interval(4, 1, before=False)
        assert cols.length == 6
        assert cols.selected_indices() == [4, 5]
        cols.remove_index_interval(0, 3)
        assert cols.length == 2
        assert cols.selected_indices() == [0, 1]
        assert coordinator.n_cols == 2

    def test_one_click_row_selection_with_column_zero(self):
        c = SelectionCoordinator(4, 3, SelectionConfig(one_click_row_selection=True))
        c.column_axis().set_selection_interval(0, 0)
        c.row_axis().set_selection_interval(2, 2)
        assert c.selected_cells() == [(2, 0), (2, 1), (2, 2)]

    def test_column_zero_without_one_click(self):
        c = SelectionCoordinator(4, 3)
        c.column_axis().set_selection_interval(0, 0)
        c.row_axis().set_selection_interval(2, 2)
        assert c.selected_cells() == [(2, 0)]


class TestLeadOnlySemantics:
    def test_interval_extends_from_new_anchor(self, lead_only_config):
        c = SelectionCoordinator(6, 3, lead_only_config)
        rows = c.row_axis()
        rows.set_selection_interval(1, 3)
        assert rows.anchor_selection_index == 1
        assert rows.lead_selection_index == 3
        assert c.selected_rows() == [1, 2, 3]
        assert c.current_row == 3
        assert c.start_row == 1

    def test_interval_extends_existing_anchor(self, lead_only_config):
        c = SelectionCoordinator(6, 3, lead_only_config)
        rows = c.row_axis()
        rows.set_selection_interval(2, 2)
        rows.set_selection_interval(0, 4)
        assert rows.anchor_selection_index == 2
        assert c.selected_rows() == [2, 3, 4]

    def test_current_follows_lead(self, lead_only_config):
        c = SelectionCoordinator(6, 6, lead_only_config)
        c.column_axis().set_selection_interval(1, 4)
        assert c.current_column == 4

    def test_anchor_semantics_current_follows_first(self, coordinator):
        coordinator.column_axis().set_selection_interval(1, 4)
        assert coordinator.current_column == 1


class TestUnattachedFacade:
    def test_reads_fail_safe(self):
        rows = RowAxisModel()
        assert not rows.is_attached
        assert rows.is_selected_index(0) is False
        assert rows.anchor_selection_index == -1
        assert rows.lead_selection_index == -1
        assert rows.min_selection_index == -1
        assert rows.max_selection_index == -1
        assert rows.is_selection_empty
        assert rows.length == 0
        assert rows.current_column == -1

    def test_mutators_ignored_with_warning(self, caplog):
        cols = ColumnAxisModel()
        with caplog.at_level(logging.WARNING, logger="worksheet_selection"):
            cols.set_selection_interval(0, 2)
            cols.insert_index_interval(0, 1)
        assert "before attachment" in caplog.text
        assert cols.selected_indices() == []
        assert cols.current_row == -1

    def test_attach_later(self):
        c = SelectionCoordinator(3, 3)
        rows = RowAxisModel()
        rows.attach(c)
        rows.set_selection_interval(1, 1)
        assert c.selected_rows() == [1]
