"""Shared test fixtures for worksheet-selection."""

import numpy as np
import pandas as pd
import pytest

from worksheet_selection.clipboard.adapter import MemoryClipboard
from worksheet_selection.selection.config import SelectionConfig
from worksheet_selection.selection.coordinator import SelectionCoordinator
from worksheet_selection.api import Worksheet


@pytest.fixture
def coordinator():
    """6x5 grid in the default multiple-interval mode."""
    return SelectionCoordinator(6, 5)


@pytest.fixture
def events(coordinator):
    """SelectionEvents delivered by ``coordinator``, in order."""
    received = []
    coordinator.on_change(received.append)
    return received


@pytest.fixture
def small_sheet_df():
    """4x3 table with float, int and string columns."""
    return pd.DataFrame(
        {
            "depth": [1.5, 2.5, np.nan, 4.0],
            "count": [10, 20, 30, 40],
            "site": ["alpha", "beta", "gamma", "delta"],
        },
        index=["r1", "r2", "r3", "r4"],
    )


@pytest.fixture
def numeric_sheet_df():
    """5x4 float table, values = 10 * row + col."""
    data = np.array([[10.0 * r + c for c in range(4)] for r in range(5)])
    return pd.DataFrame(data, columns=["a", "b", "c", "d"])


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture
def sheet(small_sheet_df, clipboard):
    return Worksheet(small_sheet_df, clipboard=clipboard)


@pytest.fixture
def numeric_sheet(numeric_sheet_df, clipboard):
    return Worksheet(numeric_sheet_df, clipboard=clipboard)


@pytest.fixture
def single_config():
    return SelectionConfig(mode="single")


@pytest.fixture
def lead_only_config():
    return SelectionConfig(use_lead_only_interval_semantics=True)
