"""SelectionConfig: behaviour switches chosen by the embedding application."""

from __future__ import annotations

import param

SINGLE_SELECTION = "single"
SINGLE_INTERVAL_SELECTION = "single_interval"
MULTIPLE_INTERVAL_SELECTION = "multiple_interval"

SELECTION_MODES = (
    SINGLE_SELECTION,
    SINGLE_INTERVAL_SELECTION,
    MULTIPLE_INTERVAL_SELECTION,
)


class SelectionConfig(param.Parameterized):
    """Selection behaviour for one worksheet.

    Values are validated by param on assignment, so a bad mode name raises
    immediately instead of surfacing later as odd selection behaviour.
    """

    # --- Interval handling ---
    mode = param.Selector(
        default=MULTIPLE_INTERVAL_SELECTION,
        objects=list(SELECTION_MODES),
        doc="single: one index; single_interval: one range; "
            "multiple_interval: additive ranges (spreadsheet style)",
    )
    use_lead_only_interval_semantics = param.Boolean(
        default=False,
        doc="Treat interval calls with distinct ends as a lead move from the "
            "existing anchor, and track the lead end as the current index.",
    )

    # --- Header / first-column shortcuts ---
    one_click_row_selection = param.Boolean(default=False)
    one_click_column_selection = param.Boolean(default=False)

    # --- Gates ---
    selectable = param.Boolean(default=True)
    copy_enabled = param.Boolean(default=True)
    paste_enabled = param.Boolean(default=True)

    @property
    def is_multiple_interval(self) -> bool:
        return self.mode == MULTIPLE_INTERVAL_SELECTION

    @property
    def is_single(self) -> bool:
        return self.mode == SINGLE_SELECTION
