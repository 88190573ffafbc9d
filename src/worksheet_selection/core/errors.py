"""Exceptions raised by the worksheet selection toolkit."""

from __future__ import annotations


class WorksheetSelectionError(Exception):
    """Base class for toolkit errors."""


class NonContiguousSelectionError(WorksheetSelectionError, ValueError):
    """The current selection is not a single rectangular block.

    ``str(err)`` is the message meant for the user.
    """


class PasteError(WorksheetSelectionError, ValueError):
    """Clipboard text could not be written into the target cells."""


class OperationDisabledError(WorksheetSelectionError):
    """Copy or paste was requested while disabled in the configuration."""
