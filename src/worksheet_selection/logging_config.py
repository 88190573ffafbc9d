"""Logging setup for applications embedding the worksheet selection toolkit.

The library itself only creates module loggers; call :func:`setup_logging`
from the application to see their output.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "worksheet_selection"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Configure the ``worksheet_selection`` logger.

    Parameters
    ----------
    level : int
        Logging level for the logger and its handlers.
    log_file : str, optional
        Also write records to this file (overwritten).
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running setup must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
    return logger
