"""Logging for AutoGenre: one app logger, child loggers per module.

Log lines go to stderr so that command output on stdout (``scan --json``)
stays machine-readable. A log file from the settings gets the same lines.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from autogenre.utils.constants import (
    APP_NAME,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    QUIET_LIBRARY_LOGGERS,
)


def _level_value(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def _quiet_libraries(level: int) -> None:
    for name in QUIET_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def setup_logger(
    log_level: str = "INFO",
    log_file: str | None = None,
) -> logging.Logger:
    """Configure and return the application logger.

    Handlers are attached once. A later call only changes the level, so a
    ``--log-level`` override still applies after an earlier setup.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file path (``~`` is expanded).

    Returns:
        The "AutoGenre" logger.
    """
    logger = logging.getLogger(APP_NAME)
    level = _level_value(log_level)
    logger.setLevel(level)
    _quiet_libraries(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(module_name: str | None = None) -> logging.Logger:
    """Return ``AutoGenre.<module_name>``, or the app logger itself."""
    base = logging.getLogger(APP_NAME)
    if module_name:
        return base.getChild(module_name)
    return base
