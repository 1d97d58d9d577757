"""Centralized logging configuration for tidydir.

This module sets up the application's root logger with file rotation
and console output based on the logging settings.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from tidydir.config.settings import LoggingSettings
from tidydir.shared.constants import Logging


def setup_logging(
    settings: LoggingSettings | None = None,
    *,
    log_level: str | None = None,
    log_file: str | Path | None = None,
) -> None:
    """Set up the application's root logger.

    Args:
        settings: Logging settings. If None, uses defaults.
        log_level: Overrides ``settings.level`` (e.g. from ``--log-level``).
        log_file: Overrides ``settings.file``. An empty string disables the
            file handler.
    """
    settings = settings or LoggingSettings()
    level = (log_level or settings.level).upper()
    file_value = settings.file if log_file is None else log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))

    # Clear any existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt=settings.format_string,
        datefmt=Logging.DATE_FORMAT,
    )

    if file_value:
        log_path = Path(file_value).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if settings.console_output:
        # stderr keeps stdout clean for --json output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level))
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name."""
    return logging.getLogger(name)
