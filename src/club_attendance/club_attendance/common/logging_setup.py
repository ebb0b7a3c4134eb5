"""Process-wide logging setup: console always, rotating file when configured."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-12s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Package logger, whichever import path loaded us.
_ROOT_NAME = __name__.rpartition(".common.")[0]


def configure_logging(level: str | int = "INFO", log_file: str | None = None) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Args:
        level: Log level name or number (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of a rotating log file (max 5 MB, 3 backups); None disables it

    Returns:
        The configured package logger. Calling again does not add handlers twice.
    """
    logger = logging.getLogger(_ROOT_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
