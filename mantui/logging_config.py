"""Logging setup for the viewer.

The terminal is owned by the TUI, so records never go to stdout/stderr: they
are written to a rotating log file when one is configured and dropped
otherwise.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3


def setup_logging(log_file: Path | None, level: int = logging.DEBUG) -> logging.Logger:
    """Configure the ``mantui`` logger and return it."""
    logger = logging.getLogger("mantui")
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.setLevel(level)
    logger.addHandler(file_handler)
    logger.info("logging to %s", log_file)
    return logger
