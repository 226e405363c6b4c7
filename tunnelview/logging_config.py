"""Logging setup for the 'tunnelview' namespace, driven by settings."""

from __future__ import annotations

import logging
import sys

from tunnelview.config import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int | str | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the package logger. Safe to call more than once.

    level and log_file default to TUNNELVIEW_LOG_LEVEL / TUNNELVIEW_LOG_FILE.
    Rows go to stdout, so log records go to stderr.
    """
    level = level if level is not None else settings.LOG_LEVEL
    log_file = log_file if log_file is not None else (settings.LOG_FILE or None)

    logger = logging.getLogger("tunnelview")
    logger.setLevel(level)
    logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
