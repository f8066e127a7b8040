"""Logger configuration for the rwc command line tools."""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

LOGGER_NAME = "rwc"


def setup_logging(level: Union[int, str] = logging.WARNING, *, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the 'rwc' logger.

    Diagnostics go to stderr (or ``stream``); stdout carries the report.
    Calling this again only adjusts the level, handlers are not duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        "%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    return logger
