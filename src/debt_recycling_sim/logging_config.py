"""Logging setup for command-line and server entry points.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
are attached here, once, by whoever owns the process.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGING_CONFIGURED = False


def setup_logging(level: int | str = logging.INFO) -> None:
    """Attach a single stream handler to the package logger.

    Safe to call repeatedly — only the first call configures handlers;
    later calls just update the level.
    """
    global _LOGGING_CONFIGURED

    logger = logging.getLogger("debt_recycling_sim")
    logger.setLevel(level)
    if _LOGGING_CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _LOGGING_CONFIGURED = True
