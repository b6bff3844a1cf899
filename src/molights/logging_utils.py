"""Logging setup for the command-line front end.

Library modules only create loggers; handlers are installed here.
"""

from __future__ import annotations

import logging
import sys

_ROOT = "molights"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = _ROOT, level: int = logging.WARNING) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Install the stream handler on the package logger and set its level."""
    logger = get_logger(_ROOT)
    logger.setLevel(level)
    return logger
