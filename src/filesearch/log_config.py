"""
Global logging configuration.

All log records go to stderr so that stdout stays clean for the result table.
"""

import sys
import logging
from typing import Union


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: Union[str, int] = "WARNING") -> None:
    """
    Configure the root logger to write to stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR) or numeric level
    """
    if isinstance(level, str):
        log_level = getattr(logging, level.upper(), logging.WARNING)
    else:
        log_level = level

    root_logger = logging.getLogger()
    root_logger.handlers = []

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(log_level)
