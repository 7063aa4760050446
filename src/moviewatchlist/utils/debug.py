"""Logging setup for moviewatchlist.

All modules log through ``logging.getLogger(__name__)``; those loggers are
children of the ``moviewatchlist`` logger configured here, so one handler and
one level apply to the whole package. ``MOVIEWATCHLIST_DEBUG=1`` lowers the
level to DEBUG, otherwise only warnings and errors are shown.
"""

import logging
import os
from typing import Optional

LOGGER_NAME = "moviewatchlist"
LOG_FORMAT = "[%(levelname)s] %(asctime)s %(message)s"

_logger: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    """Whether MOVIEWATCHLIST_DEBUG=1 is set."""
    return os.getenv("MOVIEWATCHLIST_DEBUG", "0") == "1"


def setup_logger() -> logging.Logger:
    """Attach a stream handler to the package logger (once) and set its level."""
    global _logger
    if _logger is None:
        package_logger = logging.getLogger(LOGGER_NAME)
        if not package_logger.handlers:
            stream = logging.StreamHandler()
            stream.setFormatter(logging.Formatter(LOG_FORMAT))
            package_logger.addHandler(stream)
        package_logger.setLevel(logging.DEBUG if debug_enabled() else logging.WARNING)
        _logger = package_logger
    return _logger
