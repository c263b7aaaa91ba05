"""Shared CLI helpers."""

import logging
import sys
from contextlib import contextmanager
from typing import Iterator

LOG_FORMAT = "%(levelname)s: %(message)s"


def log_level(verbose: bool) -> int:
    """Skipped-row warnings are always shown; --verbose adds debug output."""
    return logging.DEBUG if verbose else logging.WARNING


@contextmanager
def stderr_logging(level: int) -> Iterator[logging.Handler]:
    """Route csvjson log records to stderr for the duration of a command.

    The handler is attached to the package logger and removed afterwards so
    repeated invocations in one process do not stack handlers.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("csvjson")
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    try:
        yield handler
    finally:
        handler.flush()
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)
