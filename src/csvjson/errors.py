"""Exceptions raised by the conversion pipeline."""

from __future__ import annotations

from typing import Sequence


class CsvJsonError(Exception):
    """Base class for all csvjson errors."""


class ConfigError(CsvJsonError):
    """Invalid configuration, detected before the pipeline starts."""


class InputError(CsvJsonError):
    """The input file cannot be opened or parsed."""


class OutputError(CsvJsonError):
    """The output file cannot be opened, written, or encoded."""


class FormatMismatch(CsvJsonError):
    """A data row has a different column count than the header.

    Row-level and recoverable: the reader skips the row and keeps going.
    """

    def __init__(
        self,
        row: Sequence[str],
        expected: int,
        line: int | None = None,
    ):
        self.row = list(row)
        self.expected = expected
        self.actual = len(row)
        self.line = line
        super().__init__(
            f"row has {self.actual} columns, header has {expected}"
        )


class ChannelClosed(CsvJsonError):
    """Send on a closed channel, or a second close."""


class ChannelCancelled(CsvJsonError):
    """The channel was cancelled because a pipeline stage failed."""


__all__ = [
    "ChannelCancelled",
    "ChannelClosed",
    "ConfigError",
    "CsvJsonError",
    "FormatMismatch",
    "InputError",
    "OutputError",
]
