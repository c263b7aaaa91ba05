"""Streaming CSV → JSON pipeline: reader, channel, emitter, driver."""

from .channel import RecordChannel
from .emitter import JSONEmitter, RecordFormat
from .mapper import map_record
from .pipeline import convert
from .reader import ReaderState, TableReader

__all__ = [
    "JSONEmitter",
    "ReaderState",
    "RecordChannel",
    "RecordFormat",
    "TableReader",
    "convert",
    "map_record",
]
