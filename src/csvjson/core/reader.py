"""Table reader: parse CSV rows into records and feed the handoff channel."""

import csv
import logging
from enum import Enum
from typing import Iterator, List, Optional, TextIO, Tuple

from ..errors import FormatMismatch, InputError
from ..models import ConvertConfig
from .channel import RecordChannel
from .mapper import Record, map_record

logger = logging.getLogger(__name__)

# Per-field cap for csv; the module default is 128 KiB. Must fit a C long.
FIELD_SIZE_LIMIT = 2**31 - 1


class ReaderState(str, Enum):
    OPENING = "opening"
    READING_HEADER = "reading_header"
    STREAMING_ROWS = "streaming_rows"
    CLOSED = "closed"


class TableReader:
    """Read one delimited file as a lazy stream of header-keyed records.

    Lifecycle: open() → read_header() → records() → close(). ``run`` drives
    the whole sequence and pushes every record into a RecordChannel. Rows
    whose column count differs from the header are logged and skipped; any
    other read or parse failure raises InputError.

    Example:
        >>> with TableReader(ConvertConfig(input_path="people.csv")) as reader:
        ...     for record in reader.records():
        ...         print(record["name"])
    """

    def __init__(self, config: ConvertConfig):
        self.config = config
        self.state = ReaderState.OPENING
        self.header: Optional[Tuple[str, ...]] = None
        self.rows_skipped = 0
        self.records_sent = 0
        self._handle: Optional[TextIO] = None
        self._reader = None

    def __enter__(self) -> "TableReader":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        path = self.config.input_path
        try:
            self._handle = open(
                path, "r", encoding=self.config.encoding, newline=""
            )
        except OSError as e:
            raise InputError(f"Cannot open {path}: {e.strerror or e}") from e

        csv.field_size_limit(FIELD_SIZE_LIMIT)
        self._reader = csv.reader(
            self._handle,
            delimiter=self.config.separator.delimiter,
            strict=True,
        )
        self.state = ReaderState.READING_HEADER
        logger.debug("Opened %s", path)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self.state = ReaderState.CLOSED

    @property
    def line_num(self) -> int:
        return self._reader.line_num if self._reader is not None else 0

    def read_header(self) -> Tuple[str, ...]:
        """Parse the first non-blank row as the header.

        Raises:
            InputError: On empty input, a parse error, or duplicate names
        """
        if self._reader is None:
            self.open()

        row = self._next_row()
        if row is None:
            raise InputError(f"{self.config.input_path}: no header row")

        seen = set()
        duplicates = []
        for name in row:
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise InputError(
                f"{self.config.input_path}: duplicate column names: "
                + ", ".join(repr(d) for d in duplicates)
            )

        self.header = tuple(row)
        self.state = ReaderState.STREAMING_ROWS
        logger.debug("Header: %s", list(self.header))
        return self.header

    def records(self) -> Iterator[Record]:
        """Yield one record per well-formed data row, in file order."""
        if self.header is None:
            self.read_header()

        while True:
            row = self._next_row()
            if row is None:
                break

            line = self.line_num
            try:
                record = map_record(self.header, row, line=line)
            except FormatMismatch as e:
                self.rows_skipped += 1
                logger.warning("Skipping line %d %s: %s", line, row, e)
                continue

            yield record

    def run(self, channel: RecordChannel) -> None:
        """Stream every record into the channel, then close it.

        The channel is closed only after the last record has been sent. On a
        fatal error it is left open; the pipeline driver cancels it.
        """
        with self:
            for record in self.records():
                channel.send(record)
                self.records_sent += 1
            channel.close()

        logger.debug(
            "Read %d records, skipped %d rows",
            self.records_sent,
            self.rows_skipped,
        )

    def _next_row(self) -> Optional[List[str]]:
        """Return the next non-blank row, or None at end of input."""
        while True:
            try:
                row = next(self._reader)
            except StopIteration:
                return None
            except csv.Error as e:
                raise InputError(
                    f"{self.config.input_path}, line {self.line_num}: {e}"
                ) from e
            except UnicodeDecodeError as e:
                raise InputError(
                    f"{self.config.input_path}: cannot decode as "
                    f"{self.config.encoding}: {e}"
                ) from e

            if row:
                return row


__all__ = ["FIELD_SIZE_LIMIT", "ReaderState", "TableReader"]
