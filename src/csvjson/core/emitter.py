"""JSON emitter: write records from the handoff channel as one JSON array."""

import json
import logging
import threading
from dataclasses import dataclass, replace
from itertools import chain, islice
from pathlib import Path
from typing import ClassVar, Iterable

from ..errors import OutputError
from .channel import RecordChannel
from .mapper import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordFormat:
    """How each record is rendered inside the array.

    Compact: ``{"k":"v"}`` with no whitespace and no line breaks.
    Pretty: three-space indent, each record shifted by a three-space margin,
    and a line break after ``[``, after every ``,`` and after ``]``.
    """

    pretty: bool = False
    sort_keys: bool = False

    INDENT: ClassVar[str] = "   "
    COMPACT: ClassVar["RecordFormat"]
    PRETTY: ClassVar["RecordFormat"]

    @classmethod
    def from_flag(cls, pretty: bool) -> "RecordFormat":
        return cls.PRETTY if pretty else cls.COMPACT

    def with_sorted_keys(self) -> "RecordFormat":
        return replace(self, sort_keys=True)

    @property
    def line_break(self) -> str:
        return "\n" if self.pretty else ""

    def encode(self, record: Record) -> str:
        if not self.pretty:
            return json.dumps(
                record,
                separators=(",", ":"),
                ensure_ascii=False,
                sort_keys=self.sort_keys,
            )

        text = json.dumps(
            record,
            indent=self.INDENT,
            ensure_ascii=False,
            sort_keys=self.sort_keys,
        )
        return self.INDENT + text.replace("\n", "\n" + self.INDENT)


RecordFormat.COMPACT = RecordFormat(pretty=False)
RecordFormat.PRETTY = RecordFormat(pretty=True)


class JSONEmitter:
    """Write a stream of records to ``output_path`` as a JSON array.

    Output is produced incrementally: the opening bracket first, then each
    record as it arrives, then the closing bracket once the stream ends. Only
    one record is held in memory at a time.
    """

    def __init__(
        self,
        output_path: str | Path,
        record_format: RecordFormat = RecordFormat.COMPACT,
    ):
        self.output_path = Path(output_path)
        self.record_format = record_format
        self.records_written = 0

    def run(self, channel: RecordChannel, done: threading.Event) -> None:
        """Drain the channel into the output file, then set ``done``.

        ``done`` is set on every exit path so the driver never waits forever.
        """
        try:
            self.write(channel)
        finally:
            done.set()

    def write(self, records: Iterable[Record]) -> int:
        """Write all records and return how many were written.

        The output file is opened only once the first record arrives or the
        stream ends, so a run that fails before that leaves any existing
        file untouched.

        Raises:
            OutputError: If the file cannot be opened or written, or a record
                cannot be encoded
        """
        fmt = self.record_format
        line_break = fmt.line_break

        records = iter(records)
        pending = list(islice(records, 1))

        try:
            output = open(self.output_path, "w", encoding="utf-8")
        except OSError as e:
            raise OutputError(
                f"Cannot open {self.output_path}: {e.strerror or e}"
            ) from e

        logger.debug("Writing %s", self.output_path)
        try:
            with output:
                output.write("[" + line_break)

                first = True
                for record in chain(pending, records):
                    if not first:
                        output.write("," + line_break)
                    first = False

                    output.write(self._encode(record))
                    self.records_written += 1

                output.write("]" + line_break)
                output.flush()
        except (OSError, UnicodeEncodeError) as e:
            raise OutputError(
                f"Cannot write {self.output_path}: "
                f"{getattr(e, 'strerror', None) or e}"
            ) from e

        logger.debug(
            "Closed %s after %d records", self.output_path, self.records_written
        )
        return self.records_written

    def _encode(self, record: Record) -> str:
        try:
            return self.record_format.encode(record)
        except (TypeError, ValueError) as e:
            raise OutputError(f"Cannot encode record {record!r}: {e}") from e


__all__ = ["JSONEmitter", "RecordFormat"]
