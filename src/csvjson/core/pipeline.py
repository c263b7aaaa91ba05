"""Pipeline driver: run the reader and emitter as two threads."""

import logging
import threading
from typing import Callable, List, Optional

from ..errors import ChannelCancelled
from ..models import ConversionResult, ConvertConfig
from ..paths import derive_output_path
from .channel import RecordChannel
from .emitter import JSONEmitter, RecordFormat
from .reader import TableReader

logger = logging.getLogger(__name__)


class StageThread(threading.Thread):
    """Thread that records the exception its target raised.

    On failure the channel is cancelled so the peer stage stops waiting.
    """

    def __init__(self, name: str, target: Callable[[], None], channel: RecordChannel):
        super().__init__(name=name, daemon=True)
        self._stage = target
        self._channel = channel
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        logger.debug("Stage %s started", self.name)
        try:
            self._stage()
        except BaseException as e:
            self.error = e
            self._channel.cancel()
            logger.debug("Stage %s failed: %s", self.name, e)
        else:
            logger.debug("Stage %s finished", self.name)


def _first_error(stages: List[StageThread]) -> Optional[BaseException]:
    """Pick the error that caused the failure, not the induced cancellation."""
    errors = [s.error for s in stages if s.error is not None]
    for error in errors:
        if not isinstance(error, ChannelCancelled):
            return error
    return errors[0] if errors else None


def convert(config: ConvertConfig) -> ConversionResult:
    """Convert ``config.input_path`` to a JSON array file.

    The reader and emitter run concurrently and exchange records through a
    bounded RecordChannel. Blocks until the emitter signals completion.

    Returns:
        ConversionResult describing the written file

    Raises:
        InputError: If the input cannot be opened or parsed
        OutputError: If the output cannot be written
    """
    output_path = config.output_path or derive_output_path(config.input_path)
    record_format = RecordFormat.from_flag(config.pretty)
    if config.sort_keys:
        record_format = record_format.with_sorted_keys()

    channel = RecordChannel(config.channel_capacity)
    done = threading.Event()

    reader = TableReader(config)
    emitter = JSONEmitter(output_path, record_format)

    stages = [
        StageThread("reader", lambda: reader.run(channel), channel),
        StageThread("emitter", lambda: emitter.run(channel, done), channel),
    ]
    for stage in stages:
        stage.start()

    done.wait()
    for stage in stages:
        stage.join()

    error = _first_error(stages)
    if error is not None:
        raise error

    return ConversionResult(
        output_path=output_path,
        header=list(reader.header or ()),
        records_written=emitter.records_written,
        rows_skipped=reader.rows_skipped,
    )


__all__ = ["StageThread", "convert"]
