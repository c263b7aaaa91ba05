"""Bounded handoff channel between the reader and emitter threads."""

import queue
import threading
from typing import Iterator, Optional

from ..errors import ChannelCancelled, ChannelClosed
from .mapper import Record

# How often a blocked send/receive wakes to check for cancellation (seconds)
POLL_INTERVAL = 0.05

_END = object()


class RecordChannel:
    """Single-producer, single-consumer FIFO of records.

    ``send`` blocks while the channel is full and ``receive`` blocks while it
    is empty, so the producer never runs more than ``capacity`` records ahead
    of the consumer. Only the producer closes the channel. Either side may
    cancel it, which wakes the other side with ChannelCancelled.
    """

    def __init__(self, capacity: int = 1):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=capacity)
        self._cancelled = threading.Event()
        self._closed = False
        self._drained = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def send(self, record: Record) -> None:
        """Hand a record to the consumer, blocking while the channel is full."""
        if self._closed:
            raise ChannelClosed("send on closed channel")
        self._put(record)

    def close(self) -> None:
        """Signal that no more records will be sent."""
        if self._closed:
            raise ChannelClosed("channel already closed")
        self._closed = True
        self._put(_END)

    def cancel(self) -> None:
        self._cancelled.set()

    def receive(self) -> Optional[Record]:
        """Take the next record, or None once the channel is closed and empty."""
        if self._drained:
            return None

        while True:
            if self._cancelled.is_set():
                raise ChannelCancelled("channel cancelled")
            try:
                item = self._queue.get(timeout=POLL_INTERVAL)
            except queue.Empty:
                continue

            if item is _END:
                self._drained = True
                return None
            return item  # type: ignore[return-value]

    def __iter__(self) -> Iterator[Record]:
        while True:
            record = self.receive()
            if record is None:
                return
            yield record

    def _put(self, item: object) -> None:
        while True:
            if self._cancelled.is_set():
                raise ChannelCancelled("channel cancelled")
            try:
                self._queue.put(item, timeout=POLL_INTERVAL)
                return
            except queue.Full:
                continue


__all__ = ["POLL_INTERVAL", "RecordChannel"]
