"""Push channel and cancellation token shared by producer and consumer."""

from __future__ import annotations

import queue
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wkt_layers.models.events import StreamEvent


class _Closed:
    """Sentinel pushed when no further events will be put on a channel."""

    def __repr__(self) -> str:
        return "CLOSED"


CLOSED = _Closed()


class CancellationToken:
    """Cooperative cancellation flag, safe to share between threads."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class EventChannel:
    """Unbounded single-producer/single-consumer channel of stream events.

    There is no backpressure: ``push`` never blocks, so a slow consumer
    accumulates events in memory.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[StreamEvent | _Closed] = queue.SimpleQueue()

    def push(self, event: StreamEvent) -> None:
        self._queue.put(event)

    def close(self) -> None:
        """Wake the consumer and signal that nothing else will arrive."""
        self._queue.put(CLOSED)

    def get(self) -> StreamEvent | _Closed:
        """Block until the next event (or ``CLOSED``) is available."""
        return self._queue.get()
