"""asyncio streaming transport.

The whole production loop is scheduled with ``loop.call_soon`` so it
runs on a later turn of the event loop, never inside the call that
started the stream.  The loop is CPU-bound and does not yield while it
runs; events are buffered in an unbounded ``asyncio.Queue`` and handed
out by ``async for``.

All methods must be called from the event loop's thread.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from wkt_layers.models.events import Item
from wkt_layers.streaming._base import EntityStream, StreamStateError
from wkt_layers.streaming._channel import CLOSED

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wkt_layers.core.config import ParserConfig
    from wkt_layers.models.entity import ParsedEntity, RawEntity
    from wkt_layers.models.events import StreamEvent
    from wkt_layers.streaming._channel import _Closed


class AsyncEntityStream(EntityStream):
    """Streaming collection parser for asyncio consumers."""

    transport = "asyncio"
    supports_complete = True

    def __init__(
        self,
        raw_entities: Iterable[RawEntity],
        *,
        config: ParserConfig | None = None,
    ) -> None:
        super().__init__(raw_entities, config=config)
        self._queue: asyncio.Queue[StreamEvent | _Closed] | None = None
        self._handle: asyncio.Handle | None = None

    def start(self) -> AsyncEntityStream:
        """Schedule the production loop on the running event loop.

        Raises:
            RuntimeError: If no event loop is running.
            StreamStateError: If the stream was already started or cancelled.
        """
        asyncio.get_running_loop()
        super().start()
        return self

    def wait(self, timeout: float | None = None) -> bool:
        """Report whether the producer has finished, without blocking.

        The producer runs on the event loop's own thread, so blocking here
        would stop it from ever running.  *timeout* is ignored.
        """
        return self._state.is_terminal

    def _launch(self) -> None:
        self._queue = asyncio.Queue()
        self._handle = asyncio.get_running_loop().call_soon(self._produce)

    def _produce(self) -> None:
        if self._queue is None:
            return
        self._run_loop(self._queue.put_nowait)
        self._queue.put_nowait(CLOSED)

    def _next_event(self) -> StreamEvent | _Closed:
        msg = "asyncio streams are consumed with 'async for'"
        raise TypeError(msg)

    def _on_cancel(self) -> None:
        # A producer that has not run yet never runs.
        if self._handle is not None:
            self._handle.cancel()
        if self._queue is not None:
            self._queue.put_nowait(CLOSED)

    def __aiter__(self) -> AsyncEntityStream:
        return self

    async def __anext__(self) -> StreamEvent:
        if self._exhausted or self._token.cancelled:
            self._exhausted = True
            raise StopAsyncIteration
        if self._queue is None:
            msg = "asyncio stream must be started before it is consumed"
            raise StreamStateError(msg)

        event = await self._queue.get()
        if event is CLOSED or self._token.cancelled:
            self._exhausted = True
            raise StopAsyncIteration
        return event  # type: ignore[return-value]

    async def entities(self) -> list[ParsedEntity]:  # type: ignore[override]
        """Consume the rest of the stream and return the parsed entities."""
        return [event.entity async for event in self if isinstance(event, Item)]
