"""Streaming collection parser.

Parses raw entities off the caller's stack and delivers each parsed
entity as an ``Item`` event, in input order.  Three transports:

- ``thread`` (``ThreadEntityStream``): in-process, daemon thread,
  ends with ``Complete``.
- ``worker`` (``WorkerEntityStream``): separate process; results cross
  the boundary as dict payloads and no ``Complete`` is sent.
- asyncio (``AsyncEntityStream``): scheduled with ``loop.call_soon``,
  ends with ``Complete``.

Check ``stream.supports_complete`` to know whether a ``Complete`` event
will arrive; iteration always stops at the end of the stream.

Usage::

    stream = stream_entities(raw_entities)
    for event in stream:
        if isinstance(event, Item):
            layer.add(event.entity)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wkt_layers.core.config import ConfigValidationError, ParserConfig
from wkt_layers.core.constants import SUPPORTED_TRANSPORTS, TRANSPORT_THREAD, TRANSPORT_WORKER
from wkt_layers.streaming._async import AsyncEntityStream
from wkt_layers.streaming._base import EntityStream, StreamStateError
from wkt_layers.streaming._channel import CancellationToken, EventChannel
from wkt_layers.streaming._thread import ThreadEntityStream
from wkt_layers.streaming._worker import WorkerEntityStream

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wkt_layers.models.entity import RawEntity

__all__ = [
    "AsyncEntityStream",
    "CancellationToken",
    "EntityStream",
    "EventChannel",
    "StreamStateError",
    "ThreadEntityStream",
    "WorkerEntityStream",
    "astream_entities",
    "stream_entities",
]

_TRANSPORTS: dict[str, type[EntityStream]] = {
    TRANSPORT_THREAD: ThreadEntityStream,
    TRANSPORT_WORKER: WorkerEntityStream,
}


def stream_entities(
    raw_entities: Iterable[RawEntity],
    *,
    transport: str | None = None,
    config: ParserConfig | None = None,
) -> EntityStream:
    """Start a streaming parse and return the running stream.

    Args:
        raw_entities: Source records, in order.  Copied at call time.
        transport: ``"thread"`` or ``"worker"``.  Defaults to
            ``config.stream_transport``.
        config: Parser configuration; defaults to ``ParserConfig()``.

    Raises:
        ConfigValidationError: If *transport* is not supported.
    """
    config = config or ParserConfig()
    name = transport or config.stream_transport
    stream_cls = _TRANSPORTS.get(name)
    if stream_cls is None:
        raise ConfigValidationError(
            "transport", name, f"must be one of {', '.join(sorted(SUPPORTED_TRANSPORTS))}"
        )
    return stream_cls(raw_entities, config=config).start()


def astream_entities(
    raw_entities: Iterable[RawEntity],
    *,
    config: ParserConfig | None = None,
) -> AsyncEntityStream:
    """Start a streaming parse on the running asyncio event loop.

    Raises:
        RuntimeError: If called outside a running event loop.
    """
    return AsyncEntityStream(raw_entities, config=config).start()
