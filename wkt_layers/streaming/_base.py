"""Transport-independent streaming parser: lifecycle, delivery and cancellation.

A stream moves through ``IDLE → RUNNING → {COMPLETED | CANCELLED}``.
Concrete transports decide *where* the production loop runs; this base
class decides *what* reaches the consumer:

- events are handed out one at a time by ``__next__``;
- the hand-out and ``cancel()`` are serialised on one lock, so once
  ``cancel()`` returns no further event is delivered;
- after the stream ends (``CLOSED``) iteration stops for good.
"""

from __future__ import annotations

import abc
import logging
import threading
from typing import TYPE_CHECKING, ClassVar

from wkt_layers.core.config import ParserConfig
from wkt_layers.core.exceptions import PermanentError
from wkt_layers.models.events import Complete, Item, StreamState
from wkt_layers.parsing import ParseStats, parse_entity
from wkt_layers.streaming._channel import CLOSED, CancellationToken

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from wkt_layers.models.entity import ParsedEntity, RawEntity
    from wkt_layers.models.events import StreamEvent
    from wkt_layers.streaming._channel import _Closed

logger = logging.getLogger("wkt_layers.streaming")


class StreamStateError(PermanentError):
    """Raised when a stream is used in a state that does not allow it."""

    default_stage = "stream"
    default_code = "STREAM_STATE_INVALID"


class EntityStream(abc.ABC):
    """Streaming collection parser over one transport.

    Attributes:
        transport: Transport name (``"thread"``, ``"worker"`` or ``"asyncio"``).
        supports_complete: Whether the transport delivers an explicit
            ``Complete`` event.  When ``False`` the end of iteration is
            the only end-of-stream signal.
        stats: Counters of the in-process production loop.  The worker
            transport counts inside its own process and logs them there.
    """

    transport: ClassVar[str]
    supports_complete: ClassVar[bool]

    def __init__(
        self,
        raw_entities: Iterable[RawEntity],
        *,
        config: ParserConfig | None = None,
    ) -> None:
        self._raw_entities = list(raw_entities)
        self._config = config or ParserConfig()
        self._token = CancellationToken()
        self._lock = threading.RLock()
        self._state = StreamState.IDLE
        self._exhausted = False
        self.stats = ParseStats()

    # -- lifecycle -----------------------------------------------------------

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    def start(self) -> EntityStream:
        """Schedule the production loop and return immediately.

        Raises:
            StreamStateError: If the stream was already started or cancelled.
        """
        with self._lock:
            if self._state is not StreamState.IDLE:
                msg = f"Cannot start {self.transport} stream in state '{self._state.value}'"
                raise StreamStateError(msg)
            self._state = StreamState.RUNNING

        logger.info(
            "Stream started | transport=%s | entities=%d",
            self.transport,
            len(self._raw_entities),
        )
        self._launch()
        return self

    def cancel(self) -> None:
        """Stop delivery to the consumer.

        Safe to call from any thread, more than once, and from inside the
        consuming loop.  Production stops at its next check; no event is
        delivered after this call returns.
        """
        with self._lock:
            self._token.cancel()
            transitioned = not self._state.is_terminal
            if transitioned:
                self._state = StreamState.CANCELLED

        if transitioned:
            logger.info("Stream cancelled | transport=%s", self.transport)
        self._on_cancel()

    @abc.abstractmethod
    def wait(self, timeout: float | None = None) -> bool:
        """Block until the producer has finished.

        Returns:
            ``True`` if the producer finished within *timeout*.
        """

    # -- delivery ------------------------------------------------------------

    def __iter__(self) -> EntityStream:
        return self

    def __next__(self) -> StreamEvent:
        if self._exhausted:
            raise StopIteration
        if self._token.cancelled:
            self._exhausted = True
            raise StopIteration
        if self._state is StreamState.IDLE:
            msg = f"{self.transport} stream must be started before it is consumed"
            raise StreamStateError(msg)

        event = self._next_event()
        with self._lock:
            if event is CLOSED or self._token.cancelled:
                self._exhausted = True
                raise StopIteration
            return event  # type: ignore[return-value]

    def entities(self) -> list[ParsedEntity]:
        """Consume the rest of the stream and return the parsed entities."""
        return [event.entity for event in self if isinstance(event, Item)]

    # -- transport hooks -----------------------------------------------------

    @abc.abstractmethod
    def _launch(self) -> None:
        """Start the production loop off the caller's stack."""

    @abc.abstractmethod
    def _next_event(self) -> StreamEvent | _Closed:
        """Block until the next event, or ``CLOSED`` at end of stream."""

    def _on_cancel(self) -> None:
        """Release a consumer blocked in ``_next_event``."""

    def _mark_completed(self) -> bool:
        with self._lock:
            if self._state is not StreamState.RUNNING:
                return False
            self._state = StreamState.COMPLETED
        return True

    def _run_loop(self, emit: Callable[[StreamEvent], None]) -> None:
        """Parse every raw entity in order and hand each event to *emit*.

        The cancellation token is checked before each parse and again
        before each emission.  When the loop runs to the end the stream
        is marked completed and, on transports that support it, a single
        ``Complete`` is emitted under the same lock, so a consumer that
        sees ``Complete`` also sees ``COMPLETED``.
        """
        log_dropped = self._config.log_dropped_entities
        for raw in self._raw_entities:
            if self._token.cancelled:
                break
            entity = parse_entity(raw, log_dropped=log_dropped, stats=self.stats)
            if entity is not None and not self._token.cancelled:
                emit(Item(entity))
        else:
            with self._lock:
                if self._mark_completed() and self.supports_complete:
                    emit(Complete())

        logger.info(
            "Stream finished | transport=%s | state=%s | total=%d | parsed=%d | skipped=%d"
            " | dropped=%d",
            self.transport,
            self._state.value,
            self.stats.total,
            self.stats.parsed,
            self.stats.skipped,
            self.stats.dropped,
        )
