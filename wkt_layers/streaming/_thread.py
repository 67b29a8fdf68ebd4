"""In-process streaming transport backed by a daemon thread."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from wkt_layers.core.constants import TRANSPORT_THREAD
from wkt_layers.streaming._base import EntityStream
from wkt_layers.streaming._channel import EventChannel

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wkt_layers.core.config import ParserConfig
    from wkt_layers.models.entity import RawEntity
    from wkt_layers.models.events import StreamEvent
    from wkt_layers.streaming._channel import _Closed


class ThreadEntityStream(EntityStream):
    """Parse on a background thread and push events through an ``EventChannel``.

    Emits one ``Item`` per parsed entity and a final ``Complete``.
    """

    transport = TRANSPORT_THREAD
    supports_complete = True

    def __init__(
        self,
        raw_entities: Iterable[RawEntity],
        *,
        config: ParserConfig | None = None,
    ) -> None:
        super().__init__(raw_entities, config=config)
        self._channel = EventChannel()
        self._thread: threading.Thread | None = None

    def wait(self, timeout: float | None = None) -> bool:
        if self._thread is None:
            return self._state.is_terminal
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _launch(self) -> None:
        self._thread = threading.Thread(
            target=self._produce, name="wkt-layers-stream", daemon=True
        )
        self._thread.start()

    def _produce(self) -> None:
        try:
            self._run_loop(self._channel.push)
        finally:
            self._channel.close()

    def _next_event(self) -> StreamEvent | _Closed:
        return self._channel.get()

    def _on_cancel(self) -> None:
        self._channel.close()
