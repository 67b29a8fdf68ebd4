"""Cross-process streaming transport backed by a worker process.

Only result messages cross the process boundary: each parsed entity is
sent as a ``ParsedEntity.to_dict()`` payload and rebuilt on the consumer
side.  The worker sends no terminal message.  The consumer infers the
end of the stream once the worker process has exited and its queue is
drained, so this transport reports ``supports_complete = False`` and
iteration simply stops without a ``Complete`` event.
"""

from __future__ import annotations

import logging
import multiprocessing
import queue
import threading
from typing import TYPE_CHECKING, Any

from wkt_layers.core.constants import TRANSPORT_WORKER
from wkt_layers.models.entity import ParsedEntity, RawEntity
from wkt_layers.models.events import Item
from wkt_layers.parsing import ParseStats, parse_entity
from wkt_layers.streaming._base import EntityStream
from wkt_layers.streaming._channel import EventChannel

if TYPE_CHECKING:
    from collections.abc import Iterable
    from multiprocessing.process import BaseProcess

    from wkt_layers.core.config import ParserConfig
    from wkt_layers.models.events import StreamEvent
    from wkt_layers.streaming._channel import _Closed

logger = logging.getLogger("wkt_layers.streaming")


def _worker_main(
    records: list[tuple[int, str | None]],
    results: Any,
    stop: Any,
    log_dropped: bool,
) -> None:
    """Worker process entry point: parse *records* and post each success."""
    stats = ParseStats()
    for entity_id, text in records:
        if stop.is_set():
            break
        entity = parse_entity(
            RawEntity(id=entity_id, geometry_text=text), log_dropped=log_dropped, stats=stats
        )
        if entity is not None:
            results.put(entity.to_dict())

    logger.info(
        "Worker finished | total=%d | parsed=%d | skipped=%d | dropped=%d",
        stats.total,
        stats.parsed,
        stats.skipped,
        stats.dropped,
    )


class WorkerEntityStream(EntityStream):
    """Parse in a separate process and receive results over a process queue.

    A daemon reader thread on the consumer side drains the process queue
    into an unbounded ``EventChannel`` as results arrive, so the worker
    never blocks on a full pipe and can exit whether or not anyone is
    iterating.  The reader closes the channel once the worker has exited
    and the queue is empty.
    """

    transport = TRANSPORT_WORKER
    supports_complete = False

    def __init__(
        self,
        raw_entities: Iterable[RawEntity],
        *,
        config: ParserConfig | None = None,
        mp_context: Any = None,
    ) -> None:
        super().__init__(raw_entities, config=config)
        self._ctx = mp_context or multiprocessing.get_context()
        self._results = self._ctx.Queue()
        self._stop = self._ctx.Event()
        self._channel = EventChannel()
        self._process: BaseProcess | None = None
        self._reader: threading.Thread | None = None

    @property
    def exitcode(self) -> int | None:
        """Exit code of the worker process, ``None`` while it runs."""
        return self._process.exitcode if self._process is not None else None

    def wait(self, timeout: float | None = None) -> bool:
        # The reader joins the worker process before it exits.
        if self._reader is None:
            return self._state.is_terminal
        self._reader.join(timeout)
        return not self._reader.is_alive()

    def _launch(self) -> None:
        records = [(raw.id, raw.geometry_text) for raw in self._raw_entities]
        self._process = self._ctx.Process(
            target=_worker_main,
            args=(records, self._results, self._stop, self._config.log_dropped_entities),
            name="wkt-layers-worker",
            daemon=True,
        )
        self._process.start()
        self._reader = threading.Thread(
            target=self._drain, args=(self._process,), name="wkt-layers-reader", daemon=True
        )
        self._reader.start()

    def _drain(self, process: BaseProcess) -> None:
        poll_interval = self._config.worker_poll_interval_s
        try:
            while True:
                try:
                    payload = self._results.get(timeout=poll_interval)
                except queue.Empty:
                    if process.is_alive():
                        continue
                    # The worker may have flushed its last message after the timeout.
                    try:
                        payload = self._results.get_nowait()
                    except queue.Empty:
                        break
                # Results that arrive after a cancel are drained so the worker can exit.
                if not self._token.cancelled:
                    self._channel.push(Item(ParsedEntity.from_dict(payload)))

            process.join()
            if process.exitcode != 0:
                logger.warning(
                    "Worker exited abnormally | exitcode=%s | transport=%s",
                    process.exitcode,
                    self.transport,
                )
            if self._mark_completed():
                logger.info("Stream finished | transport=%s", self.transport)
        finally:
            self._channel.close()
            self._results.close()
            self._results.join_thread()

    def _next_event(self) -> StreamEvent | _Closed:
        return self._channel.get()

    def _on_cancel(self) -> None:
        self._stop.set()
        self._channel.close()
