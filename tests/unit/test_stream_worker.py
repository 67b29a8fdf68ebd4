"""Tests for the cross-process (worker) streaming transport.

Covers:
- Same entities, same order as the batch parser
- No Complete crosses the boundary; supports_complete is False
- End of stream inferred once the worker exits
- Cancellation terminates delivery and the worker
"""

from __future__ import annotations

import pytest

from wkt_layers.core.config import ParserConfig
from wkt_layers.models.entity import RawEntity
from wkt_layers.models.events import Complete, Item, StreamState
from wkt_layers.parsing import parse_entities
from wkt_layers.streaming import StreamStateError, WorkerEntityStream, stream_entities
from wkt_layers.streaming._worker import _worker_main

WAIT_TIMEOUT_S = 30.0


class _ListQueue:
    """In-memory stand-in for a process queue."""

    def __init__(self) -> None:
        self.items: list[object] = []

    def put(self, item: object) -> None:
        self.items.append(item)


class _Flag:
    def __init__(self, value: bool = False) -> None:
        self.value = value

    def is_set(self) -> bool:
        return self.value


class TestWorkerMain:
    """The worker entry point, run in-process."""

    def test_posts_only_successes_as_payloads(self, mixed_entities: list[RawEntity]) -> None:
        results = _ListQueue()
        records = [(raw.id, raw.geometry_text) for raw in mixed_entities]
        _worker_main(records, results, _Flag(), True)

        assert [payload["id"] for payload in results.items] == [1, 3, 6]  # type: ignore[index]
        assert results.items == [e.to_dict() for e in parse_entities(mixed_entities)]

    def test_stop_flag_prevents_posting(self, mixed_entities: list[RawEntity]) -> None:
        results = _ListQueue()
        records = [(raw.id, raw.geometry_text) for raw in mixed_entities]
        _worker_main(records, results, _Flag(True), True)
        assert results.items == []


class TestWorkerStream:
    """End-to-end delivery across a real process boundary."""

    def test_matches_batch_without_complete(self, mixed_entities: list[RawEntity]) -> None:
        stream = stream_entities(mixed_entities, transport="worker")
        events = list(stream)

        assert all(isinstance(e, Item) for e in events)
        assert not any(isinstance(e, Complete) for e in events)
        items = [e.entity for e in events]  # type: ignore[union-attr]
        assert items == parse_entities(mixed_entities)

    def test_wait_before_consuming_returns(self, large_entities: list[RawEntity]) -> None:
        stream = stream_entities(large_entities, transport="worker")

        assert stream.wait(WAIT_TIMEOUT_S)
        assert stream.exitcode == 0
        assert stream.state is StreamState.COMPLETED
        assert len(stream.entities()) == len(large_entities)

    def test_process_queue_closed_after_end(self, mixed_entities: list[RawEntity]) -> None:
        stream = stream_entities(mixed_entities, transport="worker")
        assert stream.wait(WAIT_TIMEOUT_S)
        with pytest.raises(ValueError):
            stream._results.put({})

    def test_capability_flag(self) -> None:
        assert WorkerEntityStream.supports_complete is False

    def test_completed_after_drain(self, mixed_entities: list[RawEntity]) -> None:
        stream = stream_entities(mixed_entities, transport="worker")
        list(stream)
        assert stream.state is StreamState.COMPLETED
        assert stream.exitcode == 0

    def test_empty_input_yields_nothing(self) -> None:
        stream = stream_entities([], transport="worker")
        assert list(stream) == []
        assert stream.state is StreamState.COMPLETED

    def test_custom_poll_interval(self, mixed_entities: list[RawEntity]) -> None:
        config = ParserConfig(stream_transport="worker", worker_poll_interval_s=0.01)
        assert len(stream_entities(mixed_entities, config=config).entities()) == 3

    def test_cancel_stops_delivery(self, large_entities: list[RawEntity]) -> None:
        stream = stream_entities(large_entities, transport="worker")
        first = next(stream)
        assert isinstance(first, Item)

        stream.cancel()

        assert list(stream) == []
        assert stream.state is StreamState.CANCELLED
        assert stream.wait(WAIT_TIMEOUT_S)

    def test_start_twice(self) -> None:
        stream = stream_entities([], transport="worker")
        with pytest.raises(StreamStateError):
            stream.start()
        list(stream)
