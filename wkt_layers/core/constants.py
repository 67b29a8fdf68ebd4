"""Shared constants: single source of truth.

Centralises the stream transport names and defaults used by the
configuration layer and the streaming package.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Stream transports
# ---------------------------------------------------------------------------

TRANSPORT_THREAD: str = "thread"
"""In-process transport: producer runs on a daemon thread, emits ``Complete``."""

TRANSPORT_WORKER: str = "worker"
"""Cross-process transport: producer runs in a worker process, no ``Complete`` crosses."""

SUPPORTED_TRANSPORTS: frozenset[str] = frozenset({TRANSPORT_THREAD, TRANSPORT_WORKER})

DEFAULT_TRANSPORT: str = TRANSPORT_THREAD

DEFAULT_WORKER_POLL_INTERVAL_S: float = 0.05
"""How long the consumer blocks on the worker queue before checking the worker is alive."""
