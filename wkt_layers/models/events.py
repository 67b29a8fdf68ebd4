"""Stream events and stream lifecycle states.

A stream delivers ``Item`` events, one per parsed entity, and then a
single ``Complete`` event when the transport supports an explicit
terminal marker.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TypeAlias

from wkt_layers.models.entity import ParsedEntity


class StreamState(enum.Enum):
    """Lifecycle state of a streaming parse.

    Values:
        IDLE:      Created, producer not started.
        RUNNING:   Producer scheduled or running.
        COMPLETED: Every input entity processed and the end of the stream signalled.
        CANCELLED: Consumer cancelled; nothing more is delivered.
    """

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (StreamState.COMPLETED, StreamState.CANCELLED)


@dataclass(frozen=True, slots=True)
class Item:
    """One successfully parsed entity."""

    entity: ParsedEntity


@dataclass(frozen=True, slots=True)
class Complete:
    """End-of-stream marker; no further events follow."""


StreamEvent: TypeAlias = Item | Complete
