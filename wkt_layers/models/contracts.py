"""Canonical payload contracts for records crossing a process boundary.

Raw input records and parsed results are plain JSON-like dicts when they
are loaded from disk or shipped from a worker process back to the
consumer.  The ``TypedDict`` definitions below make those shapes
explicit and ``validate_payload`` checks them at runtime.

Design notes:
- Raw records accept the database key ``polygons`` as well as
  ``geometry_text``; either may be missing or ``None``.
- Parsed results are what ``ParsedEntity.to_dict()`` produces.
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from wkt_layers.core.exceptions import ContractError

# ---------------------------------------------------------------------------
# Raw input records
# ---------------------------------------------------------------------------


class RawEntityRecord(TypedDict):
    """One source record, as stored in the database export."""

    id: int
    polygons: NotRequired[str | None]
    geometry_text: NotRequired[str | None]


# ---------------------------------------------------------------------------
# Parsed results
# ---------------------------------------------------------------------------


class PolygonPayload(TypedDict):
    """Serialised ``Polygon``; points are ``[lat, lon]``."""

    type: str
    coords: list[list[float]]


class MultiPolygonPayload(TypedDict):
    """Serialised ``MultiPolygon``."""

    type: str
    polygons: list[list[list[float]]]


class ParsedEntityPayload(TypedDict):
    """Serialised ``ParsedEntity``, one worker result message."""

    id: int
    geometry: PolygonPayload | MultiPolygonPayload


# ---------------------------------------------------------------------------
# Required-key registrations (used by validate_payload)
# ---------------------------------------------------------------------------

_REQUIRED_KEYS: dict[type, frozenset[str]] = {
    RawEntityRecord: frozenset({"id"}),
    ParsedEntityPayload: frozenset({"id", "geometry"}),
}


# ---------------------------------------------------------------------------
# Runtime validation
# ---------------------------------------------------------------------------


def validate_payload(
    raw: Any,
    schema: type,
    *,
    context: str,
) -> None:
    """Validate that *raw* is a dict containing the required keys for *schema*.

    Raises:
        ContractError: If *raw* is not a dict or required keys are missing.
    """
    if not isinstance(raw, dict):
        msg = f"{context}: expected an object, got {type(raw).__name__}"
        raise ContractError(msg, stage=context, code="PAYLOAD_NOT_OBJECT")

    required = _REQUIRED_KEYS.get(schema)
    if required is None:
        return

    missing = required - raw.keys()
    if missing:
        msg = f"{context}: missing required payload key(s): {', '.join(sorted(missing))}"
        raise ContractError(msg, stage=context, code="PAYLOAD_MISSING_KEYS")
