"""Data models for source records and parsed entities.

A ``RawEntity`` is one record as delivered by the data source: an id
and an optional geometry text.  A ``ParsedEntity`` is produced only when
that text parsed completely; it is the output of both the batch and the
streaming collection parsers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wkt_layers.core.exceptions import ContractError
from wkt_layers.models.contracts import ParsedEntityPayload, RawEntityRecord, validate_payload
from wkt_layers.models.geometry import Geometry, geometry_from_dict

# Keys accepted for the geometry text, in lookup order.
_GEOMETRY_TEXT_KEYS = ("geometry_text", "polygons")


@dataclass(frozen=True, slots=True)
class RawEntity:
    """A source record carrying WKT-like geometry text.

    Attributes:
        id: Entity identifier.
        geometry_text: ``POLYGON (...)`` / ``MULTIPOLYGON (...)`` text.
            ``None`` or ``""`` means the entity has no geometry.
    """

    id: int
    geometry_text: str | None = None

    @property
    def has_geometry(self) -> bool:
        return bool(self.geometry_text)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RawEntity:
        """Build from a record such as ``{"id": 4, "polygons": "POLYGON (...)"}``.

        Raises:
            ContractError: If ``id`` is missing or not an integer, or the
                geometry text is neither a string nor ``None``.
        """
        validate_payload(data, RawEntityRecord, context="raw_entity")

        entity_id = data["id"]
        if isinstance(entity_id, bool) or not isinstance(entity_id, int):
            msg = f"raw_entity: id must be an integer, got {type(entity_id).__name__}"
            raise ContractError(msg, stage="raw_entity", code="RAW_ENTITY_BAD_ID")

        text = None
        for key in _GEOMETRY_TEXT_KEYS:
            if data.get(key) is not None:
                text = data[key]
                break
        if text is not None and not isinstance(text, str):
            msg = f"raw_entity: geometry text must be a string, got {type(text).__name__}"
            raise ContractError(
                msg, stage="raw_entity", code="RAW_ENTITY_BAD_TEXT", entity_id=entity_id
            )

        return cls(id=entity_id, geometry_text=text)


@dataclass(frozen=True, slots=True)
class ParsedEntity:
    """An entity whose geometry text parsed successfully.

    Attributes:
        id: Identifier copied from the source ``RawEntity``.
        geometry: ``Polygon`` or ``MultiPolygon``.
    """

    id: int
    geometry: Geometry

    def to_dict(self) -> ParsedEntityPayload:
        """Serialise for transport across a process boundary."""
        return {"id": self.id, "geometry": self.geometry.to_dict()}  # type: ignore[typeddict-item]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedEntity:
        """Deserialise a worker result message.

        Raises:
            ContractError: If required keys are missing.
            ModelValidationError: If the geometry payload is malformed.
        """
        validate_payload(data, ParsedEntityPayload, context="parsed_entity")
        return cls(id=int(data["id"]), geometry=geometry_from_dict(data["geometry"]))
