"""Structured geometry produced by the WKT-like parser.

- ``Point``: ``(latitude, longitude)`` pair.  The serialized text stores
  ``longitude latitude``; the parser swaps the order on purpose so that
  points are ready for map layers that expect ``[lat, lng]``.
- ``Ring``: ordered, non-empty tuple of points (one polygon boundary).
- ``Polygon``: exactly one ring.
- ``MultiPolygon``: two or more polygons.  A single parsed ring always
  collapses to ``Polygon``, never to a one-element ``MultiPolygon``.
- ``Geometry``: the tagged union ``Polygon | MultiPolygon``.

Design notes:
- All models are frozen dataclasses holding tuples, so two parses of the
  same text compare equal and results can be shared between threads.
- ``to_dict()`` / ``geometry_from_dict()`` give a JSON-safe form used for
  the worker-process transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from wkt_layers.core.exceptions import PipelineError

Point: TypeAlias = tuple[float, float]
Ring: TypeAlias = tuple[Point, ...]

POLYGON_TYPE = "Polygon"
MULTIPOLYGON_TYPE = "MultiPolygon"

# A MultiPolygon with fewer parts is represented as a Polygon instead.
MIN_MULTIPOLYGON_PARTS = 2


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ModelValidationError(ValueError, PipelineError):
    """Raised when a geometry model is constructed with invalid field values.

    Attributes:
        model: Name of the model class that failed validation.
        field_name: The field that violated the invariant.
        value: The invalid value.
    """

    default_stage = "model_validation"
    default_code = "MODEL_VALIDATION_FAILED"

    def __init__(self, model: str, field_name: str, value: object, message: str) -> None:
        self.model = model
        self.field_name = field_name
        self.value = value
        formatted = f"{model}.{field_name}={value!r}: {message}"
        PipelineError.__init__(self, formatted)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Polygon:
    """A polygon bounded by a single ring.

    Attributes:
        coords: Ring points as ``(latitude, longitude)`` tuples.
    """

    coords: Ring

    def __post_init__(self) -> None:
        if not self.coords:
            raise ModelValidationError("Polygon", "coords", self.coords, "ring must not be empty")

    @property
    def geom_type(self) -> str:
        return POLYGON_TYPE

    @property
    def rings(self) -> tuple[Ring, ...]:
        """All rings of this geometry, in order."""
        return (self.coords,)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-safe dict."""
        return {
            "type": POLYGON_TYPE,
            "coords": [list(point) for point in self.coords],
        }


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    """An ordered collection of at least two polygons.

    Attributes:
        polygons: Member polygons in input order.
    """

    polygons: tuple[Polygon, ...]

    def __post_init__(self) -> None:
        if len(self.polygons) < MIN_MULTIPOLYGON_PARTS:
            raise ModelValidationError(
                "MultiPolygon",
                "polygons",
                len(self.polygons),
                f"must hold at least {MIN_MULTIPOLYGON_PARTS} polygons",
            )

    @property
    def geom_type(self) -> str:
        return MULTIPOLYGON_TYPE

    @property
    def rings(self) -> tuple[Ring, ...]:
        """All rings of this geometry, in order."""
        return tuple(polygon.coords for polygon in self.polygons)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-safe dict."""
        return {
            "type": MULTIPOLYGON_TYPE,
            "polygons": [[list(point) for point in polygon.coords] for polygon in self.polygons],
        }


Geometry: TypeAlias = Polygon | MultiPolygon


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


def geometry_from_rings(rings: list[Ring]) -> Geometry:
    """Wrap parsed rings: one ring is a ``Polygon``, more is a ``MultiPolygon``."""
    if len(rings) == 1:
        return Polygon(coords=rings[0])
    return MultiPolygon(polygons=tuple(Polygon(coords=ring) for ring in rings))


def geometry_from_dict(data: dict[str, object]) -> Geometry:
    """Deserialise a geometry produced by ``to_dict()``.

    Raises:
        ModelValidationError: If the type tag is unknown or the
            coordinates are malformed.
    """
    geom_type = data.get("type")
    if geom_type == POLYGON_TYPE:
        return Polygon(coords=_ring_from_list(data.get("coords"), "Polygon", "coords"))
    if geom_type == MULTIPOLYGON_TYPE:
        parts = data.get("polygons")
        if not isinstance(parts, list):
            raise ModelValidationError("MultiPolygon", "polygons", parts, "must be a list")
        return MultiPolygon(
            polygons=tuple(
                Polygon(coords=_ring_from_list(part, "MultiPolygon", "polygons")) for part in parts
            )
        )
    raise ModelValidationError(
        "Geometry", "type", geom_type, f"must be {POLYGON_TYPE!r} or {MULTIPOLYGON_TYPE!r}"
    )


def _ring_from_list(raw: object, model: str, field_name: str) -> Ring:
    if not isinstance(raw, list):
        raise ModelValidationError(model, field_name, raw, "ring must be a list of points")
    points: list[Point] = []
    for point in raw:
        if not isinstance(point, list | tuple) or len(point) != 2:
            raise ModelValidationError(model, field_name, point, "point must be a [lat, lon] pair")
        try:
            points.append((float(point[0]), float(point[1])))
        except (TypeError, ValueError) as exc:
            raise ModelValidationError(model, field_name, point, "point must be numeric") from exc
    return tuple(points)
