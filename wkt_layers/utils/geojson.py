"""Wrap parsed geometry into GeoJSON for rendering layers.

Parsed points are ``(lat, lon)``; GeoJSON and shapely use ``(x, y)`` =
``(lon, lat)``, so every point is swapped back here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from wkt_layers.models.geometry import MultiPolygon, Polygon
from wkt_layers.parsing import WktParseError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shapely.geometry.base import BaseGeometry

    from wkt_layers.models.entity import ParsedEntity
    from wkt_layers.models.geometry import Geometry, Ring

logger = logging.getLogger("wkt_layers.utils.geojson")


def _lon_lat(ring: Ring) -> list[tuple[float, float]]:
    return [(lon, lat) for lat, lon in ring]


def to_shapely(geometry: Geometry) -> BaseGeometry:
    """Build the shapely equivalent of *geometry* in ``(lon, lat)`` order.

    Raises:
        WktParseError: If shapely rejects a ring (e.g. fewer than 3 points).
    """
    from shapely.errors import GEOSException
    from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
    from shapely.geometry import Polygon as ShapelyPolygon

    try:
        if isinstance(geometry, Polygon):
            return ShapelyPolygon(_lon_lat(geometry.coords))
        if isinstance(geometry, MultiPolygon):
            return ShapelyMultiPolygon(
                [ShapelyPolygon(_lon_lat(polygon.coords)) for polygon in geometry.polygons]
            )
    except (ValueError, GEOSException) as exc:
        msg = f"Cannot build {geometry.geom_type} geometry: {exc}"
        raise WktParseError(msg, code="GEOJSON_CONVERSION_FAILED") from exc

    msg = f"Unsupported geometry type: {type(geometry).__name__}"
    raise TypeError(msg)


def to_geojson_feature(entity: ParsedEntity) -> dict[str, Any]:
    """Wrap a parsed entity into a GeoJSON ``Feature`` dict.

    Raises:
        WktParseError: If the geometry cannot be represented in shapely.
    """
    from shapely.geometry import mapping

    try:
        geometry = mapping(to_shapely(entity.geometry))
    except WktParseError as exc:
        exc.entity_id = entity.id
        raise

    return {
        "type": "Feature",
        "id": entity.id,
        "properties": {"id": entity.id},
        "geometry": geometry,
    }


def to_feature_collection(entities: Iterable[ParsedEntity]) -> dict[str, Any]:
    """Wrap parsed entities into a GeoJSON ``FeatureCollection``.

    Entities whose geometry cannot be converted are left out with a warning.
    """
    features: list[dict[str, Any]] = []
    for entity in entities:
        try:
            features.append(to_geojson_feature(entity))
        except WktParseError as exc:
            logger.warning("Leaving entity %s out of feature collection: %s", entity.id, exc)
    return {"type": "FeatureCollection", "features": features}
