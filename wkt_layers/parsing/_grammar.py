"""Point, ring and geometry parsers for WKT-like polygon text.

Supported shapes::

    POLYGON ((1 2, 3 4, 5 6))
    MULTIPOLYGON (((1 2, 3 4, 5 6), (7 8, 9 10, 11 12)))

The grammar is deliberately small.  The geometry text is split into rings
on the literal ``"), ("`` boundary; the parentheses left over at the first
and last ring are stripped by the point parser.  Any failure at the
point, ring or geometry level fails the whole geometry; no partial
rings or partial geometries are ever returned.
"""

from __future__ import annotations

import math

from wkt_layers.core.exceptions import ValidationError
from wkt_layers.models.geometry import Geometry, Point, Ring, geometry_from_rings
from wkt_layers.parsing._constants import (
    COORDINATE_SEPARATOR,
    GROUPING_CHARS,
    MULTIPOLYGON_PREFIX,
    POINT_DELIMITER,
    POINT_DIMENSIONS,
    POLYGON_PREFIX,
    RING_DELIMITER,
)

# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class WktParseError(ValidationError):
    """Raised when geometry text cannot be parsed."""

    default_stage = "parse_wkt"
    default_code = "WKT_PARSE_FAILED"


class InvalidPointError(WktParseError):
    """Raised when a coordinate token is not a pair of finite numbers."""

    default_code = "WKT_POINT_INVALID"


class InvalidRingError(WktParseError):
    """Raised when any point of a ring fails to parse."""

    default_code = "WKT_RING_INVALID"


# ---------------------------------------------------------------------------
# Point
# ---------------------------------------------------------------------------


def parse_point(token: str) -> Point:
    """Parse one ``"lon lat"`` token into a ``(lat, lon)`` point.

    The serialized order is longitude first; the returned tuple is
    latitude first.  The swap is part of the contract.

    Every ``(`` and ``)`` in the token is removed first, so ``"((1 2"``
    and ``"1 2)))"`` both parse as ``(2.0, 1.0)``.

    Raises:
        InvalidPointError: If the token does not hold exactly two values
            separated by one space, or either value is not a finite number.
    """
    parts = token.translate(GROUPING_CHARS).split(COORDINATE_SEPARATOR)
    if len(parts) != POINT_DIMENSIONS:
        msg = (
            f"Point {token!r} must have exactly {POINT_DIMENSIONS} coordinates, "
            f"got {len(parts)}"
        )
        raise InvalidPointError(msg)

    try:
        longitude = float(parts[0])
        latitude = float(parts[1])
    except ValueError as exc:
        msg = f"Point {token!r} has a non-numeric coordinate"
        raise InvalidPointError(msg) from exc

    if not (math.isfinite(longitude) and math.isfinite(latitude)):
        msg = f"Point {token!r} has a non-finite coordinate"
        raise InvalidPointError(msg)

    return (latitude, longitude)


# ---------------------------------------------------------------------------
# Ring
# ---------------------------------------------------------------------------


def parse_ring(text: str) -> Ring:
    """Parse ``"1 2, 3 4, 5 6"`` into an ordered ring of points.

    Raises:
        InvalidRingError: If any point token fails to parse.
    """
    points: list[Point] = []
    for idx, token in enumerate(text.split(POINT_DELIMITER)):
        try:
            points.append(parse_point(token))
        except InvalidPointError as exc:
            msg = f"Ring point {idx} is invalid: {exc.message}"
            raise InvalidRingError(msg) from exc
    return tuple(points)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def strip_shape_keyword(text: str) -> str:
    """Remove a leading ``MULTIPOLYGON `` or, failing that, ``POLYGON ``."""
    if text.startswith(MULTIPOLYGON_PREFIX):
        return text[len(MULTIPOLYGON_PREFIX) :]
    if text.startswith(POLYGON_PREFIX):
        return text[len(POLYGON_PREFIX) :]
    return text


def split_rings(text: str) -> list[str]:
    """Split keyword-less geometry text into per-ring substrings."""
    return text.split(RING_DELIMITER)


def parse_geometry(text: str) -> Geometry:
    """Parse ``POLYGON``/``MULTIPOLYGON`` text into a ``Geometry``.

    One ring yields a ``Polygon``; two or more yield a ``MultiPolygon``
    with one polygon per ring, in input order.  This holds for both
    keywords: ``MULTIPOLYGON (((1 2, 3 4)))`` is a ``Polygon``.

    Raises:
        WktParseError: If any ring fails to parse.
    """
    rings: list[Ring] = []
    for idx, ring_text in enumerate(split_rings(strip_shape_keyword(text))):
        try:
            rings.append(parse_ring(ring_text))
        except InvalidRingError as exc:
            msg = f"Ring {idx} is invalid: {exc.message}"
            raise WktParseError(msg) from exc
    return geometry_from_rings(rings)
