"""WKT-like geometry parsing.

Converts ``POLYGON (...)`` / ``MULTIPOLYGON (...)`` text into structured
geometry.  The parsing pipeline is split into focused stages:

- **_grammar**: point → ring → geometry parsers and their exceptions
- **_collection**: batch driver over a collection of raw entities

Failure policy:
- A bad point fails its ring; a bad ring fails its geometry.
- A failed geometry drops only that entity (logged, never raised).
- Missing or empty geometry text is not an error; the entity is skipped.
"""

from __future__ import annotations

from wkt_layers.parsing._collection import ParseStats, parse_entities, parse_entity
from wkt_layers.parsing._grammar import (
    InvalidPointError,
    InvalidRingError,
    WktParseError,
    parse_geometry,
    parse_point,
    parse_ring,
    split_rings,
    strip_shape_keyword,
)

__all__ = [
    "InvalidPointError",
    "InvalidRingError",
    "ParseStats",
    "WktParseError",
    "parse_entities",
    "parse_entity",
    "parse_geometry",
    "parse_point",
    "parse_ring",
    "split_rings",
    "strip_shape_keyword",
]
