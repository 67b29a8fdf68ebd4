"""WKT-like geometry ingestion for map layers.

Parses ``POLYGON (...)`` / ``MULTIPOLYGON (...)`` text records into
structured geometry, either synchronously for a whole collection or as
a stream of per-entity events delivered off the caller's stack.
"""

from wkt_layers.models import (
    Complete,
    Item,
    MultiPolygon,
    ParsedEntity,
    Polygon,
    RawEntity,
    StreamState,
)
from wkt_layers.parsing import parse_entities, parse_geometry
from wkt_layers.streaming import astream_entities, stream_entities

__version__ = "0.1.0"

__all__ = [
    "Complete",
    "Item",
    "MultiPolygon",
    "ParsedEntity",
    "Polygon",
    "RawEntity",
    "StreamState",
    "astream_entities",
    "parse_entities",
    "parse_geometry",
    "stream_entities",
]
