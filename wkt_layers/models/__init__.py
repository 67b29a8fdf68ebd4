"""Data models and schemas.

Defines the data structures used throughout the package:
- RawEntity / ParsedEntity: source records and parse results
- Polygon / MultiPolygon: structured geometry (points are ``(lat, lon)``)
- Item / Complete / StreamState: streaming events and lifecycle
"""

from wkt_layers.models.entity import ParsedEntity, RawEntity
from wkt_layers.models.events import Complete, Item, StreamEvent, StreamState
from wkt_layers.models.geometry import (
    Geometry,
    ModelValidationError,
    MultiPolygon,
    Point,
    Polygon,
    Ring,
    geometry_from_dict,
)

__all__ = [
    "Complete",
    "Geometry",
    "Item",
    "ModelValidationError",
    "MultiPolygon",
    "ParsedEntity",
    "Point",
    "Polygon",
    "RawEntity",
    "Ring",
    "StreamEvent",
    "StreamState",
    "geometry_from_dict",
]
