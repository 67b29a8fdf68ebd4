"""Load raw entity collections from JSON exports.

The expected file is a JSON array of records such as::

    [
        {"id": 1, "polygons": "POLYGON ((1 2, 3 4, 5 6))"},
        {"id": 2, "polygons": null}
    ]

``geometry_text`` is accepted in place of ``polygons``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from wkt_layers.core.exceptions import ContractError
from wkt_layers.models.entity import RawEntity

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger("wkt_layers.utils.loader")


class EntityLoadError(ContractError):
    """Raised when an entity file or record does not have the expected shape."""

    default_stage = "load_entities"
    default_code = "ENTITY_LOAD_FAILED"


def raw_entities_from_records(records: Iterable[Any]) -> list[RawEntity]:
    """Convert JSON-like records to ``RawEntity`` values, preserving order.

    Raises:
        EntityLoadError: If any record is malformed; the message names
            the record index.
    """
    entities: list[RawEntity] = []
    for idx, record in enumerate(records):
        try:
            entities.append(RawEntity.from_dict(record))
        except ContractError as exc:
            msg = f"Record {idx} is malformed: {exc.message}"
            raise EntityLoadError(msg, entity_id=exc.entity_id) from exc
    return entities


def load_raw_entities(path: Path | str) -> list[RawEntity]:
    """Read a JSON array of raw entity records from *path*.

    Raises:
        EntityLoadError: If the file cannot be read, is not valid JSON,
            is not a JSON array, or holds a malformed record.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read entity file: {exc}"
        raise EntityLoadError(msg) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        msg = f"Entity file {path.name} is not valid JSON: {exc}"
        raise EntityLoadError(msg) from exc

    if not isinstance(data, list):
        msg = f"Entity file {path.name} must hold a JSON array, got {type(data).__name__}"
        raise EntityLoadError(msg)

    entities = raw_entities_from_records(data)
    logger.info("Loaded %d raw entities from %s", len(entities), path.name)
    return entities
