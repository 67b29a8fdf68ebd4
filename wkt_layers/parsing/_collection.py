"""Batch collection parser.

Applies the geometry parser across an ordered collection of raw
entities.  Entities without geometry text are skipped silently; entities
whose text fails to parse are dropped with a warning.  One bad entity
never affects the others and nothing is raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wkt_layers.models.entity import ParsedEntity
from wkt_layers.parsing._grammar import WktParseError, parse_geometry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wkt_layers.core.config import ParserConfig
    from wkt_layers.models.entity import RawEntity

logger = logging.getLogger("wkt_layers.parsing")


@dataclass(slots=True)
class ParseStats:
    """Running counters for one collection parse."""

    total: int = 0
    parsed: int = 0
    skipped: int = 0
    dropped: int = 0


def parse_entity(
    raw: RawEntity,
    *,
    log_dropped: bool = True,
    stats: ParseStats | None = None,
) -> ParsedEntity | None:
    """Parse a single raw entity.

    Returns:
        The parsed entity, or ``None`` when the entity has no geometry
        text or its text fails to parse.
    """
    if stats is not None:
        stats.total += 1

    if not raw.geometry_text:
        logger.debug("Skipping entity %s: no geometry text", raw.id)
        if stats is not None:
            stats.skipped += 1
        return None

    try:
        geometry = parse_geometry(raw.geometry_text)
    except WktParseError as exc:
        exc.entity_id = raw.id
        if log_dropped:
            logger.warning("Dropping entity %s: %s", raw.id, exc)
        if stats is not None:
            stats.dropped += 1
        return None

    if stats is not None:
        stats.parsed += 1
    return ParsedEntity(id=raw.id, geometry=geometry)


def parse_entities(
    raw_entities: Iterable[RawEntity],
    *,
    config: ParserConfig | None = None,
) -> list[ParsedEntity]:
    """Parse a collection of raw entities synchronously.

    Args:
        raw_entities: Source records, in order.
        config: Optional parser configuration (controls drop logging).

    Returns:
        Parsed entities in input order.  Empty if nothing parsed.
    """
    log_dropped = config.log_dropped_entities if config is not None else True
    stats = ParseStats()

    entities: list[ParsedEntity] = []
    for raw in raw_entities:
        entity = parse_entity(raw, log_dropped=log_dropped, stats=stats)
        if entity is not None:
            entities.append(entity)

    logger.info(
        "Parsed entities | total=%d | parsed=%d | skipped=%d | dropped=%d",
        stats.total,
        stats.parsed,
        stats.skipped,
        stats.dropped,
    )
    return entities
