"""Decoded feed domain model."""

from dataclasses import dataclass
from datetime import datetime

from delhi_bus_tracker.domain.models.raw_entity import RawEntity


@dataclass(frozen=True)
class DecodedFeed:
    """Vehicle entities decoded from one feed message."""

    entities: tuple[RawEntity, ...]
    entity_count: int  # All entities in the message, vehicle or not
    feed_timestamp: datetime | None = None
