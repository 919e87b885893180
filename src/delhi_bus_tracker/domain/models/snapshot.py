"""Snapshot domain model."""

from dataclasses import dataclass
from datetime import datetime

from delhi_bus_tracker.domain.models.vehicle import Vehicle


@dataclass(frozen=True)
class Snapshot:
    """One immutable, fully processed poll cycle."""

    captured_at: datetime
    vehicles: tuple[Vehicle, ...]
    feed_timestamp: datetime | None = None  # Header timestamp reported by the feed

    def __len__(self) -> int:
        return len(self.vehicles)
