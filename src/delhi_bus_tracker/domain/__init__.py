"""Domain layer - core business logic and models."""

from delhi_bus_tracker.domain.models import (
    FleetCategory,
    RawEntity,
    ReferenceMetadata,
    Snapshot,
    Vehicle,
)
from delhi_bus_tracker.domain.ports import (
    DisplayAdapter,
    Enricher,
    ReferenceRepository,
    Sanitizer,
    SnapshotQuery,
)

__all__ = [
    "DisplayAdapter",
    "Enricher",
    "FleetCategory",
    "RawEntity",
    "ReferenceMetadata",
    "ReferenceRepository",
    "Sanitizer",
    "Snapshot",
    "SnapshotQuery",
    "Vehicle",
]
