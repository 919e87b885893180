"""Ports (interfaces) for the ports-and-adapters architecture."""

from delhi_bus_tracker.domain.ports.display_adapter import DisplayAdapter
from delhi_bus_tracker.domain.ports.enricher import Enricher
from delhi_bus_tracker.domain.ports.reference_repository import ReferenceRepository
from delhi_bus_tracker.domain.ports.sanitizer import Sanitizer
from delhi_bus_tracker.domain.ports.snapshot_query import SnapshotQuery

__all__ = [
    "DisplayAdapter",
    "Enricher",
    "ReferenceRepository",
    "Sanitizer",
    "SnapshotQuery",
]
