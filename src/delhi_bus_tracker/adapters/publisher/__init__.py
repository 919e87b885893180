"""Snapshot publishing adapters."""

from delhi_bus_tracker.adapters.publisher.snapshot_publisher import SnapshotPublisher
from delhi_bus_tracker.adapters.publisher.snapshot_store import SnapshotStore

__all__ = ["SnapshotPublisher", "SnapshotStore"]
