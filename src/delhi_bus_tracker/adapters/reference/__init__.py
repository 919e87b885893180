"""Reference metadata adapters."""

from delhi_bus_tracker.adapters.reference.gtfs_reference_loader import GtfsReferenceLoader

__all__ = ["GtfsReferenceLoader"]
