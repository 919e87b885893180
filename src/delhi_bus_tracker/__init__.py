"""Live Delhi bus positions: GTFS-realtime ingestion, enrichment and snapshot queries."""

__version__ = "0.1.0"
