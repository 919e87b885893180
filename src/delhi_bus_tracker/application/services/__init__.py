"""Application services for the ingestion pipeline and snapshot queries."""

from delhi_bus_tracker.application.services.enrichment_service import EnrichmentService
from delhi_bus_tracker.application.services.fleet_classifier import FleetClassifier
from delhi_bus_tracker.application.services.query_service import (
    SnapshotQueryService,
    filter_by_categories,
    fleet_stats,
    search_by_route,
    search_by_vehicle_id,
)
from delhi_bus_tracker.application.services.sanitization_service import (
    SanitizationService,
    sanitize,
)

__all__ = [
    "EnrichmentService",
    "FleetClassifier",
    "SanitizationService",
    "SnapshotQueryService",
    "filter_by_categories",
    "fleet_stats",
    "sanitize",
    "search_by_route",
    "search_by_vehicle_id",
]
