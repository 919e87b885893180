"""Enrichment of sanitized records with reference metadata and fleet tags."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delhi_bus_tracker.domain.models import (
    ReferenceMetadata,
    RouteMeta,
    SanitizedBatch,
    Vehicle,
)

if TYPE_CHECKING:
    from delhi_bus_tracker.application.services.fleet_classifier import FleetClassifier

logger = logging.getLogger(__name__)


def route_labels(route_id: str, route: RouteMeta | None) -> tuple[str, str]:
    """Return ``(display_name, description)`` for a route id and its metadata row."""
    if route is None:
        return route_id, ""
    return route.short_name or route_id, route.long_name or ""


class EnrichmentService:
    """Joins sanitized records against route metadata and classifies fleets."""

    def __init__(self, reference: ReferenceMetadata, classifier: FleetClassifier) -> None:
        """Initialize the enrichment service.

        Args:
            reference: Reference metadata loaded at startup.
            classifier: Fleet classifier used for category and colour.
        """
        self.reference = reference
        self.classifier = classifier

    def enrich(self, batch: SanitizedBatch) -> tuple[Vehicle, ...]:
        """Produce exactly one vehicle per record, in batch order.

        The join is a left join on exact string equality of ``route_id``.
        """
        routes = self.reference.routes if self.reference.routes_available else {}
        vehicles: list[Vehicle] = []
        unmatched = 0
        for record in batch:
            route = routes.get(record.route_id)
            if route is None:
                unmatched += 1
            display_name, description = route_labels(record.route_id, route)
            category = self.classifier.classify(record.vehicle_id)
            vehicles.append(
                Vehicle(
                    id=record.vehicle_id,
                    lat=record.lat,
                    lon=record.lon,
                    route_id=record.route_id,
                    display_name=display_name,
                    description=description,
                    fleet_category=category,
                    color=self.classifier.color_for(category),
                )
            )
        if unmatched:
            logger.debug(f"{unmatched} of {len(vehicles)} vehicles had no route metadata")
        return tuple(vehicles)
