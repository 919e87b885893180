"""Enricher port."""

from typing import Protocol

from delhi_bus_tracker.domain.models.sanitized_batch import SanitizedBatch
from delhi_bus_tracker.domain.models.vehicle import Vehicle


class Enricher(Protocol):
    """Port for joining sanitized records with reference metadata."""

    def enrich(self, batch: SanitizedBatch) -> tuple[Vehicle, ...]:
        """Produce one vehicle per sanitized record."""
        ...
