"""Snapshot query port."""

from collections.abc import Collection, Mapping
from typing import Protocol

from delhi_bus_tracker.domain.models.fleet import FleetCategory
from delhi_bus_tracker.domain.models.snapshot import Snapshot
from delhi_bus_tracker.domain.models.vehicle import Vehicle


class SnapshotQuery(Protocol):
    """Port for read-only queries against the latest published snapshot."""

    def current(self) -> Snapshot | None:
        """Get the snapshot the queries read from."""
        ...

    def search_by_route(self, query: str) -> tuple[Vehicle, ...]:
        """Vehicles whose display name starts with the query."""
        ...

    def search_by_vehicle_id(self, query: str) -> tuple[Vehicle, ...]:
        """Vehicles whose identifier contains the query."""
        ...

    def fleet_stats(self) -> Mapping[FleetCategory, int]:
        """Vehicle count per fleet category."""
        ...

    def find(
        self,
        route: str | None = None,
        vehicle_id: str | None = None,
        categories: Collection[FleetCategory] | None = None,
    ) -> tuple[Vehicle, ...]:
        """Apply every given filter in turn."""
        ...
