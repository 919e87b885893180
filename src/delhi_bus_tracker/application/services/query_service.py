"""Read-only queries over published snapshots.

The module-level functions are pure functions of ``(snapshot, query)``.
``SnapshotQueryService`` applies them to whatever snapshot the store holds
at call time, so a query never observes a partially built snapshot.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from typing import TYPE_CHECKING

from delhi_bus_tracker.domain.models import FleetCategory, Snapshot, Vehicle

if TYPE_CHECKING:
    from delhi_bus_tracker.domain.contracts import SnapshotStoreProtocol


def _route_prefix_matches(vehicles: Iterable[Vehicle], query: str) -> tuple[Vehicle, ...]:
    needle = query.strip().casefold()
    if not needle:
        return tuple(vehicles)
    # Anchored: "534" must not match "1534"
    return tuple(v for v in vehicles if v.display_name.casefold().startswith(needle))


def _id_substring_matches(vehicles: Iterable[Vehicle], query: str) -> tuple[Vehicle, ...]:
    needle = query.strip().casefold()
    if not needle:
        return tuple(vehicles)
    return tuple(v for v in vehicles if needle in v.id.casefold())


def _category_matches(
    vehicles: Iterable[Vehicle], categories: Collection[FleetCategory]
) -> tuple[Vehicle, ...]:
    return tuple(v for v in vehicles if v.fleet_category in categories)


def search_by_route(snapshot: Snapshot, query: str) -> tuple[Vehicle, ...]:
    """Vehicles whose display name starts with ``query``, ignoring case."""
    return _route_prefix_matches(snapshot.vehicles, query)


def search_by_vehicle_id(snapshot: Snapshot, query: str) -> tuple[Vehicle, ...]:
    """Vehicles whose identifier contains ``query``, ignoring case."""
    return _id_substring_matches(snapshot.vehicles, query)


def filter_by_categories(
    snapshot: Snapshot, categories: Collection[FleetCategory]
) -> tuple[Vehicle, ...]:
    return _category_matches(snapshot.vehicles, categories)


def fleet_stats(snapshot: Snapshot) -> dict[FleetCategory, int]:
    """Count vehicles per category. Every category is present, possibly with 0."""
    counts = dict.fromkeys(FleetCategory, 0)
    for vehicle in snapshot.vehicles:
        counts[vehicle.fleet_category] += 1
    return counts


class SnapshotQueryService:
    """Answers queries against the latest published snapshot."""

    def __init__(self, store: SnapshotStoreProtocol) -> None:
        self._store = store

    def current(self) -> Snapshot | None:
        return self._store.current()

    def search_by_route(self, query: str) -> tuple[Vehicle, ...]:
        snapshot = self._store.current()
        return search_by_route(snapshot, query) if snapshot else ()

    def search_by_vehicle_id(self, query: str) -> tuple[Vehicle, ...]:
        snapshot = self._store.current()
        return search_by_vehicle_id(snapshot, query) if snapshot else ()

    def fleet_stats(self) -> Mapping[FleetCategory, int]:
        snapshot = self._store.current()
        if snapshot is None:
            return dict.fromkeys(FleetCategory, 0)
        return fleet_stats(snapshot)

    def find(
        self,
        route: str | None = None,
        vehicle_id: str | None = None,
        categories: Collection[FleetCategory] | None = None,
    ) -> tuple[Vehicle, ...]:
        """Apply the route, identifier and category filters that are given.

        All filters read the same snapshot.
        """
        snapshot = self._store.current()
        if snapshot is None:
            return ()
        vehicles = snapshot.vehicles
        if route:
            vehicles = _route_prefix_matches(vehicles, route)
        if vehicle_id:
            vehicles = _id_substring_matches(vehicles, vehicle_id)
        if categories is not None:
            vehicles = _category_matches(vehicles, categories)
        return vehicles
