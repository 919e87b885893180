"""Reference metadata domain models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class RouteMeta:
    """One row of the routes reference table."""

    route_id: str
    short_name: str
    long_name: str


@dataclass(frozen=True)
class StopMeta:
    """One row of the stops reference table."""

    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class TableStatus:
    """Availability of one reference table, surfaced to status reporting."""

    available: bool
    row_count: int = 0
    failure: str | None = None


@dataclass(frozen=True)
class ReferenceMetadata:
    """Route and stop tables, loaded once and read-only afterwards."""

    routes: Mapping[str, RouteMeta]
    stops: tuple[StopMeta, ...]
    routes_status: TableStatus
    stops_status: TableStatus

    @classmethod
    def build(
        cls,
        routes: Iterable[RouteMeta],
        stops: Iterable[StopMeta],
        routes_status: TableStatus,
        stops_status: TableStatus,
    ) -> ReferenceMetadata:
        """Build an immutable store. The first row wins for a duplicated route_id."""
        table: dict[str, RouteMeta] = {}
        for route in routes:
            table.setdefault(route.route_id, route)
        return cls(
            routes=MappingProxyType(table),
            stops=tuple(stops),
            routes_status=routes_status,
            stops_status=stops_status,
        )

    @classmethod
    def empty(cls, reason: str = "not loaded") -> ReferenceMetadata:
        unavailable = TableStatus(available=False, failure=reason)
        return cls.build((), (), unavailable, unavailable)

    @property
    def routes_available(self) -> bool:
        return self.routes_status.available

    @property
    def stops_available(self) -> bool:
        return self.stops_status.available

    def route(self, route_id: str) -> RouteMeta | None:
        return self.routes.get(route_id)
