"""JSON shapes for the HTTP surface."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from delhi_bus_tracker.domain.models import (
    FleetCategory,
    PublisherStatus,
    ReferenceMetadata,
    Snapshot,
    StopMeta,
    TableStatus,
    Vehicle,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def vehicle_to_dict(vehicle: Vehicle) -> dict[str, Any]:
    return {
        "id": vehicle.id,
        "lat": vehicle.lat,
        "lon": vehicle.lon,
        "route_id": vehicle.route_id,
        "display_name": vehicle.display_name,
        "description": vehicle.description,
        "fleet_category": vehicle.fleet_category.value,
        "color": vehicle.color,
        "popup_html": vehicle.popup_html,
    }


def vehicles_payload(snapshot: Snapshot | None, vehicles: tuple[Vehicle, ...]) -> dict[str, Any]:
    """Vehicles plus the snapshot timestamps they were read from."""
    return {
        "captured_at": _iso(snapshot.captured_at) if snapshot else None,
        "feed_timestamp": _iso(snapshot.feed_timestamp) if snapshot else None,
        "count": len(vehicles),
        "vehicles": [vehicle_to_dict(vehicle) for vehicle in vehicles],
    }


def stats_payload(stats: Mapping[FleetCategory, int]) -> dict[str, Any]:
    return {
        "total": sum(stats.values()),
        "categories": {category.value: count for category, count in stats.items()},
    }


def stop_to_dict(stop: StopMeta) -> dict[str, Any]:
    return {"name": stop.name, "lat": stop.lat, "lon": stop.lon}


def _table_to_dict(status: TableStatus) -> dict[str, Any]:
    return {
        "available": status.available,
        "row_count": status.row_count,
        "failure": status.failure,
    }


def status_payload(
    status: PublisherStatus,
    reference: ReferenceMetadata,
    map_view: Mapping[str, float | int],
) -> dict[str, Any]:
    """Publisher health, reference table availability and the default map view.

    Args:
        status: Current publisher status.
        reference: Loaded reference metadata.
        map_view: Map centre and zoom for the renderer.

    Returns:
        A JSON-serializable dict.
    """
    last_failure = status.last_failure.model_dump(mode="json") if status.last_failure else None
    return {
        "publisher": {
            "stage": status.stage.value,
            "healthy": status.healthy,
            "cycles_started": status.cycles_started,
            "cycles_failed": status.cycles_failed,
            "consecutive_failures": status.consecutive_failures,
            "ticks_skipped": status.ticks_skipped,
            "vehicle_count": status.vehicle_count,
            "last_published_at": _iso(status.last_published_at),
            "last_failure": last_failure,
        },
        "reference": {
            "routes": _table_to_dict(reference.routes_status),
            "stops": _table_to_dict(reference.stops_status),
        },
        "map": dict(map_view),
    }
