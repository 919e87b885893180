"""Raw entity domain model."""

from dataclasses import dataclass
from typing import Any

from delhi_bus_tracker.domain.models.field_value import ABSENT, FieldValue


@dataclass(frozen=True)
class RawEntity:
    """One decoded vehicle record before validation. Every field may be absent."""

    vehicle_id: FieldValue = ABSENT
    latitude: FieldValue = ABSENT
    longitude: FieldValue = ABSENT
    route_id: FieldValue = ABSENT

    @classmethod
    def from_values(
        cls,
        vehicle_id: Any = None,
        latitude: Any = None,
        longitude: Any = None,
        route_id: Any = None,
    ) -> "RawEntity":
        """Build an entity from plain values, mapping None to absent."""
        return cls(
            vehicle_id=FieldValue.of(vehicle_id),
            latitude=FieldValue.of(latitude),
            longitude=FieldValue.of(longitude),
            route_id=FieldValue.of(route_id),
        )
