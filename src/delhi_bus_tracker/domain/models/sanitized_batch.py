"""Columnar sanitized batch domain model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from delhi_bus_tracker.domain.models.raw_entity import RawEntity


@dataclass(frozen=True)
class SanitizedRecord:
    """Row view over a sanitized batch."""

    vehicle_id: str
    lat: float
    lon: float
    route_id: str


@dataclass(frozen=True, eq=False)
class SanitizedBatch:
    """Parallel read-only arrays of validated vehicle records.

    All four arrays have the same length; row ``i`` of each describes the
    same vehicle. Coordinates are finite and inside the bounding box used to
    build the batch.
    """

    vehicle_ids: np.ndarray
    latitudes: np.ndarray
    longitudes: np.ndarray
    route_ids: np.ndarray
    input_count: int = 0
    dropped_missing_coordinates: int = 0
    dropped_out_of_bounds: int = 0

    def __len__(self) -> int:
        return len(self.vehicle_ids)

    def __iter__(self) -> Iterator[SanitizedRecord]:
        for vehicle_id, lat, lon, route_id in zip(
            self.vehicle_ids, self.latitudes, self.longitudes, self.route_ids, strict=True
        ):
            yield SanitizedRecord(
                vehicle_id=vehicle_id, lat=float(lat), lon=float(lon), route_id=route_id
            )

    def to_raw_entities(self) -> list[RawEntity]:
        """Turn the batch back into raw entities, e.g. to sanitize it again."""
        return [
            RawEntity.from_values(
                vehicle_id=record.vehicle_id,
                latitude=record.lat,
                longitude=record.lon,
                route_id=record.route_id,
            )
            for record in self
        ]
