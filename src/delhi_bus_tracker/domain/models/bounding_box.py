"""Bounding box domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular lat/lon geofence. Bounds are inclusive."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def __post_init__(self) -> None:
        if self.min_lat > self.max_lat:
            raise ValueError("min_lat must not exceed max_lat")
        if self.min_lon > self.max_lon:
            raise ValueError("min_lon must not exceed max_lon")

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon
