"""Columnar sanitization of raw feed entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from delhi_bus_tracker.domain.models import (
    UNKNOWN,
    BoundingBox,
    FieldValue,
    RawEntity,
    SanitizedBatch,
)
from delhi_bus_tracker.domain.normalize import normalize_key, safe_float

logger = logging.getLogger(__name__)


def _resolve_key(field: FieldValue) -> str:
    if not field.is_present:
        return UNKNOWN
    return normalize_key(field.value) or UNKNOWN


def _resolve_coordinate(field: FieldValue) -> float:
    if not field.is_present:
        return np.nan
    value = safe_float(field.value)
    return np.nan if value is None else value


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def sanitize(entities: Sequence[RawEntity], bounding_box: BoundingBox) -> SanitizedBatch:
    """Coerce, validate and geo-filter entities in one pass over pre-sized columns.

    Missing identifiers become ``"Unknown"``. Records with a missing or
    non-finite coordinate are dropped first, then records outside the
    bounding box. Surviving rows keep their input order.
    """
    count = len(entities)
    vehicle_ids = np.empty(count, dtype=object)
    route_ids = np.empty(count, dtype=object)
    latitudes = np.full(count, np.nan, dtype=np.float64)
    longitudes = np.full(count, np.nan, dtype=np.float64)

    for index, entity in enumerate(entities):
        vehicle_ids[index] = _resolve_key(entity.vehicle_id)
        route_ids[index] = _resolve_key(entity.route_id)
        latitudes[index] = _resolve_coordinate(entity.latitude)
        longitudes[index] = _resolve_coordinate(entity.longitude)

    finite = np.isfinite(latitudes) & np.isfinite(longitudes)
    inside = (
        finite
        & (latitudes >= bounding_box.min_lat)
        & (latitudes <= bounding_box.max_lat)
        & (longitudes >= bounding_box.min_lon)
        & (longitudes <= bounding_box.max_lon)
    )
    finite_count = int(finite.sum())
    kept_count = int(inside.sum())

    return SanitizedBatch(
        vehicle_ids=_read_only(vehicle_ids[inside]),
        latitudes=_read_only(latitudes[inside]),
        longitudes=_read_only(longitudes[inside]),
        route_ids=_read_only(route_ids[inside]),
        input_count=count,
        dropped_missing_coordinates=count - finite_count,
        dropped_out_of_bounds=finite_count - kept_count,
    )


class SanitizationService:
    """Sanitizes raw entities against a fixed bounding box."""

    def __init__(self, bounding_box: BoundingBox) -> None:
        """Initialize with the geofence applied to every batch."""
        self.bounding_box = bounding_box

    def sanitize(self, entities: Sequence[RawEntity]) -> SanitizedBatch:
        batch = sanitize(entities, self.bounding_box)
        logger.debug(
            f"Sanitized {batch.input_count} entities: kept {len(batch)}, "
            f"dropped {batch.dropped_missing_coordinates} without coordinates "
            f"and {batch.dropped_out_of_bounds} outside the bounding box"
        )
        return batch
