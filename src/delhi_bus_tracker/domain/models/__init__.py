"""Domain models for the bus tracker."""

from delhi_bus_tracker.domain.models.bounding_box import BoundingBox
from delhi_bus_tracker.domain.models.cycle import CycleFailure, CycleStage, PublisherStatus
from delhi_bus_tracker.domain.models.decoded_feed import DecodedFeed
from delhi_bus_tracker.domain.models.field_value import ABSENT, FieldState, FieldValue
from delhi_bus_tracker.domain.models.fleet import (
    DEFAULT_FLEET_COLORS,
    DEFAULT_FLEET_RULES,
    FleetCategory,
    FleetPolicy,
    FleetRule,
    MatchKind,
)
from delhi_bus_tracker.domain.models.raw_entity import RawEntity
from delhi_bus_tracker.domain.models.reference import (
    ReferenceMetadata,
    RouteMeta,
    StopMeta,
    TableStatus,
)
from delhi_bus_tracker.domain.models.sanitized_batch import SanitizedBatch, SanitizedRecord
from delhi_bus_tracker.domain.models.snapshot import Snapshot
from delhi_bus_tracker.domain.models.vehicle import UNKNOWN, Vehicle

__all__ = [
    "ABSENT",
    "DEFAULT_FLEET_COLORS",
    "DEFAULT_FLEET_RULES",
    "UNKNOWN",
    "BoundingBox",
    "CycleFailure",
    "CycleStage",
    "DecodedFeed",
    "FieldState",
    "FieldValue",
    "FleetCategory",
    "FleetPolicy",
    "FleetRule",
    "MatchKind",
    "PublisherStatus",
    "RawEntity",
    "ReferenceMetadata",
    "RouteMeta",
    "SanitizedBatch",
    "SanitizedRecord",
    "Snapshot",
    "StopMeta",
    "TableStatus",
    "Vehicle",
]
