"""Decoder for GTFS-realtime vehicle position feeds."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from typing import Any

from google.protobuf.message import DecodeError, Message

from delhi_bus_tracker.adapters.feed.schema_resolver import resolve_message_class
from delhi_bus_tracker.domain.contracts.feed_decoder import FeedDecoderProtocol
from delhi_bus_tracker.domain.errors import DecodeFailure
from delhi_bus_tracker.domain.models import ABSENT, DecodedFeed, FieldValue, RawEntity

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_MODULE = "google.transit.gtfs_realtime_pb2"
DEFAULT_MESSAGE_TYPE = "FeedMessage"


def _string_field(message: Any, name: str) -> FieldValue:
    if not message.HasField(name):
        return ABSENT
    return FieldValue.present(getattr(message, name))


def _float_field(message: Any, name: str) -> FieldValue:
    if not message.HasField(name):
        return ABSENT
    value = getattr(message, name)
    if not math.isfinite(value):
        return FieldValue.malformed(value)
    return FieldValue.present(value)


def _raw_entity(vehicle: Any) -> RawEntity:
    """Map a VehiclePosition sub-message to a raw entity."""
    vehicle_id = _string_field(vehicle.vehicle, "id") if vehicle.HasField("vehicle") else ABSENT
    route_id = _string_field(vehicle.trip, "route_id") if vehicle.HasField("trip") else ABSENT
    if vehicle.HasField("position"):
        latitude = _float_field(vehicle.position, "latitude")
        longitude = _float_field(vehicle.position, "longitude")
    else:
        latitude = longitude = ABSENT
    return RawEntity(
        vehicle_id=vehicle_id, latitude=latitude, longitude=longitude, route_id=route_id
    )


def _feed_timestamp(message: Any) -> datetime | None:
    if not message.HasField("header") or not message.header.HasField("timestamp"):
        return None
    timestamp = message.header.timestamp
    if timestamp <= 0:
        return None
    return datetime.fromtimestamp(timestamp, UTC)


class GtfsRealtimeDecoder(FeedDecoderProtocol):
    """Decodes GTFS-realtime ``FeedMessage`` payloads into raw vehicle entities.

    The schema is resolved on first use. Entities without a vehicle
    sub-message (trip updates, alerts) are skipped.
    """

    def __init__(
        self,
        schema_module: str = DEFAULT_SCHEMA_MODULE,
        message_type: str = DEFAULT_MESSAGE_TYPE,
    ) -> None:
        self.schema_module = schema_module
        self.message_type = message_type
        self._message_class: type[Message] | None = None

    def _resolve_schema(self) -> type[Message]:
        if self._message_class is None:
            self._message_class = resolve_message_class(self.schema_module, self.message_type)
        return self._message_class

    def decode(self, payload: bytes) -> DecodedFeed:
        """Decode one feed payload.

        Required-field checks are skipped so that one incomplete entity does
        not reject the whole message; missing fields decode as absent.

        Raises:
            SchemaUnavailable: If the schema cannot be resolved.
            DecodeFailure: If the payload cannot be parsed.
        """
        message = self._resolve_schema()()
        try:
            message.MergeFromString(payload)
        except DecodeError as e:
            raise DecodeFailure(f"Malformed feed payload: {e}") from e

        entities = [
            _raw_entity(entity.vehicle) for entity in message.entity if entity.HasField("vehicle")
        ]
        entity_count = len(message.entity)
        logger.debug(f"Decoded {len(entities)} vehicle entities out of {entity_count}")
        return DecodedFeed(
            entities=tuple(entities),
            entity_count=entity_count,
            feed_timestamp=_feed_timestamp(message),
        )
