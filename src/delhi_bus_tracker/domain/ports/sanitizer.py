"""Sanitizer port."""

from collections.abc import Sequence
from typing import Protocol

from delhi_bus_tracker.domain.models.raw_entity import RawEntity
from delhi_bus_tracker.domain.models.sanitized_batch import SanitizedBatch


class Sanitizer(Protocol):
    """Port for validating raw entities into a columnar batch."""

    def sanitize(self, entities: Sequence[RawEntity]) -> SanitizedBatch:
        """Coerce, validate and geo-filter raw entities."""
        ...
