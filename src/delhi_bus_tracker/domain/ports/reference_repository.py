"""Reference metadata repository port."""

from pathlib import Path
from typing import Protocol

from delhi_bus_tracker.domain.models.reference import ReferenceMetadata


class ReferenceRepository(Protocol):
    """Port for loading route and stop reference tables."""

    def load(
        self, routes_source: str | Path | None, stops_source: str | Path | None
    ) -> ReferenceMetadata:
        """Load both tables. Never raises; failures show up as unavailable tables."""
        ...
