"""Vehicle domain model."""

from dataclasses import dataclass
from functools import cached_property
from html import escape

from delhi_bus_tracker.domain.models.fleet import FleetCategory

UNKNOWN = "Unknown"  # Stands in for a missing vehicle or route identifier


@dataclass(frozen=True)
class Vehicle:
    """A sanitized, enriched vehicle position ready for display."""

    id: str
    lat: float
    lon: float
    route_id: str
    display_name: str
    description: str
    fleet_category: FleetCategory
    color: str

    @cached_property
    def popup_html(self) -> str:
        """Marker popup summarising route, description, id and fleet."""
        lines = [f"<b>Route:</b> {escape(self.display_name)}"]
        if self.description:
            lines.append(escape(self.description))
        lines.append(f"<b>Bus ID:</b> {escape(self.id)}")
        lines.append(f"<b>Fleet:</b> {self.fleet_category.value}")
        return "<br>".join(lines)
