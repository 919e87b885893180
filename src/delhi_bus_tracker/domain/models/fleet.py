"""Fleet classification domain models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class FleetCategory(StrEnum):
    """Operating-agency bucket inferred from the vehicle identifier."""

    DTC = "DTC"
    DIMTS = "DIMTS"
    ELECTRIC = "ELECTRIC"


class MatchKind(StrEnum):
    """How a fleet rule compares its pattern with a vehicle identifier."""

    PREFIX = "prefix"
    CONTAINS = "contains"


@dataclass(frozen=True)
class FleetRule:
    """Assigns ``category`` to identifiers matching ``pattern``."""

    category: FleetCategory
    kind: MatchKind
    pattern: str

    def matches(self, vehicle_id: str) -> bool:
        if self.kind is MatchKind.PREFIX:
            return vehicle_id.startswith(self.pattern)
        return self.pattern in vehicle_id


DEFAULT_FLEET_COLORS: Mapping[FleetCategory, str] = MappingProxyType(
    {
        FleetCategory.ELECTRIC: "blue",
        FleetCategory.DIMTS: "orange",
        FleetCategory.DTC: "green",
    }
)

DEFAULT_FLEET_RULES: tuple[FleetRule, ...] = (
    FleetRule(FleetCategory.ELECTRIC, MatchKind.PREFIX, "DL51"),
    FleetRule(FleetCategory.DIMTS, MatchKind.CONTAINS, "DL1PC"),
)


@dataclass(frozen=True)
class FleetPolicy:
    """Ordered classification rules plus the colour of each category.

    Rules are evaluated in order and the first match wins; identifiers that
    match no rule fall into ``default_category``.
    """

    rules: tuple[FleetRule, ...] = DEFAULT_FLEET_RULES
    default_category: FleetCategory = FleetCategory.DTC
    colors: Mapping[FleetCategory, str] = field(default_factory=lambda: DEFAULT_FLEET_COLORS)

    def __post_init__(self) -> None:
        missing = [category for category in FleetCategory if category not in self.colors]
        if missing:
            raise ValueError(f"No colour configured for fleet categories: {missing}")

    def color_for(self, category: FleetCategory) -> str:
        return self.colors[category]
