"""Fleet classification by vehicle identifier."""

from delhi_bus_tracker.domain.models import FleetCategory, FleetPolicy


class FleetClassifier:
    """Applies a fleet policy's rules in priority order."""

    def __init__(self, policy: FleetPolicy | None = None) -> None:
        self.policy = policy or FleetPolicy()

    def classify(self, vehicle_id: str) -> FleetCategory:
        """Return the category of the first matching rule, or the default."""
        for rule in self.policy.rules:
            if rule.matches(vehicle_id):
                return rule.category
        return self.policy.default_category

    def color_for(self, category: FleetCategory) -> str:
        return self.policy.color_for(category)
