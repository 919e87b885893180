"""Configuration adapters."""

from delhi_bus_tracker.adapters.config.app_config import AppConfig, FleetRuleSettings

__all__ = ["AppConfig", "FleetRuleSettings"]
