"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from delhi_bus_tracker.domain.models import (
    DEFAULT_FLEET_COLORS,
    BoundingBox,
    FleetCategory,
    FleetPolicy,
    FleetRule,
    MatchKind,
)

DEFAULT_FEED_URL = "https://otd.delhi.gov.in/api/realtime/VehiclePositions.pb"
DEFAULT_SCHEMA_MODULE = "google.transit.gtfs_realtime_pb2"


class FleetRuleSettings(BaseModel):
    """One fleet classification rule as written in configuration."""

    category: FleetCategory
    match: MatchKind
    pattern: str = Field(min_length=1)

    def to_rule(self) -> FleetRule:
        return FleetRule(category=self.category, kind=self.match, pattern=self.pattern)


def _default_fleet_rules() -> list[FleetRuleSettings]:
    return [
        FleetRuleSettings(category=FleetCategory.ELECTRIC, match=MatchKind.PREFIX, pattern="DL51"),
        FleetRuleSettings(category=FleetCategory.DIMTS, match=MatchKind.CONTAINS, pattern="DL1PC"),
    ]


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root logging level")

    # Feed configuration
    feed_url: str = Field(default=DEFAULT_FEED_URL, description="GTFS-realtime vehicle feed URL")
    feed_api_key: str | None = Field(
        default=None, description="API key sent with every feed request (required to serve)"
    )
    feed_api_key_param: str = Field(
        default="key", description="Query parameter name carrying the API key"
    )
    feed_timeout_seconds: float = Field(
        default=10.0, description="Timeout for one feed request in seconds"
    )
    poll_interval_seconds: float = Field(
        default=10.0, description="Interval between poll cycles in seconds"
    )
    feed_schema_module: str = Field(
        default=DEFAULT_SCHEMA_MODULE, description="Python module providing the feed schema"
    )
    feed_message_type: str = Field(
        default="FeedMessage", description="Message type in the schema module"
    )

    # Reference metadata
    routes_file: str | None = Field(default="data/routes.txt", description="GTFS routes.txt")
    stops_file: str | None = Field(default="data/stops.txt", description="GTFS stops.txt")

    # Geofence applied by the sanitizer
    bbox_min_lat: float = Field(default=28.40, description="Southern edge of the bounding box")
    bbox_max_lat: float = Field(default=28.90, description="Northern edge of the bounding box")
    bbox_min_lon: float = Field(default=76.80, description="Western edge of the bounding box")
    bbox_max_lon: float = Field(default=77.40, description="Eastern edge of the bounding box")

    # Fleet classification
    fleet_rules: list[FleetRuleSettings] = Field(
        default_factory=_default_fleet_rules,
        description="Ordered fleet rules; the first match wins",
    )
    fleet_default_category: FleetCategory = Field(
        default=FleetCategory.DTC, description="Category for identifiers matching no rule"
    )
    fleet_colors: dict[FleetCategory, str] = Field(
        default_factory=lambda: dict(DEFAULT_FLEET_COLORS),
        description="Display colour per fleet category",
    )

    # Initial map view reported to the renderer
    map_center_lat: float = Field(default=28.6448, description="Initial map centre latitude")
    map_center_lon: float = Field(default=77.2167, description="Initial map centre longitude")
    map_zoom: int = Field(default=12, description="Initial map zoom level")

    # TOML config file path; a missing default file is ignored
    config_file: str | None = Field(
        default="config.toml",
        description="Path to TOML configuration file overriding feed, reference and fleet settings",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    @field_validator("feed_timeout_seconds", "poll_interval_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate intervals are strictly positive."""
        if v <= 0:
            raise ValueError("timeouts and intervals must be positive")
        return v

    @field_validator("fleet_colors")
    @classmethod
    def validate_fleet_colors(cls, v: dict[FleetCategory, str]) -> dict[FleetCategory, str]:
        """Fill in default colours for categories that are not configured."""
        return {**DEFAULT_FLEET_COLORS, **v}

    @model_validator(mode="after")
    def validate_bounding_box(self) -> "AppConfig":
        """Validate the bounding box is not inverted."""
        if self.bbox_min_lat > self.bbox_max_lat:
            raise ValueError("bbox_min_lat must not exceed bbox_max_lat")
        if self.bbox_min_lon > self.bbox_max_lon:
            raise ValueError("bbox_min_lon must not exceed bbox_max_lon")
        return self

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Create a config that ignores .env and the default TOML file."""
        overrides.setdefault("config_file", None)
        return cls(_env_file=None, **overrides)  # type: ignore[call-arg]

    @classmethod
    def load(cls) -> "AppConfig":
        """Load from environment, then apply the TOML file on top if it exists."""
        config = cls()
        overrides = config._load_toml_overrides()
        if not overrides:
            return config
        return cls(**{**config.model_dump(), **overrides})

    def _load_toml_overrides(self) -> dict[str, Any]:
        """Read the TOML file and flatten its sections into field overrides."""
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            if self.config_file != "config.toml":
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return {}

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        overrides: dict[str, Any] = {}

        feed = toml_data.get("feed", {})
        for key in ("url", "api_key", "api_key_param", "timeout_seconds", "schema_module"):
            if key in feed:
                overrides[f"feed_{key}"] = feed[key]
        if "message_type" in feed:
            overrides["feed_message_type"] = feed["message_type"]
        if "poll_interval_seconds" in feed:
            overrides["poll_interval_seconds"] = feed["poll_interval_seconds"]

        reference = toml_data.get("reference", {})
        for key in ("routes_file", "stops_file"):
            if key in reference:
                overrides[key] = reference[key]

        bbox = toml_data.get("bounding_box", {})
        for key in ("min_lat", "max_lat", "min_lon", "max_lon"):
            if key in bbox:
                overrides[f"bbox_{key}"] = bbox[key]

        fleet = toml_data.get("fleet", {})
        if "rules" in fleet:
            if not isinstance(fleet["rules"], list):
                raise ValueError("TOML config 'fleet.rules' must be a list")
            overrides["fleet_rules"] = fleet["rules"]
        if "default_category" in fleet:
            overrides["fleet_default_category"] = fleet["default_category"]
        if "colors" in fleet:
            overrides["fleet_colors"] = fleet["colors"]

        map_view = toml_data.get("map", {})
        for key in ("center_lat", "center_lon", "zoom"):
            if key in map_view:
                overrides[f"map_{key}"] = map_view[key]

        return overrides

    def bounding_box(self) -> BoundingBox:
        return BoundingBox(
            min_lat=self.bbox_min_lat,
            max_lat=self.bbox_max_lat,
            min_lon=self.bbox_min_lon,
            max_lon=self.bbox_max_lon,
        )

    def fleet_policy(self) -> FleetPolicy:
        return FleetPolicy(
            rules=tuple(rule.to_rule() for rule in self.fleet_rules),
            default_category=self.fleet_default_category,
            colors=dict(self.fleet_colors),
        )
