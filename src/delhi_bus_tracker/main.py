"""Main entry point for the Delhi bus tracker."""

import asyncio
import logging
import sys
from dataclasses import dataclass

import aiohttp
from pydantic import ValidationError

from delhi_bus_tracker.adapters.config import AppConfig
from delhi_bus_tracker.adapters.feed import GtfsRealtimeDecoder, HttpFeedFetcher
from delhi_bus_tracker.adapters.publisher import SnapshotPublisher, SnapshotStore
from delhi_bus_tracker.adapters.reference import GtfsReferenceLoader
from delhi_bus_tracker.adapters.web import HttpApiAdapter
from delhi_bus_tracker.application.services import (
    EnrichmentService,
    FleetClassifier,
    SanitizationService,
    SnapshotQueryService,
)
from delhi_bus_tracker.domain.errors import ConfigurationError
from delhi_bus_tracker.domain.models import ReferenceMetadata

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


@dataclass
class Pipeline:
    """The wired ingestion pipeline and its read side."""

    reference: ReferenceMetadata
    store: SnapshotStore
    publisher: SnapshotPublisher
    query: SnapshotQueryService


def require_api_key(config: AppConfig) -> None:
    """Raise ConfigurationError unless a feed API key is configured."""
    if not config.feed_api_key:
        raise ConfigurationError(
            "No feed API key configured. Set FEED_API_KEY in the environment or .env, "
            "or api_key under [feed] in config.toml."
        )


def load_config() -> AppConfig:
    """Load configuration, exiting on invalid settings or a missing API key."""
    try:
        config = AppConfig.load()
        require_api_key(config)
    except (ValidationError, FileNotFoundError, ValueError, ConfigurationError) as e:
        logger.error(f"Invalid configuration: {e}")
        logger.error("Copy config.example.toml to config.toml and customize it.")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)
    return config


def build_pipeline(config: AppConfig, session: aiohttp.ClientSession) -> Pipeline:
    """Load reference metadata and wire every pipeline stage."""
    reference = GtfsReferenceLoader().load(config.routes_file, config.stops_file)
    if not reference.routes_available:
        logger.warning("Route metadata unavailable; vehicles will show raw route ids")

    store = SnapshotStore()
    publisher = SnapshotPublisher(
        fetcher=HttpFeedFetcher(
            session,
            config.feed_url,
            api_key=config.feed_api_key,
            timeout_seconds=config.feed_timeout_seconds,
            api_key_param=config.feed_api_key_param,
        ),
        decoder=GtfsRealtimeDecoder(config.feed_schema_module, config.feed_message_type),
        sanitizer=SanitizationService(config.bounding_box()),
        enricher=EnrichmentService(reference, FleetClassifier(config.fleet_policy())),
        store=store,
        poll_interval_seconds=config.poll_interval_seconds,
    )
    return Pipeline(
        reference=reference,
        store=store,
        publisher=publisher,
        query=SnapshotQueryService(store),
    )


async def main() -> None:
    """Main application entry point."""
    config = load_config()

    async with aiohttp.ClientSession() as session:
        pipeline = build_pipeline(config, session)
        display_adapter = HttpApiAdapter(
            pipeline.query,
            pipeline.publisher,
            pipeline.reference,
            config,
        )

        try:
            await display_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await display_adapter.stop()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
