"""Protocols for the ingestion pipeline collaborators."""

from delhi_bus_tracker.domain.contracts.feed_decoder import FeedDecoderProtocol
from delhi_bus_tracker.domain.contracts.feed_fetcher import FeedFetcherProtocol
from delhi_bus_tracker.domain.contracts.snapshot_publisher import SnapshotPublisherProtocol
from delhi_bus_tracker.domain.contracts.snapshot_store import SnapshotStoreProtocol

__all__ = [
    "FeedDecoderProtocol",
    "FeedFetcherProtocol",
    "SnapshotPublisherProtocol",
    "SnapshotStoreProtocol",
]
