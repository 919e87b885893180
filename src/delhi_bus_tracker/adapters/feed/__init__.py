"""Feed endpoint and GTFS-realtime decoding adapters."""

from delhi_bus_tracker.adapters.feed.gtfs_realtime_decoder import GtfsRealtimeDecoder
from delhi_bus_tracker.adapters.feed.http_feed_fetcher import HttpFeedFetcher
from delhi_bus_tracker.adapters.feed.schema_resolver import resolve_message_class

__all__ = ["GtfsRealtimeDecoder", "HttpFeedFetcher", "resolve_message_class"]
