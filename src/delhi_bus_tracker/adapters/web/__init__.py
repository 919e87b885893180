"""HTTP adapter exposing published snapshots."""

from delhi_bus_tracker.adapters.web.starlette_app import HttpApiAdapter, create_app

__all__ = ["HttpApiAdapter", "create_app"]
