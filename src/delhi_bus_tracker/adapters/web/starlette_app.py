"""Starlette application serving the latest snapshot as JSON."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from delhi_bus_tracker.adapters.config import AppConfig
from delhi_bus_tracker.adapters.web.serializers import (
    stats_payload,
    status_payload,
    stop_to_dict,
    vehicles_payload,
)
from delhi_bus_tracker.domain.models import FleetCategory
from delhi_bus_tracker.domain.ports import DisplayAdapter

if TYPE_CHECKING:
    from delhi_bus_tracker.domain.contracts import SnapshotPublisherProtocol
    from delhi_bus_tracker.domain.models import ReferenceMetadata
    from delhi_bus_tracker.domain.ports import SnapshotQuery

logger = logging.getLogger(__name__)


def parse_categories(raw: str | None) -> set[FleetCategory] | None:
    """Parse a comma-separated category filter.

    Raises:
        ValueError: If a name is not a known fleet category.
    """
    if raw is None or not raw.strip():
        return None
    categories: set[FleetCategory] = set()
    for name in raw.split(","):
        name = name.strip().upper()
        if not name:
            continue
        try:
            categories.add(FleetCategory(name))
        except ValueError:
            raise ValueError(f"Unknown fleet category: {name}") from None
    return categories


def create_app(
    query: SnapshotQuery,
    publisher: SnapshotPublisherProtocol,
    reference: ReferenceMetadata,
    config: AppConfig,
) -> Starlette:
    """Build the HTTP application.

    Every handler reads the snapshot once per request, so a response never
    mixes vehicles from two publications.
    """
    map_view = {
        "center_lat": config.map_center_lat,
        "center_lon": config.map_center_lon,
        "zoom": config.map_zoom,
    }

    async def healthz(_request: Request) -> Response:
        return Response(content="Ok", media_type="text/plain")

    async def vehicles(request: Request) -> Response:
        try:
            categories = parse_categories(request.query_params.get("category"))
        except ValueError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

        snapshot = query.current()
        found = query.find(
            route=request.query_params.get("route"),
            vehicle_id=request.query_params.get("vehicle"),
            categories=categories,
        )
        return JSONResponse(vehicles_payload(snapshot, found))

    async def stats(_request: Request) -> Response:
        return JSONResponse(stats_payload(query.fleet_stats()))

    async def status(_request: Request) -> Response:
        return JSONResponse(status_payload(publisher.status, reference, map_view))

    async def stops(_request: Request) -> Response:
        return JSONResponse(
            {
                "available": reference.stops_available,
                "stops": [stop_to_dict(stop) for stop in reference.stops],
            }
        )

    return Starlette(
        routes=[
            Route("/healthz", healthz, methods=["GET"]),
            Route("/api/vehicles", vehicles, methods=["GET"]),
            Route("/api/stats", stats, methods=["GET"]),
            Route("/api/status", status, methods=["GET"]),
            Route("/api/stops", stops, methods=["GET"]),
        ]
    )


class HttpApiAdapter(DisplayAdapter):
    """Runs the snapshot publisher and serves the HTTP API with uvicorn."""

    def __init__(
        self,
        query: SnapshotQuery,
        publisher: SnapshotPublisherProtocol,
        reference: ReferenceMetadata,
        config: AppConfig,
    ) -> None:
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        if not callable(getattr(publisher, "run_cycle", None)):
            raise TypeError("publisher must implement SnapshotPublisherProtocol")

        super().__init__(query)
        self.publisher = publisher
        self.reference = reference
        self.config = config
        self._server: Any | None = None

    @property
    def address(self) -> str:
        return f"http://{self.config.host}:{self.config.port}"

    async def start(self) -> None:
        """Start the publisher and serve until the server exits."""
        import uvicorn

        app = create_app(self.query, self.publisher, self.reference, self.config)
        await self.publisher.start()

        uvicorn_config = uvicorn.Config(
            app,
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(uvicorn_config)
        logger.info(f"Serving vehicle API on {self.address}")
        try:
            await self._server.serve()
        finally:
            await self.publisher.stop()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
        await self.publisher.stop()
