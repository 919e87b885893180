"""Loader for GTFS static routes and stops tables."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from delhi_bus_tracker.domain.errors import ReferenceLoadCause, ReferenceLoadFailure
from delhi_bus_tracker.domain.models import ReferenceMetadata, RouteMeta, StopMeta, TableStatus
from delhi_bus_tracker.domain.normalize import normalize_key
from delhi_bus_tracker.domain.ports.reference_repository import ReferenceRepository

logger = logging.getLogger(__name__)

ROUTE_COLUMNS = ("route_id", "route_short_name", "route_long_name")
STOP_COLUMNS = ("stop_name", "stop_lat", "stop_lon")


def _read_table(source: str | Path | None, required: tuple[str, ...]) -> pd.DataFrame:
    """Read a GTFS text table with every column as a string.

    Raises:
        ReferenceLoadFailure: If the file is missing, unreadable or lacks
            a required column.
    """
    if source is None or not Path(source).is_file():
        raise ReferenceLoadFailure(
            f"Reference file not found: {source}",
            cause=ReferenceLoadCause.SOURCE_MISSING,
            source=str(source),
        )
    try:
        frame = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            skipinitialspace=True,
            on_bad_lines="skip",
        )
    except (OSError, ValueError) as e:
        raise ReferenceLoadFailure(
            f"Could not parse reference file {source}: {e}",
            cause=ReferenceLoadCause.PARSE_ERROR,
            source=str(source),
        ) from e

    frame.columns = frame.columns.str.strip()
    missing = [column for column in required if column not in frame.columns]
    if missing:
        raise ReferenceLoadFailure(
            f"Reference file {source} is missing columns: {missing}",
            cause=ReferenceLoadCause.PARSE_ERROR,
            source=str(source),
        )
    return frame


def load_routes(source: str | Path | None) -> list[RouteMeta]:
    """Load route rows with ids normalized to strings, in file order."""
    frame = _read_table(source, required=("route_id",))
    frame = frame.reindex(columns=list(ROUTE_COLUMNS), fill_value="")
    frame["route_id"] = frame["route_id"].map(normalize_key)
    frame = frame[frame["route_id"].notna()]

    duplicates = int(frame["route_id"].duplicated(keep="first").sum())
    if duplicates:
        # First occurrence wins; the file gives no other tie-break
        logger.warning(f"{duplicates} duplicate route_id row(s) in {source}, keeping the first")

    return [
        RouteMeta(
            route_id=row.route_id,
            short_name=row.route_short_name.strip(),
            long_name=row.route_long_name.strip(),
        )
        for row in frame.itertuples(index=False)
    ]


def load_stops(source: str | Path | None) -> list[StopMeta]:
    """Load stops, dropping rows without usable coordinates."""
    frame = _read_table(source, required=STOP_COLUMNS)
    lat = pd.to_numeric(frame["stop_lat"], errors="coerce")
    lon = pd.to_numeric(frame["stop_lon"], errors="coerce")
    usable = np.isfinite(lat) & np.isfinite(lon)

    dropped = int((~usable).sum())
    if dropped:
        logger.info(f"Dropped {dropped} stop(s) without coordinates from {source}")

    return [
        StopMeta(name=name.strip(), lat=float(stop_lat), lon=float(stop_lon))
        for name, stop_lat, stop_lon in zip(
            frame["stop_name"][usable], lat[usable], lon[usable], strict=True
        )
    ]


class GtfsReferenceLoader(ReferenceRepository):
    """Loads routes.txt and stops.txt once at startup.

    A table that cannot be loaded is reported as unavailable and left empty;
    enrichment then falls back to raw route ids.
    """

    def load(
        self, routes_source: str | Path | None, stops_source: str | Path | None
    ) -> ReferenceMetadata:
        routes: list[RouteMeta] = []
        stops: list[StopMeta] = []

        try:
            routes = load_routes(routes_source)
            unique_routes = len({route.route_id for route in routes})
            routes_status = TableStatus(available=True, row_count=unique_routes)
        except ReferenceLoadFailure as e:
            logger.warning(f"Routes unavailable ({e.cause.value}): {e}")
            routes_status = TableStatus(available=False, failure=str(e))

        try:
            stops = load_stops(stops_source)
            stops_status = TableStatus(available=True, row_count=len(stops))
        except ReferenceLoadFailure as e:
            logger.warning(f"Stops unavailable ({e.cause.value}): {e}")
            stops_status = TableStatus(available=False, failure=str(e))

        reference = ReferenceMetadata.build(routes, stops, routes_status, stops_status)
        logger.info(
            f"Loaded reference metadata: {len(reference.routes)} route(s), "
            f"{len(reference.stops)} stop(s)"
        )
        return reference
