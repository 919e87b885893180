"""Tests for the HTTP API."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from starlette.testclient import TestClient

from delhi_bus_tracker.adapters.config import AppConfig
from delhi_bus_tracker.adapters.publisher import SnapshotStore
from delhi_bus_tracker.adapters.web import HttpApiAdapter, create_app
from delhi_bus_tracker.adapters.web.starlette_app import parse_categories
from delhi_bus_tracker.application.services import SnapshotQueryService
from delhi_bus_tracker.domain.models import (
    CycleFailure,
    CycleStage,
    FleetCategory,
    PublisherStatus,
    ReferenceMetadata,
    StopMeta,
    TableStatus,
)
from tests.test_query_service import make_snapshot, make_vehicle


@pytest.fixture
def store() -> SnapshotStore:
    store = SnapshotStore()
    store.publish(
        make_snapshot(
            make_vehicle("DL1PB1001", "534"),
            make_vehicle("DL1PC2001", "1534", FleetCategory.DIMTS),
            make_vehicle("DL51EV3001", "534STL", FleetCategory.ELECTRIC),
        )
    )
    return store


@pytest.fixture
def publisher() -> MagicMock:
    publisher = MagicMock()
    publisher.status = PublisherStatus(
        stage=CycleStage.FAILED,
        cycles_started=3,
        cycles_failed=1,
        consecutive_failures=1,
        last_failure=CycleFailure(
            stage=CycleStage.FETCHING,
            kind="timeout",
            reason="Feed request timed out after 10.0s",
            occurred_at=datetime(2026, 10, 19, 8, 0, tzinfo=UTC),
        ),
        last_published_at=datetime(2026, 10, 19, 7, 59, 50, tzinfo=UTC),
        vehicle_count=3,
    )
    return publisher


@pytest.fixture
def reference() -> ReferenceMetadata:
    return ReferenceMetadata.build(
        [],
        [StopMeta("Kashmere Gate ISBT", 28.6675, 77.2282)],
        TableStatus(available=False, failure="Reference file not found: data/routes.txt"),
        TableStatus(available=True, row_count=1),
    )


@pytest.fixture
def client(store: SnapshotStore, publisher: MagicMock, reference: ReferenceMetadata) -> TestClient:
    app = create_app(
        SnapshotQueryService(store), publisher, reference, AppConfig.for_testing()
    )
    return TestClient(app)


def test_when_checking_health_then_returns_ok(client: TestClient) -> None:
    """Given the app, when calling /healthz, then returns Ok."""
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.text == "Ok"


def test_when_listing_vehicles_then_returns_all(client: TestClient) -> None:
    """Given a snapshot with three vehicles, when listing, then all are returned with popups."""
    data = client.get("/api/vehicles").json()

    assert data["count"] == 3
    assert data["captured_at"] is not None
    first = data["vehicles"][0]
    assert first["id"] == "DL1PB1001"
    assert first["fleet_category"] == "DTC"
    assert first["color"] == "green"
    assert "<b>Bus ID:</b> DL1PB1001" in first["popup_html"]


def test_when_filtering_by_route_then_prefix_match(client: TestClient) -> None:
    """Given route=534, when listing, then 1534 is excluded."""
    data = client.get("/api/vehicles", params={"route": "534"}).json()

    assert [v["display_name"] for v in data["vehicles"]] == ["534", "534STL"]


def test_when_filtering_by_vehicle_and_category_then_both_apply(client: TestClient) -> None:
    """Given vehicle=DL and category=electric,dimts, when listing, then DTC is excluded."""
    data = client.get(
        "/api/vehicles", params={"vehicle": "DL", "category": "electric,dimts"}
    ).json()

    assert [v["id"] for v in data["vehicles"]] == ["DL1PC2001", "DL51EV3001"]


def test_when_category_unknown_then_returns_400(client: TestClient) -> None:
    """Given an unknown category, when listing, then returns 400 with the reason."""
    response = client.get("/api/vehicles", params={"category": "TRAM"})

    assert response.status_code == 400
    assert "TRAM" in response.json()["error"]


def test_when_getting_stats_then_counts_each_category(client: TestClient) -> None:
    """Given one vehicle per category, when getting stats, then each count is 1."""
    data = client.get("/api/stats").json()

    assert data == {"total": 3, "categories": {"DTC": 1, "DIMTS": 1, "ELECTRIC": 1}}


def test_when_getting_status_then_reports_publisher_and_reference(client: TestClient) -> None:
    """Given a failed last cycle, when getting status, then failure and table availability are reported."""
    data = client.get("/api/status").json()

    assert data["publisher"]["stage"] == "failed"
    assert data["publisher"]["healthy"] is False
    assert data["publisher"]["last_failure"]["kind"] == "timeout"
    assert data["publisher"]["last_failure"]["stage"] == "fetching"
    assert data["reference"]["routes"]["available"] is False
    assert data["reference"]["stops"]["row_count"] == 1
    assert data["map"] == {"center_lat": 28.6448, "center_lon": 77.2167, "zoom": 12}


def test_when_listing_stops_then_returns_reference_stops(client: TestClient) -> None:
    """Given one stop, when listing stops, then it is returned."""
    data = client.get("/api/stops").json()

    assert data["available"] is True
    assert data["stops"] == [{"name": "Kashmere Gate ISBT", "lat": 28.6675, "lon": 77.2282}]


def test_when_nothing_published_then_vehicles_empty(
    publisher: MagicMock, reference: ReferenceMetadata
) -> None:
    """Given no published snapshot, when listing vehicles, then the list is empty."""
    app = create_app(
        SnapshotQueryService(SnapshotStore()), publisher, reference, AppConfig.for_testing()
    )

    data = TestClient(app).get("/api/vehicles").json()

    assert data == {"captured_at": None, "feed_timestamp": None, "count": 0, "vehicles": []}


def test_parse_categories_ignores_blanks() -> None:
    """Given blanks and mixed case, when parsing categories, then returns the known set."""
    assert parse_categories(None) is None
    assert parse_categories(" ") is None
    assert parse_categories("dtc, ,Electric") == {FleetCategory.DTC, FleetCategory.ELECTRIC}


def test_http_adapter_rejects_wrong_config_type(
    store: SnapshotStore, publisher: MagicMock, reference: ReferenceMetadata
) -> None:
    """Given a non-AppConfig config, when creating the adapter, then TypeError is raised."""
    with pytest.raises(TypeError, match="AppConfig"):
        HttpApiAdapter(
            SnapshotQueryService(store), publisher, reference, {"port": 8000}  # type: ignore[arg-type]
        )


def test_http_adapter_reports_its_address(
    store: SnapshotStore, publisher: MagicMock, reference: ReferenceMetadata
) -> None:
    """Given host and port, when asking the adapter for its address, then returns the base URL."""
    adapter = HttpApiAdapter(
        SnapshotQueryService(store),
        publisher,
        reference,
        AppConfig.for_testing(host="127.0.0.1", port=8080),
    )

    assert adapter.address == "http://127.0.0.1:8080"
