"""Tests for the HTTP feed fetcher."""

import logging
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from delhi_bus_tracker.adapters.feed import HttpFeedFetcher
from delhi_bus_tracker.domain.errors import FetchFailure, FetchFailureCause

FEED_URL = "https://feed.example/VehiclePositions.pb"


def mock_session(status: int = 200, body: bytes = b"\x0a\x00", text: str = "") -> MagicMock:
    """Create a session whose get() yields one response."""
    response = MagicMock()
    response.status = status
    response.read = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=text)
    response.headers = {"Content-Type": "text/plain"}

    session = MagicMock()
    session.get.return_value.__aenter__ = AsyncMock(return_value=response)
    session.get.return_value.__aexit__ = AsyncMock(return_value=False)
    return session


@pytest.mark.asyncio
async def test_when_ok_then_returns_body_and_sends_key() -> None:
    """Given a 200 response, when fetching, then returns the body and passes the key as a param."""
    session = mock_session(body=b"payload")
    fetcher = HttpFeedFetcher(session, FEED_URL, api_key="secret", timeout_seconds=5)

    body = await fetcher.fetch()

    assert body == b"payload"
    _, kwargs = session.get.call_args
    assert kwargs["params"] == {"key": "secret"}
    assert kwargs["timeout"].total == 5


@pytest.mark.asyncio
async def test_when_custom_key_param_then_uses_it() -> None:
    """Given a custom key parameter name, when fetching, then the key is sent under that name."""
    session = mock_session()
    fetcher = HttpFeedFetcher(session, FEED_URL, api_key="secret", api_key_param="apikey")

    await fetcher.fetch()

    assert session.get.call_args.kwargs["params"] == {"apikey": "secret"}


@pytest.mark.asyncio
async def test_when_status_not_ok_then_raises_http_status_failure() -> None:
    """Given a 500 response, when fetching, then FetchFailure tagged http-status(500) is raised."""
    fetcher = HttpFeedFetcher(mock_session(status=500, text="boom"), FEED_URL)

    with pytest.raises(FetchFailure) as exc_info:
        await fetcher.fetch()

    assert exc_info.value.cause is FetchFailureCause.HTTP_STATUS
    assert exc_info.value.status_code == 500
    assert exc_info.value.kind == "http-status(500)"


@pytest.mark.asyncio
async def test_when_request_times_out_then_raises_timeout_failure() -> None:
    """Given a request that times out, when fetching, then FetchFailure tagged timeout is raised."""
    session = MagicMock()
    session.get.side_effect = TimeoutError()
    fetcher = HttpFeedFetcher(session, FEED_URL)

    with pytest.raises(FetchFailure) as exc_info:
        await fetcher.fetch()

    assert exc_info.value.kind == "timeout"


@pytest.mark.asyncio
async def test_when_connection_fails_then_raises_network_failure() -> None:
    """Given a connection error, when fetching, then FetchFailure tagged network is raised."""
    session = MagicMock()
    session.get.side_effect = aiohttp.ClientConnectionError("refused")
    fetcher = HttpFeedFetcher(session, FEED_URL)

    with pytest.raises(FetchFailure) as exc_info:
        await fetcher.fetch()

    assert exc_info.value.cause is FetchFailureCause.NETWORK


@pytest.mark.asyncio
async def test_when_body_empty_then_raises_empty_body_failure() -> None:
    """Given a 200 response with no body, when fetching, then FetchFailure tagged empty-body is raised."""
    fetcher = HttpFeedFetcher(mock_session(body=b""), FEED_URL)

    with pytest.raises(FetchFailure) as exc_info:
        await fetcher.fetch()

    assert exc_info.value.kind == "empty-body"


@pytest.mark.asyncio
async def test_when_key_param_renamed_then_logging_redacts_it(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Given request logging and a custom key parameter, when fetching, then the key is not logged."""
    monkeypatch.setenv("DBT_LOG_REQUESTS", "true")
    fetcher = HttpFeedFetcher(
        mock_session(), FEED_URL, api_key="s3cret", api_key_param="access_key"
    )

    with caplog.at_level(logging.INFO, logger="delhi_bus_tracker.adapters.api_request_logger"):
        await fetcher.fetch()

    assert "access_key=" in caplog.text
    assert "s3cret" not in caplog.text
