"""HTTP client for the GTFS-realtime vehicle positions feed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import aiohttp

from delhi_bus_tracker.adapters.api_request_logger import log_api_request
from delhi_bus_tracker.domain.contracts.feed_fetcher import FeedFetcherProtocol
from delhi_bus_tracker.domain.errors import FetchFailure, FetchFailureCause

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

logger = logging.getLogger(__name__)


class HttpFeedFetcher(FeedFetcherProtocol):
    """Fetches the binary feed with exactly one bounded GET per call.

    Retries are left to the publisher's poll timer.
    """

    def __init__(
        self,
        session: ClientSession,
        url: str,
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
        api_key_param: str = "key",
    ) -> None:
        """Initialize the fetcher.

        Args:
            session: Shared aiohttp session.
            url: Feed endpoint URL.
            api_key: API key sent as a query parameter, if any.
            timeout_seconds: Total timeout for one request.
            api_key_param: Name of the query parameter carrying the key.
        """
        self._session = session
        self._url = url
        self._api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._api_key_param = api_key_param

    def _params(self) -> dict[str, str]:
        if not self._api_key:
            return {}
        return {self._api_key_param: self._api_key}

    async def _log_error_response(self, response: ClientResponse) -> None:
        """Log error response details."""
        error_text = await response.text(errors="replace")
        error_body = error_text[:200] if error_text else "(empty response body)"
        content_type = response.headers.get("Content-Type", "unknown")
        logger.error(
            f"Feed endpoint returned status {response.status}: "
            f"{error_body} (Content-Type: {content_type})"
        )

    async def fetch(self) -> bytes:
        """Fetch the feed payload.

        Raises:
            FetchFailure: Tagged timeout, network, http-status or empty-body.
        """
        params = self._params()
        log_api_request(
            "GET", self._url, params=params, sensitive_params=(self._api_key_param,)
        )

        try:
            async with self._session.get(
                self._url, params=params, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    await self._log_error_response(response)
                    raise FetchFailure(
                        f"Feed endpoint returned HTTP {response.status}",
                        cause=FetchFailureCause.HTTP_STATUS,
                        status_code=response.status,
                    )
                body = await response.read()
        except TimeoutError as e:
            raise FetchFailure(
                f"Feed request timed out after {self._timeout.total}s",
                cause=FetchFailureCause.TIMEOUT,
            ) from e
        except aiohttp.ClientError as e:
            raise FetchFailure(
                f"Network error fetching feed: {e}", cause=FetchFailureCause.NETWORK
            ) from e

        if not body:
            raise FetchFailure(
                "Feed endpoint returned an empty body", cause=FetchFailureCause.EMPTY_BODY
            )

        logger.debug(f"Fetched {len(body)} bytes from feed endpoint")
        return body
