"""Protocol for fetching the binary feed."""

from typing import Protocol


class FeedFetcherProtocol(Protocol):
    """Protocol for one bounded retrieval of the feed per poll cycle."""

    async def fetch(self) -> bytes:
        """Fetch the raw feed payload.

        Returns:
            Non-empty response body.

        Raises:
            FetchFailure: On timeout, network error, non-200 status or empty body.
        """
        ...
