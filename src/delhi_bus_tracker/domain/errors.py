"""Exception hierarchy for the bus tracker.

Per-cycle failures derive from ``CycleError`` and are contained by the
snapshot publisher; they never reach readers of the published snapshot.
"""

from __future__ import annotations

from enum import StrEnum


class TrackerError(Exception):
    """Base exception for all bus tracker errors."""


class ConfigurationError(TrackerError):
    """Required configuration is missing or invalid. Fatal at startup."""


class CycleError(TrackerError):
    """A poll cycle could not produce a snapshot."""

    kind: str = "cycle-error"


class FetchFailureCause(StrEnum):
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http-status"
    EMPTY_BODY = "empty-body"


class FetchFailure(CycleError):
    """The feed endpoint could not be read."""

    def __init__(
        self,
        message: str,
        *,
        cause: FetchFailureCause,
        status_code: int | None = None,
    ) -> None:
        self.cause = cause
        self.status_code = status_code
        super().__init__(message)

    @property
    def kind(self) -> str:  # type: ignore[override]
        if self.cause is FetchFailureCause.HTTP_STATUS:
            return f"http-status({self.status_code})"
        return self.cause.value


class SchemaUnavailable(CycleError):
    """The feed message schema could not be resolved."""

    kind = "schema-unavailable"


class DecodeFailure(CycleError):
    """The feed payload is not a valid feed message."""

    kind = "malformed-payload"


class EmptyCycleResult(CycleError):
    """No record survived sanitization."""

    kind = "empty-cycle"


class ReferenceLoadCause(StrEnum):
    SOURCE_MISSING = "source-missing"
    PARSE_ERROR = "parse-error"


class ReferenceLoadFailure(TrackerError):
    """A reference table could not be loaded. Contained by the loader."""

    def __init__(self, message: str, *, cause: ReferenceLoadCause, source: str = "") -> None:
        self.cause = cause
        self.source = source
        super().__init__(message)
