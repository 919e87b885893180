"""Tests for API request logger."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from delhi_bus_tracker.adapters.api_request_logger import (
    REDACTED,
    log_api_request,
    redact_params,
    redact_url,
    should_log_requests,
)


class TestShouldLogRequests:
    """Tests for should_log_requests function."""

    def test_when_env_not_set_then_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given DBT_LOG_REQUESTS not set, when checking, then returns False."""
        monkeypatch.delenv("DBT_LOG_REQUESTS", raising=False)

        assert should_log_requests() is False

    @pytest.mark.parametrize(("value", "expected"), [("true", True), ("True", True), ("1", False)])
    def test_when_env_set_then_only_true_enables(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
    ) -> None:
        """Given DBT_LOG_REQUESTS set, when checking, then only 'true' in any case enables logging."""
        monkeypatch.setenv("DBT_LOG_REQUESTS", value)

        assert should_log_requests() is expected


def test_redact_params_hides_credentials() -> None:
    """Given key and token params, when redacting, then only they are replaced."""
    redacted = redact_params({"key": "secret", "Token": "t", "route": "534"})

    assert redacted == {"key": REDACTED, "Token": REDACTED, "route": "534"}


class TestLogApiRequest:
    """Tests for log_api_request function."""

    @patch("delhi_bus_tracker.adapters.api_request_logger.should_log_requests")
    @patch("delhi_bus_tracker.adapters.api_request_logger.logger")
    def test_when_logging_disabled_then_does_not_log(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given logging disabled, when calling log_api_request, then does not log."""
        mock_should_log.return_value = False

        log_api_request("GET", "https://feed.example/vp.pb", params={"key": "secret"})

        mock_logger.info.assert_not_called()

    @patch("delhi_bus_tracker.adapters.api_request_logger.should_log_requests")
    @patch("delhi_bus_tracker.adapters.api_request_logger.logger")
    def test_when_logging_enabled_then_api_key_is_redacted(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given logging enabled, when logging a request with a key, then the key is not logged."""
        mock_should_log.return_value = True

        log_api_request("GET", "https://feed.example/vp.pb", params={"key": "secret"})

        message = mock_logger.info.call_args[0][0]
        assert f"GET https://feed.example/vp.pb?key={REDACTED}" in message
        assert "secret" not in message

    @patch("delhi_bus_tracker.adapters.api_request_logger.should_log_requests")
    @patch("delhi_bus_tracker.adapters.api_request_logger.logger")
    def test_when_url_has_existing_params_then_appends_params(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given URL with existing params, when adding more params, then appends with '&'."""
        mock_should_log.return_value = True

        log_api_request("GET", "https://feed.example/vp.pb?format=pb", params={"agency": "dtc"})

        message = mock_logger.info.call_args[0][0]
        assert "vp.pb?format=pb&agency=dtc" in message

    @patch("delhi_bus_tracker.adapters.api_request_logger.should_log_requests")
    @patch("delhi_bus_tracker.adapters.api_request_logger.logger")
    def test_when_logging_with_authorization_header_then_redacts_it(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given Authorization header, when logging, then redacts the value."""
        mock_should_log.return_value = True

        log_api_request(
            "GET", "https://feed.example/vp.pb", headers={"Authorization": "Bearer secret-token"}
        )

        message = mock_logger.info.call_args[0][0]
        assert "Headers:" in message
        assert REDACTED in message
        assert "secret-token" not in message


class TestRequestRedaction:
    """Tests for redaction of keys that are not in the default parameter list."""

    def test_when_key_param_renamed_then_value_is_redacted(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Given a key sent under a custom name, when logging, then its value is not logged."""
        monkeypatch.setenv("DBT_LOG_REQUESTS", "true")

        with caplog.at_level(logging.INFO, logger="delhi_bus_tracker.adapters.api_request_logger"):
            log_api_request(
                "GET",
                "https://feed.example/vp.pb",
                params={"access_key": "s3cret"},
                sensitive_params=("access_key",),
            )

        assert f"access_key={REDACTED}" in caplog.text
        assert "s3cret" not in caplog.text

    def test_when_url_carries_key_then_value_is_redacted(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Given a key embedded in the URL query string, when logging, then its value is not logged."""
        monkeypatch.setenv("DBT_LOG_REQUESTS", "true")

        with caplog.at_level(logging.INFO, logger="delhi_bus_tracker.adapters.api_request_logger"):
            log_api_request("GET", "https://feed.example/vp.pb?format=pb&key=s3cret2")

        assert f"vp.pb?format=pb&key={REDACTED}" in caplog.text
        assert "s3cret2" not in caplog.text

    def test_redact_url_without_query_returns_url_unchanged(self) -> None:
        """Given a URL without a query string, when redacting, then it is returned as is."""
        assert redact_url("https://feed.example/vp.pb") == "https://feed.example/vp.pb"
