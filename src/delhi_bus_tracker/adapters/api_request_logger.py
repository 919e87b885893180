"""Opt-in logging of outgoing feed requests (DBT_LOG_REQUESTS=true).

The feed API key travels as a query parameter, so every logged URL, query
string included, and every header set passes through redaction first.
"""

import json
import logging
import os
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"
SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
SENSITIVE_PARAMS = frozenset({"key", "api_key", "apikey", "token"})


def should_log_requests() -> bool:
    return os.getenv("DBT_LOG_REQUESTS", "").lower() == "true"


def _redact(values: Mapping[str, Any] | None, sensitive: frozenset[str]) -> dict[str, Any]:
    if not values:
        return {}
    return {name: REDACTED if name.lower() in sensitive else v for name, v in values.items()}


def _sensitive_params(extra: Iterable[str]) -> frozenset[str]:
    return SENSITIVE_PARAMS | {name.lower() for name in extra}


def redact_params(
    params: Mapping[str, Any] | None, extra_sensitive: Iterable[str] = ()
) -> dict[str, Any]:
    """Replace credential-bearing query parameter values."""
    return _redact(params, _sensitive_params(extra_sensitive))


def redact_url(url: str, extra_sensitive: Iterable[str] = ()) -> str:
    """Redact credential-bearing parameters already embedded in a URL's query string."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    sensitive = _sensitive_params(extra_sensitive)
    pairs = [
        (name, REDACTED if name.lower() in sensitive else value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(pairs, safe="*")))


def _request_line(method: str, url: str, params: Mapping[str, Any]) -> str:
    if not params:
        return f"{method} {url}"
    separator = "&" if "?" in url else "?"
    query = urlencode(sorted(params.items()), safe="*")
    return f"{method} {url}{separator}{query}"


def log_api_request(
    method: str,
    url: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    sensitive_params: Iterable[str] = (),
) -> None:
    """Log one outgoing request if request logging is enabled.

    Args:
        method: HTTP method.
        url: Request URL, possibly already carrying a query string.
        params: Query parameters added by the client.
        headers: Request headers.
        sensitive_params: Parameter names to redact on top of the built-in ones,
            e.g. a renamed API key parameter.
    """
    if not should_log_requests():
        return

    extra = tuple(sensitive_params)
    lines = [_request_line(method, redact_url(url, extra), redact_params(params, extra))]
    if headers:
        lines.append(f"Headers: {json.dumps(_redact(headers, SENSITIVE_HEADERS), indent=2)}")

    logger.info("Feed request:\n" + "\n".join(lines))
