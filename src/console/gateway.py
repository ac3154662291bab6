"""HTTP gateway to the rating API.

call_api never raises for transport or remote failures; every outcome is
encoded in the returned CallOutcome.
"""

from __future__ import annotations

import json
import time
from typing import Any
from urllib.parse import urlencode

import httpx
import structlog

from console.models import CallOutcome, loads_strict

logger = structlog.get_logger()

DEFAULT_TIMEOUT = 30.0
JSON_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


def build_url(base_url: str, path: str, query: dict[str, str] | None = None) -> str:
    """Join the base URL and an endpoint path, appending a form-encoded query."""
    url = base_url.rstrip("/") + path
    if query:
        url += "?" + urlencode(query)
    return url


def encode_body(body: Any) -> str:
    """Serialize a request body. Strings are sent verbatim."""
    if isinstance(body, str):
        return body
    return json.dumps(body, separators=(",", ":"))


def decode_body(raw: str) -> Any:
    """Return the decoded JSON body, or None when it is empty or not JSON."""
    if not raw:
        return None
    try:
        return loads_strict(raw)
    except ValueError:
        return None


def _timed_out(method: str, url: str, timeout: float) -> CallOutcome:
    error = f"timed out after {timeout:g}s"
    logger.warning("gateway.deadline_exceeded", method=method, url=url, timeout=timeout)
    return CallOutcome(http_status=0, transport_error=error)


def call_api(
    method: str,
    url: str,
    body: Any = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> CallOutcome:
    """Issue one request and normalize the result.

    Args:
        method: HTTP method, GET or POST.
        url: Fully built target URL.
        body: JSON-serializable payload, a pre-encoded string, or None.
        timeout: Deadline in seconds for the whole exchange. Each network
            phase is capped by it too, and the body is abandoned once the
            deadline passes, however slowly it trickles in.
        transport: Optional httpx transport, used in place of the network.

    Returns:
        The CallOutcome for this request.
    """
    method = method.upper()
    content = encode_body(body) if body is not None else None
    deadline = time.monotonic() + timeout
    logger.info("gateway.request", method=method, url=url)

    # One client per call; nothing is pooled across submissions
    try:
        with httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        ) as client:
            with client.stream(method, url, content=content, headers=JSON_HEADERS) as response:
                chunks: list[bytes] = []
                for chunk in response.iter_bytes():
                    if time.monotonic() > deadline:
                        return _timed_out(method, url, timeout)
                    chunks.append(chunk)
                if time.monotonic() > deadline:
                    return _timed_out(method, url, timeout)
                status = response.status_code
                encoding = response.encoding or "utf-8"
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        error = str(exc) or type(exc).__name__
        logger.warning("gateway.transport_error", method=method, url=url, error=error)
        return CallOutcome(http_status=0, transport_error=error)

    raw = b"".join(chunks).decode(encoding, errors="replace")
    outcome = CallOutcome(
        http_status=status,
        parsed_body=decode_body(raw),
        raw_body=raw,
    )
    if outcome.success:
        logger.info("gateway.response", status=outcome.http_status)
    else:
        logger.warning(
            "gateway.http_error",
            status=outcome.http_status,
            json_body=outcome.parsed_body is not None,
        )
    return outcome
