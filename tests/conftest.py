"""Shared test fixtures for trueskill-console."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import structlog

from config.settings import ConsoleSettings


@dataclass
class RecordingTransport:
    """httpx MockTransport wrapper that records every request it answers."""

    base_url: str = "http://ratings.test"
    status_code: int = 200
    body: Any = field(default_factory=dict)
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        content = self.body if isinstance(self.body, str) else json.dumps(self.body)
        return httpx.Response(self.status_code, text=content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> ConsoleSettings:
    """ConsoleSettings with no profile loaded: loopback base URL, 30 s timeout."""
    return ConsoleSettings()


@pytest.fixture
def api() -> RecordingTransport:
    """Return a recording transport answering 200 with an empty JSON object."""
    return RecordingTransport()


@pytest.fixture
def connection_refused() -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    return handler


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo configure_logging so no test logs into another test's captured stream."""
    yield
    structlog.reset_defaults()
