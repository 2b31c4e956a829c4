"""Shared fixtures and fakes for unit tests."""

from __future__ import annotations

import typing as t

import httpx
import pytest

from mcp_gov.cache import LRUCache
from mcp_gov.sources.fetcher import GovernanceFetcher
from mcp_gov.utils.config import HttpConfig, ResilienceConfig


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


Handler = t.Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def fake_clock():
    """A clock frozen until advanced."""
    return FakeClock()


@pytest.fixture
def cache(fake_clock):
    """Cache with a 60s TTL driven by the fake clock."""
    return LRUCache(max_entries=100, ttl_seconds=60, clock=fake_clock)


@pytest.fixture
def fast_resilience():
    """Single attempt, no backoff, breaker effectively disabled."""
    return ResilienceConfig(
        circuit_breaker_enabled=True,
        failure_threshold=1000,
        retry_max_attempts=1,
        retry_backoff_ms=[1],
    )


@pytest.fixture
def make_fetcher(cache, fast_resilience):
    """Build a fetcher whose HTTP traffic is served by ``handler``."""

    def _make(handler: Handler, resilience: t.Optional[ResilienceConfig] = None) -> GovernanceFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GovernanceFetcher(
            cache,
            client,
            http_config=HttpConfig(),
            resilience=resilience or fast_resilience,
        )

    return _make


class RecordingHandler:
    """Route requests by host and count calls."""

    def __init__(self, routes: t.Dict[str, Handler]) -> None:
        self._routes = routes
        self.calls: t.List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self._routes.get(request.url.host)
        if handler is None:
            return httpx.Response(404, text="not found")
        return handler(request)

    def count(self, host: str) -> int:
        return sum(1 for r in self.calls if r.url.host == host)


@pytest.fixture
def recording_handler():
    return RecordingHandler
