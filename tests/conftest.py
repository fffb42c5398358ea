"""Shared pytest fixtures for PixelRelay tests."""

from __future__ import annotations

from collections.abc import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from pixelrelay.api.main import app, get_http_client, get_settings
from pixelrelay.core.config import PixelRelayConfig

UPSTREAM_URL = "https://upstream.test/v1/images/generations"


class FakeClock:
    """Manually advanced clock for rate limiter tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class UpstreamStub:
    """Programmable stand-in for the upstream image generation API.

    Records every request it receives so tests can assert on headers, body,
    and whether the upstream host was contacted at all.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.response = httpx.Response(200, json={"images": ["https://img.test/a.png"]})
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock starting at t=1000s that only moves when advanced."""
    return FakeClock()


@pytest.fixture
def test_config() -> PixelRelayConfig:
    """Configuration with a credential and a fake upstream URL.

    Returns:
        PixelRelayConfig instance for testing
    """
    return PixelRelayConfig(
        _env_file=None,
        api_key="test-key",
        upstream_url=UPSTREAM_URL,
        proxy_url="https://proxy.test/api/generate",
        rate_limit_requests=10,
        rate_limit_window_seconds=60.0,
    )


@pytest.fixture
def upstream() -> UpstreamStub:
    """Upstream stub that answers with one image by default."""
    return UpstreamStub()


@pytest.fixture
def make_client(
    upstream: UpstreamStub,
) -> Generator[Callable[[PixelRelayConfig], TestClient], None, None]:
    """Factory for a proxy TestClient bound to a config and the upstream stub.

    Yields:
        Callable taking the PixelRelayConfig the proxy should see

    Cleanup:
        Dependency overrides are removed after the test
    """

    def _make(settings: PixelRelayConfig) -> TestClient:
        async def _http_client():
            async with httpx.AsyncClient(transport=upstream.transport) as client:
                yield client

        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = _http_client
        return TestClient(app)

    try:
        yield _make
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def test_client(make_client, test_config: PixelRelayConfig) -> TestClient:
    """Proxy TestClient with a configured credential."""
    return make_client(test_config)


@pytest.fixture
def valid_payload() -> dict:
    """A well-formed generate request body."""
    return {
        "model": "img3",
        "prompt": "A majestic dragon soaring through cloudy skies",
        "num_images": 2,
        "size": "1024x1024",
    }
