"""Unit tests for the proxy HTTP client."""

import httpx
import pytest

from pixelrelay.core.client import ProxyClient
from pixelrelay.core.errors import TransportError
from pixelrelay.core.models import GenerationRequest


@pytest.fixture
def request_model() -> GenerationRequest:
    return GenerationRequest(model="img3", prompt="a cat", num_images=1, size="1024x1024")


class TestProxyClient:
    """Tests for ProxyClient.generate."""

    def test_returns_status_and_body(self, request_model):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.headers["content-type"] == "application/json"
            return httpx.Response(200, json={"images": ["a.png"]})

        client = ProxyClient("https://proxy.test/api/generate", transport=httpx.MockTransport(handler))

        status, body = client.generate(request_model)

        assert status == 200
        assert body == {"images": ["a.png"]}

    def test_error_status_is_returned_not_raised(self, request_model):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "nope"})

        client = ProxyClient("https://proxy.test/api/generate", transport=httpx.MockTransport(handler))

        assert client.generate(request_model) == (500, {"error": "nope"})

    def test_non_json_body_raises_transport_error(self, request_model):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<!DOCTYPE html><html></html>")

        client = ProxyClient("https://proxy.test/api/generate", transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError, match="invalid response"):
            client.generate(request_model)

    def test_connection_error_raises_transport_error(self, request_model):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        client = ProxyClient("https://proxy.test/api/generate", transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError, match="Could not reach"):
            client.generate(request_model)
