"""Integration tests for pixelrelay.api.main - FastAPI proxy endpoints.

All tests use the FastAPI TestClient with the upstream API replaced by an
``httpx.MockTransport`` stub, so no network access occurs. Tests cover:

- ``POST /api/generate`` - forwarding, credential handling, error relay.
- Non-POST methods on ``/api/generate`` - 405 with a JSON body.
- ``GET /api/config`` - form choices.
- ``GET /api/health`` - liveness.
"""

from __future__ import annotations

import json

import httpx
import pytest

from pixelrelay.core.config import PixelRelayConfig

# ---------------------------------------------------------------------------
# Generation endpoint tests.
# ---------------------------------------------------------------------------


class TestGenerate:
    """Test POST /api/generate - forwarding to the upstream API."""

    def test_success_relays_upstream_body(self, test_client, upstream, valid_payload):
        """A 200 upstream body is relayed unchanged."""
        upstream.response = httpx.Response(
            200, json={"images": ["a.png", "b.png"], "created": 1700000000}
        )

        resp = test_client.post("/api/generate", json=valid_payload)

        assert resp.status_code == 200
        assert resp.json() == {"images": ["a.png", "b.png"], "created": 1700000000}

    def test_forwards_payload_with_bearer(self, test_client, upstream, valid_payload):
        """The upstream call carries the credential and the same generation fields."""
        test_client.post("/api/generate", json=valid_payload)

        assert len(upstream.requests) == 1
        sent = upstream.requests[0]
        assert sent.method == "POST"
        assert sent.headers["authorization"] == "Bearer test-key"
        assert json.loads(sent.content) == valid_payload

    def test_upstream_error_message_relayed(self, test_client, upstream, valid_payload):
        """A structured upstream error becomes a 500 with its message."""
        upstream.response = httpx.Response(400, json={"error": {"message": "bad prompt"}})

        resp = test_client.post("/api/generate", json=valid_payload)

        assert resp.status_code == 500
        assert resp.json() == {"error": "bad prompt"}

    def test_upstream_text_error_relayed(self, test_client, upstream, valid_payload):
        """A non-JSON upstream error falls back to the raw text."""
        upstream.response = httpx.Response(502, text="upstream exploded")

        resp = test_client.post("/api/generate", json=valid_payload)

        assert resp.status_code == 500
        assert resp.json() == {"error": "upstream exploded"}

    def test_upstream_unreachable(self, test_client, upstream, valid_payload):
        upstream.error = httpx.ConnectError("connection refused")

        resp = test_client.post("/api/generate", json=valid_payload)

        assert resp.status_code == 500
        assert "connection refused" in resp.json()["error"]

    def test_missing_credential_fails_closed(self, make_client, upstream, valid_payload):
        """Without a credential: 500 with an error string, upstream untouched."""
        client = make_client(PixelRelayConfig(_env_file=None, api_key=""))

        resp = client.post("/api/generate", json=valid_payload)

        assert resp.status_code == 500
        body = resp.json()
        assert isinstance(body["error"], str)
        assert body["error"]
        assert "PIXELRELAY_API_KEY" in body["error"]
        assert upstream.requests == []

    def test_invalid_json_body(self, test_client, upstream):
        resp = test_client.post(
            "/api/generate",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert resp.status_code == 500
        assert resp.json()["error"]
        assert upstream.requests == []

    def test_non_object_body(self, test_client, upstream):
        resp = test_client.post("/api/generate", json=["img3", "a cat"])

        assert resp.status_code == 500
        assert resp.json() == {"error": "Request body must be a JSON object."}
        assert upstream.requests == []

    def test_fields_not_validated_by_proxy(self, test_client, upstream):
        """Out-of-range values are forwarded for the upstream API to judge."""
        payload = {"model": "img3", "prompt": "x", "num_images": 99, "size": "1x1"}

        resp = test_client.post("/api/generate", json=payload)

        assert resp.status_code == 200
        assert json.loads(upstream.requests[0].content) == payload


# ---------------------------------------------------------------------------
# Method guard tests.
# ---------------------------------------------------------------------------


class TestMethodNotAllowed:
    """Test non-POST methods on /api/generate."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH", "OPTIONS"])
    def test_non_post_returns_405(self, test_client, upstream, method):
        resp = test_client.request(method, "/api/generate")

        assert resp.status_code == 405
        assert resp.json() == {"error": "Method Not Allowed"}
        assert upstream.requests == []

    def test_cors_preflight_is_json_405(self, test_client, upstream):
        """A browser preflight gets the same JSON 405 as any other non-POST."""
        resp = test_client.options(
            "/api/generate",
            headers={
                "Origin": "https://site.test",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert resp.status_code == 405
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == {"error": "Method Not Allowed"}
        assert "access-control-allow-origin" not in resp.headers
        assert upstream.requests == []

    def test_unknown_path_is_json(self, test_client):
        resp = test_client.get("/api/nope")

        assert resp.status_code == 404
        assert "error" in resp.json()


# ---------------------------------------------------------------------------
# Configuration and health endpoint tests.
# ---------------------------------------------------------------------------


class TestGetConfig:
    """Test GET /api/config - form choices."""

    def test_config_returns_choices(self, test_client):
        resp = test_client.get("/api/config")

        assert resp.status_code == 200
        data = resp.json()
        assert data["models"] == {"IMG3 (Advanced)": "img3"}
        assert data["sizes"]["Landscape"] == "1792x1024"
        assert data["image_counts"] == [1, 2, 3, 4]
        assert "version" in data

    def test_config_includes_rate_limit(self, test_client):
        data = test_client.get("/api/config").json()
        assert data["rate_limit_requests"] >= 1
        assert data["rate_limit_window_seconds"] > 0


class TestHealth:
    """Test GET /api/health."""

    def test_health(self, test_client):
        resp = test_client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
