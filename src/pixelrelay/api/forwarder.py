"""Upstream forwarding for the generate endpoint.

The forwarder is stateless: it takes the inbound payload, the current
configuration and an httpx client, and either returns the upstream JSON body
or raises a :class:`~pixelrelay.core.errors.PixelRelayError` whose message is
safe to return to the caller.

Upstream error normalisation
----------------------------
On a non-2xx upstream status the message is chosen in this order:

1. ``error.message`` from a JSON body (or ``error`` when it is a string).
2. The raw response text, when the body is not JSON.
3. A generic message that includes the status code.

The body is read once and parsed from the buffered content, so falling back
from JSON to text never re-reads a consumed stream.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from pixelrelay.core.config import PixelRelayConfig
from pixelrelay.core.errors import ConfigurationError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

# Fields copied from the inbound body to the upstream request.
GENERATION_FIELDS = ("model", "prompt", "num_images", "size")

MISSING_KEY_MESSAGE = "PIXELRELAY_API_KEY is not set in the proxy environment."


def build_upstream_payload(body: Any) -> dict[str, Any]:
    """Select the generation fields from a parsed request body.

    Values are copied verbatim; types and ranges are left for the upstream
    API to judge. Fields absent from the body are omitted.

    Args:
        body: Parsed JSON request body.

    Returns:
        Dictionary with the generation fields present in *body*.

    Raises:
        TypeError: If *body* is not a JSON object.
    """
    if not isinstance(body, dict):
        raise TypeError("Request body must be a JSON object.")
    return {key: body[key] for key in GENERATION_FIELDS if key in body}


def extract_upstream_error(response: httpx.Response) -> str:
    """Return a human-readable message for a failed upstream response."""
    status = response.status_code
    try:
        data = response.json()
    except ValueError:
        text = response.text.strip()
        return text or f"The AI API returned a non-JSON error with status: {status}"

    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return f"The AI API returned an error with status: {status}"


async def forward_generation(
    body: Any,
    settings: PixelRelayConfig,
    client: httpx.AsyncClient,
) -> Any:
    """Forward a generation request upstream with the server-held credential.

    Args:
        body: Parsed JSON body received by the proxy.
        settings: Configuration read for this invocation.
        client: httpx client used for the upstream call.

    Returns:
        The parsed upstream JSON body, unchanged.

    Raises:
        ConfigurationError: No credential is configured. The upstream host is
            not contacted.
        UpstreamError: The upstream API answered with a non-2xx status.
        TransportError: The upstream API could not be reached, or its success
            body was not JSON.
        TypeError: The inbound body is not a JSON object.
    """
    api_key = settings.get_api_key()
    if api_key is None:
        raise ConfigurationError(MISSING_KEY_MESSAGE)

    payload = build_upstream_payload(body)
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = await client.post(
            settings.upstream_url,
            content=json.dumps(payload),
            headers=headers,
            timeout=settings.upstream_timeout,
        )
    except httpx.HTTPError as e:
        raise TransportError(f"Could not reach the AI API: {e}") from e

    if not response.is_success:
        message = extract_upstream_error(response)
        logger.warning(f"Upstream returned {response.status_code}: {message}")
        raise UpstreamError(message, status_code=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise TransportError(
            f"The AI API returned a non-JSON response with status: {response.status_code}"
        ) from e
