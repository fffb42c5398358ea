"""HTTP client used by the form to reach the proxy.

The proxy guarantees that every response body is JSON, so the client always
parses the body and hands the status code and payload back to the caller.
Interpreting the payload (success, server error, empty result) is the job of
:mod:`pixelrelay.ui.workflow`.
"""

import logging
from typing import Any

import httpx

from .errors import TransportError
from .models import GenerationRequest

logger = logging.getLogger(__name__)


class ProxyClient:
    """Send generation requests to the proxy endpoint.

    A new :class:`httpx.Client` is opened per submission; the form issues at
    most one request at a time, so there is no connection pool to share.

    Args:
        url: Full URL of the proxy's generate endpoint.
        timeout: Request timeout in seconds, or None to wait indefinitely.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def generate(self, request: GenerationRequest) -> tuple[int, Any]:
        """POST a generation request and return ``(status_code, body)``.

        Args:
            request: Validated generation parameters.

        Returns:
            The HTTP status code and the parsed JSON body.

        Raises:
            TransportError: If the proxy cannot be reached or the body is not
                valid JSON.
        """
        logger.info(
            f"Submitting generation: model={request.model} size={request.size} "
            f"num_images={request.num_images}"
        )
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.url, json=request.model_dump())
        except httpx.HTTPError as e:
            logger.error(f"Request to {self.url} failed: {e}")
            raise TransportError(f"Could not reach the generation service: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Non-JSON response from proxy (status {response.status_code})")
            raise TransportError(
                f"The generation service returned an invalid response "
                f"(status {response.status_code})."
            ) from e

        return response.status_code, body
