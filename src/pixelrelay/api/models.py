"""Pydantic response models for the proxy API.

The generate endpoint relays the upstream body unchanged on success, so only
the error shape and the configuration payload are modelled here.

Models
------
ErrorResponse
    Body of every non-200 response: ``{"error": "<message>"}``.
OptionsResponse
    Payload for ``GET /api/config`` - the choices offered by the form.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Structured error body returned by the proxy.

    Attributes:
        error: Human-readable message, safe to show to the end user.
    """

    error: str = Field(
        ...,
        description="Human-readable error message.",
    )


class OptionsResponse(BaseModel):
    """Form choices served by ``GET /api/config``.

    Attributes:
        version: API version string.
        models: Model display label to upstream identifier.
        sizes: Aspect ratio label to ``"<width>x<height>"`` size.
        image_counts: Allowed values for ``num_images``.
        rate_limit_requests: Submissions allowed per window on the client.
        rate_limit_window_seconds: Length of the client rate-limit window.
    """

    version: str
    models: dict[str, str]
    sizes: dict[str, str]
    image_counts: list[int]
    rate_limit_requests: int
    rate_limit_window_seconds: float
