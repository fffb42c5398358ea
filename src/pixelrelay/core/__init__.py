"""Core building blocks shared by the form and the proxy.

- **config**: Configuration management using Pydantic Settings
  (``PIXELRELAY_`` environment prefix).
- **errors**: The user-facing exception hierarchy.
- **models**: ``GenerationRequest`` / ``GenerationResult`` and the supported
  model, size and count choices.
- **rate_limiter**: Sliding window limiter used by the form.
- **client**: httpx client that posts submissions to the proxy.
"""

from pixelrelay.core.client import ProxyClient
from pixelrelay.core.config import PixelRelayConfig, config, load_config
from pixelrelay.core.errors import (
    ConfigurationError,
    EmptyResultError,
    PixelRelayError,
    RateLimitError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from pixelrelay.core.models import GenerationRequest, GenerationResult
from pixelrelay.core.rate_limiter import SlidingWindowRateLimiter

__all__ = [
    "ConfigurationError",
    "EmptyResultError",
    "GenerationRequest",
    "GenerationResult",
    "PixelRelayConfig",
    "PixelRelayError",
    "ProxyClient",
    "RateLimitError",
    "SlidingWindowRateLimiter",
    "TransportError",
    "UpstreamError",
    "ValidationError",
    "config",
    "load_config",
]
