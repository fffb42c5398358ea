"""PixelRelay - prompt form and credential-injecting proxy for image generation."""

__version__ = "0.1.0"

from pixelrelay.core.config import PixelRelayConfig, config
from pixelrelay.core.rate_limiter import SlidingWindowRateLimiter

__all__ = [
    "PixelRelayConfig",
    "SlidingWindowRateLimiter",
    "config",
]
