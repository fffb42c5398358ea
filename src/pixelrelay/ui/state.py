"""State management utilities for the PixelRelay UI.

This module handles the initialization of per-session UI state: the form
controller with its rate limiter and proxy client.
"""

import logging

from pixelrelay.core.client import ProxyClient
from pixelrelay.core.config import PixelRelayConfig, config
from pixelrelay.core.rate_limiter import SlidingWindowRateLimiter

from .controller import GenerationController
from .models import UIState

logger = logging.getLogger(__name__)


def create_controller(settings: PixelRelayConfig | None = None) -> GenerationController:
    """Build a controller wired to the configured proxy and rate limit.

    Args:
        settings: Configuration to use (default: the global config)

    Returns:
        A controller in the IDLE state with an empty rate-limit window
    """
    settings = settings or config
    limiter = SlidingWindowRateLimiter(
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    client = ProxyClient(settings.proxy_url)
    return GenerationController(client=client, limiter=limiter)


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    Args:
        state: Existing UIState or None

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        return state

    state.controller = create_controller()
    logger.info(
        f"Session controller ready: proxy={config.proxy_url} "
        f"limit={config.rate_limit_requests}/{config.rate_limit_window_seconds:g}s"
    )
    return state
