"""Form controller: drives one submission through the workflow.

The controller owns the session's rate limiter, the proxy client and the
current :class:`DisplayState`. It issues exactly one network call per
submission that passes its guards, and none for submissions that fail them.
"""

import logging
from collections.abc import Iterator

from pixelrelay.core.client import ProxyClient
from pixelrelay.core.errors import PixelRelayError, RateLimitError, ValidationError
from pixelrelay.core.rate_limiter import SlidingWindowRateLimiter

from .models import DisplayState
from .validation import build_generation_request
from .workflow import (
    apply_failure,
    apply_response,
    begin_submission,
    flag_busy,
    reject_submission,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait a moment."
BUSY_MESSAGE = "A generation is already in progress."


class GenerationController:
    """Rate-limited submit workflow for the generation form.

    Args:
        client: Client used to reach the proxy.
        limiter: Session rate limiter.
        state: Initial display state (defaults to IDLE).
    """

    def __init__(
        self,
        client: ProxyClient,
        limiter: SlidingWindowRateLimiter,
        state: DisplayState | None = None,
    ):
        self.client = client
        self.limiter = limiter
        self.state = state or DisplayState()

    def iter_submit(
        self,
        prompt: str | None,
        model: str,
        size: str,
        num_images: int | str,
    ) -> Iterator[DisplayState]:
        """Run a submission, yielding every state the form should render.

        A guard failure yields a single IDLE state carrying the error; a
        submit while a request is in flight yields the LOADING state with the
        busy message and leaves the session state untouched. A
        submission that proceeds yields the LOADING state and then the final
        SUCCESS or ERROR state.
        """
        if self.state.is_loading:
            logger.warning("Submit ignored: a request is already in flight")
            yield flag_busy(self.state, BUSY_MESSAGE)
            return

        try:
            request = build_generation_request(prompt, model, size, num_images)
            if not self.limiter.check():
                raise RateLimitError(RATE_LIMIT_MESSAGE)
        except (ValidationError, RateLimitError) as e:
            self.state = reject_submission(self.state, str(e))
            yield self.state
            return

        self.state = begin_submission(self.state)
        self.limiter.record()
        yield self.state

        try:
            status_code, body = self.client.generate(request)
        except PixelRelayError as e:
            logger.error(f"Generation failed: {e}")
            self.state = apply_failure(self.state, str(e))
        except Exception as e:
            logger.error(f"Unexpected error during generation: {e}", exc_info=True)
            self.state = apply_failure(self.state, f"Unexpected error: {e}")
        else:
            self.state = apply_response(self.state, status_code, body)
            if self.state.error:
                logger.error(f"Generation failed: {self.state.error}")
            else:
                logger.info(f"Generation succeeded with {len(self.state.images)} image(s)")
        yield self.state

    def submit(
        self,
        prompt: str | None,
        model: str,
        size: str,
        num_images: int | str,
    ) -> DisplayState:
        """Run a submission to completion and return the final state."""
        for state in self.iter_submit(prompt, model, size, num_images):
            pass
        return state
