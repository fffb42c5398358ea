"""State transitions for the submission workflow.

Each function takes the current :class:`DisplayState` and returns the next
one. None of them perform I/O or touch the UI, so the whole workflow can be
exercised without a browser or a network.

    IDLE --submit--> LOADING --response--> SUCCESS | ERROR
      ^                                         |
      +-------------- next submit --------------+

Guard failures (empty prompt, rate limit) leave the phase at IDLE with an
error message and no request issued.
"""

from typing import Any

from pixelrelay.core.errors import EmptyResultError, UpstreamError

from .models import DisplayState, Phase

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
NO_IMAGES_MESSAGE = "API returned no images. Please try a different prompt."


def reject_submission(state: DisplayState, message: str) -> DisplayState:
    """A guard failed before any request was issued."""
    return DisplayState(phase=Phase.IDLE, images=state.images, error=message)


def flag_busy(state: DisplayState, message: str) -> DisplayState:
    """A submit arrived while a request is in flight; the phase is kept."""
    return DisplayState(phase=state.phase, images=state.images, error=message)


def begin_submission(state: DisplayState) -> DisplayState:
    """Enter LOADING, clearing the previous result."""
    return DisplayState(phase=Phase.LOADING)


def extract_images(status_code: int, body: Any) -> list[str]:
    """Interpret a proxy response.

    Args:
        status_code: HTTP status of the proxy response.
        body: Parsed JSON body.

    Returns:
        Image URLs in upstream order.

    Raises:
        UpstreamError: Non-2xx status. The message is the server-reported
            ``error`` text, or a generic fallback.
        EmptyResultError: 2xx status but no images.
    """
    data = body if isinstance(body, dict) else {}

    if not 200 <= status_code < 300:
        message = data.get("error")
        if not isinstance(message, str) or not message:
            message = UNKNOWN_ERROR_MESSAGE
        raise UpstreamError(message, status_code=status_code)

    images = data.get("images")
    if not isinstance(images, list) or not images:
        raise EmptyResultError(NO_IMAGES_MESSAGE)
    return [str(url) for url in images]


def apply_response(state: DisplayState, status_code: int, body: Any) -> DisplayState:
    """Leave LOADING for SUCCESS or ERROR based on the proxy response."""
    try:
        images = extract_images(status_code, body)
    except (UpstreamError, EmptyResultError) as e:
        return apply_failure(state, str(e))
    return DisplayState(phase=Phase.SUCCESS, images=tuple(images))


def apply_failure(state: DisplayState, message: str) -> DisplayState:
    """Leave LOADING for ERROR (network failure, unreadable response)."""
    return DisplayState(phase=Phase.ERROR, error=message or UNKNOWN_ERROR_MESSAGE)
