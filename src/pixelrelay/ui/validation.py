"""Validation utilities for PixelRelay form inputs.

Range checks on ``num_images`` and ``size`` happen here, on the client.
The proxy forwards whatever it receives, so a request that reaches it from
the form has already been validated.
"""

import logging

import pydantic

from pixelrelay.core.errors import ValidationError
from pixelrelay.core.models import GenerationRequest, MAX_IMAGES, SIZES

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a prompt."


def validate_prompt(prompt: str | None) -> str:
    """Return the prompt if it contains non-whitespace text.

    The prompt is returned as typed; surrounding whitespace is not stripped.

    Raises:
        ValidationError: If the prompt is empty or whitespace only.
    """
    if not prompt or not prompt.strip():
        raise ValidationError(EMPTY_PROMPT_MESSAGE)
    return prompt


def parse_image_count(count: int | str) -> int:
    """Convert a count from a form control to an int.

    Raises:
        ValidationError: If the value is not a whole number.
    """
    try:
        return int(count)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Image count must be a whole number, got {count!r}") from e


def build_generation_request(
    prompt: str | None,
    model: str,
    size: str,
    num_images: int | str,
) -> GenerationRequest:
    """Validate form values and build a :class:`GenerationRequest`.

    Args:
        prompt: Prompt text.
        model: Upstream model identifier.
        size: Output size (``"<width>x<height>"``).
        num_images: Requested image count (int or numeric string).

    Returns:
        A validated, immutable request.

    Raises:
        ValidationError: With a user-friendly message for the first problem.
    """
    prompt = validate_prompt(prompt)
    count = parse_image_count(num_images)

    if count < 1 or count > MAX_IMAGES:
        raise ValidationError(f"Image count must be 1-{MAX_IMAGES}, got {count}")
    if size not in SIZES.values():
        raise ValidationError(f"Unsupported image size: {size}")

    try:
        return GenerationRequest(model=model, prompt=prompt, num_images=count, size=size)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"])
        logger.debug(f"Request validation failed: {e}")
        raise ValidationError(f"Invalid {field_name}: {first['msg']}") from e
