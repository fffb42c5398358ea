"""Pydantic models shared by the form controller and the proxy.

Models
------
GenerationRequest
    Parameters for one submission. Built fresh by the form on every submit
    and sent as the JSON body of ``POST /api/generate``. Field ranges are
    enforced here, on the client side; the proxy forwards bodies verbatim.
GenerationResult
    Successful response shape: an ordered list of image URLs.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Model identifiers accepted by the upstream API, keyed by display label.
MODELS: dict[str, str] = {
    "IMG3 (Advanced)": "img3",
}

# Output dimensions, keyed by aspect ratio label.
SIZES: dict[str, str] = {
    "Square": "1024x1024",
    "Landscape": "1792x1024",
    "Portrait": "1024x1792",
}

MAX_IMAGES = 4
IMAGE_COUNTS = list(range(1, MAX_IMAGES + 1))

DEFAULT_MODEL = "img3"
DEFAULT_SIZE = "1024x1024"

ImageSize = Literal["1024x1024", "1792x1024", "1024x1792"]


class GenerationRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        model: Upstream model identifier (e.g. ``"img3"``).
        prompt: Text description of the image to generate.
        num_images: Number of images to generate (1-4 inclusive).
        size: Output dimensions as ``"<width>x<height>"``.
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(
        default=DEFAULT_MODEL,
        min_length=1,
        description="Upstream model identifier (e.g. 'img3').",
    )
    prompt: str = Field(
        ...,
        min_length=1,
        description="Text description of the image to generate.",
    )
    num_images: int = Field(
        default=1,
        ge=1,
        le=MAX_IMAGES,
        description=f"Number of images to generate (1-{MAX_IMAGES}).",
    )
    size: ImageSize = Field(
        default=DEFAULT_SIZE,
        description="Output dimensions, one of the supported sizes.",
    )


class GenerationResult(BaseModel):
    """Successful generation response.

    Attributes:
        images: Image URLs in the order the upstream API returned them.
    """

    images: list[str] = Field(
        default_factory=list,
        description="Ordered list of generated image URLs.",
    )
