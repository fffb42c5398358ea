"""Data models for the PixelRelay form: display state and session state."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Phases of the submission workflow."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class DisplayState:
    """What the result panel should show.

    Instances are immutable; every transition in :mod:`pixelrelay.ui.workflow`
    returns a new one. Rendering priority is loading, then error, then
    images, then the placeholder.
    """

    phase: Phase = Phase.IDLE
    images: tuple[str, ...] = ()
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING

    @property
    def has_images(self) -> bool:
        return bool(self.images)


@dataclass
class UIState:
    """Session state for the Gradio UI.

    One instance per browser session. The controller (and with it the rate
    limiter's timestamps) lives only as long as the session.

    Attributes
    ----------
    controller : Any | None
        GenerationController instance, created lazily on first submit
    last_prompt : str
        Prompt of the most recent submission, used as image alt text
    """

    controller: Any | None = None  # GenerationController instance
    last_prompt: str = ""

    def is_initialized(self) -> bool:
        """Check if the session controller has been created."""
        return self.controller is not None

    def __repr__(self) -> str:
        return f"UIState(initialized={self.is_initialized()})"


# UI text
PLACEHOLDER_TITLE = "Ready to Create"
PLACEHOLDER_TEXT = (
    "Enter a detailed prompt and watch as our AI transforms your "
    "words into stunning visual art."
)
LOADING_TEXT = "Generating your masterpiece..."
ERROR_TITLE = "An Error Occurred"

GENERATE_LABEL = "Generate Images"
GENERATING_LABEL = "Generating..."

PROMPT_PLACEHOLDER = "A majestic dragon soaring through cloudy skies..."
