"""Gradio event handlers for the generation form."""

import logging
from collections.abc import Iterator

import gradio as gr

from pixelrelay.core.models import MODELS, SIZES

from .models import (
    ERROR_TITLE,
    GENERATE_LABEL,
    GENERATING_LABEL,
    LOADING_TEXT,
    PLACEHOLDER_TEXT,
    PLACEHOLDER_TITLE,
    DisplayState,
    UIState,
)
from .state import initialize_ui_state

logger = logging.getLogger(__name__)


def render_status(display: DisplayState) -> str:
    """Markdown for the status panel above the gallery.

    Priority follows the result panel: loading, error, images, placeholder.
    """
    if display.is_loading:
        return f"⏳ *{LOADING_TEXT}*"
    if display.error:
        return f"❌ **{ERROR_TITLE}**\n\n{display.error}"
    if display.has_images:
        count = len(display.images)
        return f"✅ Generated {count} image{'s' if count != 1 else ''}"
    return f"### {PLACEHOLDER_TITLE}\n\n{PLACEHOLDER_TEXT}"


def render_display(display: DisplayState, prompt: str = "") -> tuple[gr.update, str, gr.update]:
    """Map a display state to component updates.

    Args:
        display: State to render
        prompt: Prompt used as the caption of each image

    Returns:
        Tuple of (gallery_update, status_markdown, button_update)
    """
    show_images = display.has_images and not display.is_loading and not display.error
    gallery = gr.update(
        value=[(url, prompt) for url in display.images] if show_images else [],
        visible=show_images,
    )
    button = gr.update(
        value=GENERATING_LABEL if display.is_loading else GENERATE_LABEL,
        interactive=not display.is_loading,
    )
    return gallery, render_status(display), button


def resolve_choice(value: str, choices: dict[str, str]) -> str:
    """Translate a dropdown label to its value; values pass through unchanged."""
    return choices.get(value, value)


def generate_images(
    prompt: str,
    model_label: str,
    aspect_ratio_label: str,
    count,
    state: UIState,
) -> Iterator[tuple[gr.update, str, gr.update, UIState]]:
    """Submit the form and stream each display state to the UI.

    Args:
        prompt: Prompt text
        model_label: Selected model (label or identifier)
        aspect_ratio_label: Selected aspect ratio (label or size)
        count: Selected image count
        state: UI state

    Yields:
        Tuple of (gallery_update, status_markdown, button_update, updated_state)
    """
    state = initialize_ui_state(state)
    model = resolve_choice(model_label, MODELS)
    size = resolve_choice(aspect_ratio_label, SIZES)

    for display in state.controller.iter_submit(prompt, model, size, count):
        if display.is_loading:
            state.last_prompt = prompt
        yield (*render_display(display, state.last_prompt), state)
