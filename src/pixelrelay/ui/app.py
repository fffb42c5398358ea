"""Gradio UI for PixelRelay."""

import logging

import gradio as gr

from pixelrelay.core.config import config
from pixelrelay.core.models import DEFAULT_MODEL, DEFAULT_SIZE, IMAGE_COUNTS, MODELS, SIZES

from .handlers import generate_images, render_status
from .models import GENERATE_LABEL, PROMPT_PLACEHOLDER, DisplayState, UIState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _label_for(value: str, choices: dict[str, str]) -> str:
    return next(label for label, choice in choices.items() if choice == value)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .title-gradient {
        background: linear-gradient(90deg, #C38FFF, #A050FF);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
    }
    """

    app = gr.Blocks(title="PixelRelay")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown(
            """
            # <span class="title-gradient">PixelRelay</span>
            ### Transform your imagination into stunning visuals
            """
        )

        with gr.Row():
            with gr.Column(scale=1):
                gr.Markdown("### Generation Settings")

                prompt_input = gr.Textbox(
                    label="Prompt",
                    placeholder=PROMPT_PLACEHOLDER,
                    lines=4,
                )
                model_dropdown = gr.Dropdown(
                    choices=list(MODELS),
                    value=_label_for(DEFAULT_MODEL, MODELS),
                    label="AI Model",
                )
                with gr.Row():
                    aspect_ratio_dropdown = gr.Dropdown(
                        choices=list(SIZES),
                        value=_label_for(DEFAULT_SIZE, SIZES),
                        label="Aspect Ratio",
                    )
                    count_dropdown = gr.Dropdown(
                        choices=[str(n) for n in IMAGE_COUNTS],
                        value="1",
                        label="Count",
                    )

                generate_btn = gr.Button(GENERATE_LABEL, variant="primary")

            with gr.Column(scale=2):
                status_output = gr.Markdown(value=render_status(DisplayState()))
                image_output = gr.Gallery(
                    label="Generated Images",
                    columns=2,
                    height=600,
                    object_fit="cover",
                    visible=False,
                )

        generate_btn.click(
            fn=generate_images,
            inputs=[prompt_input, model_dropdown, aspect_ratio_dropdown, count_dropdown, ui_state],
            outputs=[image_output, status_output, generate_btn, ui_state],
            # Sessions run independently; each one is serialised by its controller
            concurrency_limit=None,
        )

    return app, custom_css


def main():
    """Main entry point for the application."""
    logger.info("Starting PixelRelay UI...")
    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
    )


if __name__ == "__main__":
    main()
