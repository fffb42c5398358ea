"""Gradio form for PixelRelay.

- models: display and session state
- workflow: pure state transitions for a submission
- validation: form input checks
- controller: rate-limited submit workflow
- handlers: Gradio event handlers
- app: Blocks layout and the ``pixelrelay`` entry point
"""
