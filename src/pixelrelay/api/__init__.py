"""PixelRelay - FastAPI proxy layer.

Modules
-------
main
    FastAPI application with the route handlers and the ``main()`` CLI
    entry point.
forwarder
    Upstream call and error normalisation for ``POST /api/generate``.
models
    Pydantic models for the proxy's error and configuration responses.
"""
