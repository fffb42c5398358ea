"""PixelRelay - FastAPI proxy application.

This module defines the FastAPI ``app`` instance, the proxy routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The proxy is a stateless relay:

- **Configuration** is re-read on every request through the
  :func:`get_settings` dependency, so the upstream credential comes from the
  process environment at invocation time.
- **Upstream calls** go through an ``httpx.AsyncClient`` supplied by the
  :func:`get_http_client` dependency (tests override it with a mock
  transport).
- **Every response is JSON.** Routing errors (404, 405) and unexpected
  exceptions are rendered as ``{"error": "<message>"}`` by the exception
  handlers below, because callers parse the body unconditionally.

Endpoints
---------
========  ====================  ========================================
Method    Path                  Purpose
========  ====================  ========================================
POST      ``/api/generate``     Forward a generation request upstream
GET       ``/api/config``       Form choices and client rate limit
GET       ``/api/health``       Liveness probe
========  ====================  ========================================

Usage
-----
CLI (installed entry point)::

    pixelrelay-proxy

Direct invocation::

    python -m pixelrelay.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pixelrelay import __version__
from pixelrelay.api.forwarder import forward_generation
from pixelrelay.api.models import ErrorResponse, OptionsResponse
from pixelrelay.core.config import PixelRelayConfig, config, load_config
from pixelrelay.core.errors import PixelRelayError
from pixelrelay.core.models import IMAGE_COUNTS, MODELS, SIZES

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="PixelRelay",
    description="Credential-injecting proxy for a hosted image generation API.",
    version=__version__,
)


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_settings() -> PixelRelayConfig:
    """Read configuration for the current request."""
    return load_config()


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Yield an httpx client for a single upstream call."""
    async with httpx.AsyncClient() as client:
        yield client


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    """Build the structured ``{"error": message}`` response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# ---------------------------------------------------------------------------
# Exception handlers - keep every response body JSON.
# ---------------------------------------------------------------------------


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors such as 405 Method Not Allowed as ``{"error": ...}``."""
    response = error_response(str(exc.detail), status_code=exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the fault and answer with a JSON 500."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response(str(exc) or "Internal Server Error")


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post(
    "/api/generate",
    responses={405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate(
    request: Request,
    settings: PixelRelayConfig = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Forward a generation request to the upstream API.

    The body is parsed as JSON and the generation fields (``model``,
    ``prompt``, ``num_images``, ``size``) are forwarded verbatim with the
    server-held credential attached as a bearer token.

    Args:
        request: Incoming request; its body must be a JSON object.
        settings: Configuration read for this invocation.
        client: httpx client for the upstream call.

    Returns:
        The upstream JSON body with status 200, or ``{"error": message}``
        with status 500 when anything fails (missing credential, upstream
        error, unreadable body, network failure).
    """
    try:
        body = await request.json()
        data = await forward_generation(body, settings, client)
    except PixelRelayError as e:
        logger.error(f"Proxy forwarder error: {e}")
        return error_response(str(e))
    except Exception as e:
        logger.error(f"Proxy forwarder error: {e}", exc_info=True)
        return error_response(str(e) or e.__class__.__name__)

    return JSONResponse(status_code=200, content=data)


@app.get("/api/config", response_model=OptionsResponse)
async def get_options() -> OptionsResponse:
    """Return the choices offered by the form and the client rate limit."""
    return OptionsResponse(
        version=__version__,
        models=MODELS,
        sizes=SIZES,
        image_counts=IMAGE_COUNTS,
        rate_limit_requests=config.rate_limit_requests,
        rate_limit_window_seconds=config.rate_limit_window_seconds,
    )


@app.get("/api/health")
async def health() -> dict:
    """Liveness probe."""
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~pixelrelay.core.config.config` (which
    loads from ``PIXELRELAY_SERVER_HOST`` and ``PIXELRELAY_SERVER_PORT``
    environment variables). Defaults to ``0.0.0.0:8888``.

    This function is registered as the ``pixelrelay-proxy`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    uvicorn.run(
        "pixelrelay.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
