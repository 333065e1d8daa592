"""VisionAI recolor service: FastAPI Application.

This module defines :func:`create_app`, the application factory, all REST
API routes, and the ``main()`` CLI function that launches the uvicorn
server.

Architecture
------------
The application follows a stateless REST pattern:

- **Configuration** is a :class:`~visionai.core.config.VisionAIConfig`
  built once by ``main()`` and passed into :func:`create_app`.  Nothing is
  read from module-level globals.
- **Image generation** is delegated to the vendor adapter selected by
  ``config.vendor``.  The route only calls ``adapter.generate``; it never
  looks at vendor response shapes.
- **Errors** are :class:`~visionai.core.errors.RecolorError` subclasses.
  One exception handler turns them into ``{"error": ...}`` with the right
  status, so every failure has the same JSON shape.
- **Static assets** are served by FastAPI's ``StaticFiles`` middleware and
  the landing page as a raw ``HTMLResponse``.

Request Lifecycle (``POST /api/recolor``)
-----------------------------------------
Validating -> Generating -> Responding.  Validation failures end in 400
without touching the vendor; vendor failures end in 500; success is 200
with ``{"imageDataURL": "data:<mime>;base64,..."}``.  One vendor call per
request, no retries.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/``                         Serve the landing page
GET       ``/api/health``               Version, vendor and model
POST      ``/api/recolor``              Recolor the masked region
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    visionai

Direct invocation::

    python -m visionai.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from visionai import __version__
from visionai.api.middleware import BodySizeLimitMiddleware
from visionai.api.models import ErrorResponse, HealthResponse, RecolorRequest, RecolorResponse
from visionai.api.validation import validate_recolor_request
from visionai.core.config import VisionAIConfig
from visionai.core.errors import ConfigurationError, GenerationFailedError, RecolorError
from visionai.core.vendor_adapters import VendorAdapterBase, vendor_registry

logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid field"},
    413: {"model": ErrorResponse, "description": "Request body too large"},
    500: {"model": ErrorResponse, "description": "Image generation failed"},
}


def create_app(
    config: VisionAIConfig,
    *,
    adapter: VendorAdapterBase | None = None,
    client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the FastAPI application for *config*.

    The vendor adapter is created inside the lifespan from
    ``vendor_registry`` using ``config.vendor``.  Tests and embedding
    applications may pass either a ready ``adapter`` or an ``httpx``
    ``client`` (e.g. one with a mock transport) for the registry-built
    adapter to use.  A client created here is closed on shutdown; an
    injected one is left to its owner.

    Args:
        config: Service configuration, built once at startup.
        adapter: Pre-built vendor adapter; skips the registry.
        client: HTTP client for the registry-built adapter.

    Returns:
        The configured application.

    Raises:
        ConfigurationError: If no adapter is injected and the selected
            vendor's API key is missing.
        KeyError: If ``config.vendor`` has no registered adapter.
    """
    if adapter is None:
        config.require_api_key()
        if vendor_registry.get_adapter_class(config.vendor) is None:
            available = ", ".join(vendor_registry.list_available())
            raise KeyError(f"Unknown vendor '{config.vendor}'. Available adapters: {available}")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Create the vendor adapter on startup, close the HTTP client on shutdown."""
        owned_client: httpx.AsyncClient | None = None

        # --- Startup -------------------------------------------------------
        if adapter is not None:
            app.state.adapter = adapter
        else:
            http_client = client
            if http_client is None:
                owned_client = httpx.AsyncClient(timeout=httpx.Timeout(config.request_timeout))
                http_client = owned_client
            app.state.adapter = vendor_registry.instantiate(config.vendor, config, http_client)

        info = app.state.adapter.get_adapter_info()
        logger.info(f"VisionAI {__version__} ready: vendor={info['name']}, model={info['model']}")

        yield  # Application runs here.

        # --- Shutdown ------------------------------------------------------
        if owned_client is not None:
            await owned_client.aclose()
            logger.info("Vendor HTTP client closed on shutdown.")

    app = FastAPI(
        title="VisionAI Recolor",
        description="Recolors the masked region of a photo through a multimodal generation API.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config

    # Added before CORS so that CORS stays outermost and 413s carry its headers.
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=config.max_body_bytes)

    # Allow cross-origin requests so the page can be hosted separately.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Serve CSS/JS for the landing page when the directory is present.
    if config.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(config.static_dir)), name="static")

    _register_exception_handlers(app)
    _register_routes(app)
    return app


# ---------------------------------------------------------------------------
# Error mapping.
# ---------------------------------------------------------------------------


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RecolorError)
    async def handle_recolor_error(request: Request, exc: RecolorError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed: {exc!r}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
            problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        message = "Invalid request body"
        if problems:
            message = f"{message}: {'; '.join(problems)}"
        logger.info(f"Rejected malformed request on {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


def _register_routes(app: FastAPI) -> None:
    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        """Serve the landing page.

        Raises:
            StarletteHTTPException: 404 if ``index.html`` is not found.
        """
        index_path = request.app.state.config.templates_dir / "index.html"
        if index_path.exists():
            return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
        raise StarletteHTTPException(status_code=404, detail="index.html not found")

    @app.get("/api/health", response_model=HealthResponse)
    async def health(request: Request) -> HealthResponse:
        adapter: VendorAdapterBase = request.app.state.adapter
        return HealthResponse(version=__version__, vendor=adapter.name, model=adapter.model)

    @app.post(
        "/api/recolor",
        response_model=RecolorResponse,
        responses=_ERROR_RESPONSES,
    )
    async def recolor(req: RecolorRequest, request: Request) -> RecolorResponse:
        """Recolor the masked region of the original image.

        This endpoint:

        1. Validates that all three fields are present and both images are
           base64 data URLs (400 otherwise, no vendor call).
        2. Hands the job to the configured vendor adapter.
        3. Returns the generated image as a data URL.

        Args:
            req: Parsed :class:`RecolorRequest` payload.
            request: The incoming request (for ``app.state``).

        Returns:
            :class:`RecolorResponse` serialised as ``{"imageDataURL": ...}``.

        Raises:
            MissingFieldError: 400, a field is missing or blank.
            InvalidImageError: 400, an image is not a base64 data URL.
            GenerationFailedError: 500, the vendor failed or sent no image.
        """
        job = validate_recolor_request(req)
        adapter: VendorAdapterBase = request.app.state.adapter

        logger.info(
            f"Recolor request: color={job.target_color!r}, "
            f"original={job.original.mime_type} ({len(job.original.payload)} chars), "
            f"mask={job.mask.mime_type} ({len(job.mask.payload)} chars)"
        )

        try:
            image_data_url = await adapter.generate(job.original, job.mask, job.target_color)
        except RecolorError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error during recolor: {e}", exc_info=True)
            raise GenerationFailedError("Internal server error") from e

        return RecolorResponse(image_data_url=image_data_url)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Builds the single :class:`VisionAIConfig` for the process, exits with
    status 1 if the selected vendor's API key is missing, and serves the
    application on ``server_host``/``server_port`` (``PORT`` is honoured).

    This function is registered as the ``visionai`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    config = VisionAIConfig()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = create_app(config)
    except ConfigurationError as e:
        logger.critical(f"Startup aborted: {e}")
        raise SystemExit(1) from e

    logger.info(f"Listening on {config.server_host}:{config.server_port}")
    uvicorn.run(
        app,
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level,
    )


if __name__ == "__main__":
    main()
