"""
Copenhagen Beaches Proxy — FastAPI Application Factory
=======================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging setup, middleware registration, route mounting,
       and exception handling in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Logging        │→│ CORS Headers │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ GET|OPTIONS /api/copenhagen- │ │ GET /health  │  │
    │  │             beaches          │ │              │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ UpstreamError→500 │ MethodNotAllowed→405     │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import MethodNotAllowedError, UpstreamError
from app.middleware.cors import CORS_HEADERS, CORSHeadersMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import beaches, health
from app.schemas.beach import FailureResponse, MethodNotAllowedResponse

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by the container runtime / hosting platform)
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # httpx logs every request at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and log the effective upstream settings.
    Shutdown: log only; there are no pooled resources to release.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Copenhagen Beaches Proxy %s starting up...", __version__)
    logger.info(
        "Upstream: %s (timeout %.0fs), municipality: %s",
        settings.upstream_url,
        settings.upstream_timeout,
        settings.municipality,
    )
    logger.info(
        "Serving %s at http://%s:%d",
        settings.beaches_path,
        settings.backend_host,
        settings.backend_port,
    )
    logger.info("=" * 60)

    yield

    logger.info("Copenhagen Beaches Proxy shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def method_not_allowed_response() -> JSONResponse:
    return JSONResponse(
        status_code=405,
        content=MethodNotAllowedResponse().model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        UpstreamError              → 500 failure envelope
        MethodNotAllowedError      → 405 method-not-allowed body
        StarletteHTTPException 405 → 405 method-not-allowed body
        StarletteHTTPException     → FastAPI default
        Exception (fallback)       → 500 failure envelope, CORS set here

    The fallback runs outside the middleware stack, which is why it adds
    CORS_HEADERS itself.
    """

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        """Any fetch/parse/process failure: one status, the message tells them apart."""
        rid = request_id_var.get("")
        logger.error(
            "[%s] Error fetching beach data: %s | Context: %s",
            rid,
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=FailureResponse(message=exc.message).model_dump(),
        )

    @app.exception_handler(MethodNotAllowedError)
    async def handle_method_not_allowed(request: Request, exc: MethodNotAllowedError):
        rid = request_id_var.get("")
        logger.warning("[%s] Rejected %s %s", rid, request.method, request.url.path)
        return method_not_allowed_response()

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Reshapes the router's own 405 so every route answers it the same way."""
        if exc.status_code == 405:
            return method_not_allowed_response()
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Stack trace is logged server-side only; the client gets the failure
        envelope with a generic message.
        """
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=FailureResponse(message="An unexpected error occurred").model_dump(),
            headers=CORS_HEADERS,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Copenhagen Beaches Proxy",
        description=(
            "Proxies the Danish beach-status dataset from api.badevand.dk, "
            "filtered to København, for embedded display clients."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS Headers → route
    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(beaches.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
