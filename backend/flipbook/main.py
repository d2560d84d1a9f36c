"""
Flipbook Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn flipbook.main:app) or the `flipbook-backend`
       console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                     FastAPI App                         │
    │                                                         │
    │  Middleware Chain:                                      │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐    │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│ CORS │    │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘    │
    │                                                         │
    │  Routes:                                                │
    │  /api/images  /api/search  /api/analytics               │
    │  /api/bookmarks  /api/projects  /health                 │
    │                                                         │
    │  Exception Handlers:                                    │
    │  ValidationError→400 │ NotFound→404 │ Storage→500       │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration
    3. Connect to MongoDB and ping (failure aborts startup)
    4. Ensure indexes

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from flipbook import __version__
from flipbook.config import settings
from flipbook.database import ensure_indexes, mongodb
from flipbook.exceptions import (
    FlipbookError,
    ValidationError,
    NotFoundError,
    StorageError,
)
from flipbook.middleware.request_id import RequestIDMiddleware, request_id_var
from flipbook.middleware.logging import RequestLoggingMiddleware
from flipbook.routes import analytics, bookmarks, health, images, projects

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before anything else logs.
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

    # Per-operation driver chatter
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("motor").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, config check, MongoDB connection, indexes.
    Shutdown: close the MongoDB client.

    A MongoDB connection failure is fatal: it is logged and re-raised, and
    uvicorn exits instead of serving requests without a store.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Flipbook Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    try:
        await mongodb.connect()
        await ensure_indexes(mongodb.database)
    except PyMongoError as e:
        logger.critical("Failed to connect to MongoDB: %s", e)
        await mongodb.disconnect()
        raise

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("Sharing endpoints available at /api/projects")
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Flipbook Backend shutting down...")
    await mongodb.disconnect()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Every error leaves the API in this one body shape (ErrorResponse)."""
    content: Dict[str, Any] = {"error": error, "message": message}
    if details:
        content["details"] = details
    content["request_id"] = request_id_var.get("")
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy (most specific class wins):
        ValidationError         → 400
        RequestValidationError  → 400, FastAPI's 422 remapped
        NotFoundError           → 404
        StorageError            → 500, details.reason only when set
        FlipbookError           → 500
        Exception               → 500, stack trace logged
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # Malformed JSON, missing fields, wrong types
        errors = jsonable_encoder(exc.errors())
        logger.warning(
            "[%s] %s %s rejected: %d invalid field(s)",
            request_id_var.get(""),
            request.method,
            request.url.path,
            len(errors),
        )
        return error_response(
            400,
            "validation_error",
            "Request is missing required fields or has invalid values",
            {"errors": errors},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(
            "[%s] Storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        details = {"reason": exc.reason} if exc.reason else None
        return error_response(500, "server_error", exc.message, details)

    @app.exception_handler(FlipbookError)
    async def handle_flipbook_error(request: Request, exc: FlipbookError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unhandled %s on %s %s",
            request_id_var.get(""),
            type(exc).__name__,
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers."""
    app = FastAPI(
        title="Flipbook API",
        description=(
            "Backend for the flipbook image-sharing app: page images with overlays "
            "and metadata, view analytics, bookmarks, and shareable projects."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(images.router)
    app.include_router(analytics.router)
    app.include_router(bookmarks.router)
    app.include_router(projects.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve on HOST:PORT from the environment."""
    uvicorn.run(
        "flipbook.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
