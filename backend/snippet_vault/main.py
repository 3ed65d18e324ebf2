"""
Snippet Vault Backend - FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       bound to one MongoConnection.
Who:   uvicorn (`uvicorn snippet_vault.main:app`) and the console entry point.
When:  Once at server startup; the returned app handles all later requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Logging        │→│    CORS      │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────────┐ ┌────────────┐  │
    │  │ GET/POST     │ │ DELETE        │ │ GET /health│  │
    │  │ /snippets    │ │ /snippets/{id}│ │ GET /      │  │
    │  └──────────────┘ └───────────────┘ └────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation/InvalidId→400 │ NotFound→404 │ DB→503   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate configuration (missing MONGO_URI aborts startup)
    3. Connect to MongoDB and ping (failure aborts startup)

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from snippet_vault import __version__
from snippet_vault.config import Settings, settings as default_settings
from snippet_vault.database import MongoConnection
from snippet_vault.exceptions import (
    InvalidIdentifierError,
    NotFoundError,
    SnippetVaultError,
    StorageUnavailableError,
    ValidationError,
)
from snippet_vault.middleware.logging import RequestLoggingMiddleware
from snippet_vault.middleware.request_id import RequestIDMiddleware, request_id_var
from snippet_vault.routes import health, snippets
from snippet_vault.services.snippet_repository import REQUIRED_FIELDS_MESSAGE

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-command and per-request chatter from the driver and server
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("motor").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect to MongoDB before serving and disconnect afterwards.

    Any exception raised before `yield` aborts startup: uvicorn logs
    "Application startup failed" and the process exits non-zero. There is no
    partially-initialized mode.
    """
    app_settings: Settings = app.state.settings
    connection: MongoConnection = app.state.connection

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("Snippet Vault Backend %s starting up...", __version__)

    try:
        app_settings.validate_required()
    except ValueError as e:
        logger.critical("%s", e)
        raise

    try:
        await connection.connect()
    except StorageUnavailableError as e:
        logger.critical("MongoDB connection error: %s | Context: %s", e.message, e.context)
        raise

    logger.info("Server running on http://%s:%d", app_settings.host, app_settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Snippet Vault Backend shutting down...")
    await connection.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and error bodies.

    Handler table:
        ValidationError          → 400 (repository field validation)
        RequestValidationError   → 400 (malformed JSON or wrong field types)
        InvalidIdentifierError   → 400
        NotFoundError            → 404
        StorageUnavailableError  → 503
        SnippetVaultError (base) → 500
        Exception (fallback)     → 500, stack trace logged server-side only

    Client errors (4xx) are not logged here; the access log already records
    them at WARNING.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        fields = [
            err["loc"][-1]
            for err in exc.errors()
            if len(err.get("loc", ())) > 1 and isinstance(err["loc"][-1], str)
        ]
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                REQUIRED_FIELDS_MESSAGE,
                {"fields": fields} if fields else None,
            ),
        )

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        return JSONResponse(
            status_code=400,
            content=_error_body("invalid_identifier", exc.message),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(StorageUnavailableError)
    async def handle_storage_unavailable(request: Request, exc: StorageUnavailableError):
        logger.error(
            "[%s] Storage unavailable: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=503,
            content=_error_body("service_unavailable", exc.message),
        )

    @app.exception_handler(SnippetVaultError)
    async def handle_app_error(request: Request, exc: SnippetVaultError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "server_error", "An internal error occurred. Please try again later."
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error on %s %s: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            str(exc),
            exc_info=exc,
        )
        # Runs in ServerErrorMiddleware, outside RequestIDMiddleware
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
            headers={"X-Request-ID": request_id_var.get("")},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    connection: Optional[MongoConnection] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the module singleton)
        connection:   MongoConnection to inject; built from settings if omitted.
                      Tests pass an already-connected double here.

    Returns:
        Fully configured FastAPI instance. The connection is reachable as
        `app.state.connection`.
    """
    app_settings = app_settings or default_settings
    if connection is None:
        connection = MongoConnection.from_settings(app_settings)

    app = FastAPI(
        title="Snippet Vault API",
        description="Store, list and delete short code snippets.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.connection = connection

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(snippets.router)

    return app


# uvicorn expects `snippet_vault.main:app` to be importable
app = create_app()
