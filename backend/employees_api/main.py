"""
Employees API — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       error translation and pool lifecycle in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn employees_api.main:app) and by the tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────────────┐  │
    │  │  Req ID  │→│  Logging    │→│  CORS            │  │
    │  └──────────┘ └─────────────┘ └──────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌──────────┐ ┌──────────────┐   │
    │  │ /employees/... │ │ /health  │ │ /api-docs    │   │
    │  └────────────────┘ └──────────┘ └──────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Database→500  │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, build the connection pool (unless one was
              passed to create_app), store it on app.state.database
    Shutdown: dispose the pool (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from employees_api import __version__
from employees_api.config import settings
from employees_api.database import Database
from employees_api.exceptions import (
    DatabaseError,
    NoResultsError,
    NotFoundError,
)
from employees_api.middleware.logging import RequestLoggingMiddleware
from employees_api.middleware.request_id import RequestIDMiddleware, request_id_var
from employees_api.routes import employees, health
from employees_api.schemas.employee import REQUIRED_CREATE_FIELDS

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "Internal Server Error"}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before the pool is built.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn.access duplicates RequestLoggingMiddleware; SQL echo is DEBUG-only
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the pool on startup and release it on shutdown.

    A pool handed to create_app() is used as-is and left for its owner
    to dispose.
    """
    setup_logging()
    logger.info("Employees API %s starting up...", __version__)

    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database.from_settings(settings)

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("API docs: http://%s:%d/api-docs", settings.host, settings.port)

    yield

    logger.info("Employees API shutting down...")
    if owns_database:
        await app.state.database.dispose()
        app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _is_missing_required_field(request: Request, exc: RequestValidationError) -> bool:
    """
    True when a POST body lacks one of the required creation fields.

    Covers a missing body, an absent key, an explicit null and an empty
    string. Other body errors (wrong type on an optional field, malformed
    JSON) and all path errors are reported as a generic invalid request.
    """
    if request.method != "POST":
        return False
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if not loc or loc[0] != "body":
            continue
        if len(loc) == 1 and error.get("type") == "missing":
            return True
        if len(loc) == 2 and loc[1] in REQUIRED_CREATE_FIELDS:
            return True
    return False


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        RequestValidationError → 400 (schema rejected the request)
        NotFoundError          → 404 {"error": ...}
        NoResultsError         → 404 {"message": ...}
        DatabaseError          → 500 generic body
        Exception (fallback)   → 500 generic body

    Routes never catch these themselves.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        if _is_missing_required_field(request, exc):
            message = "Missing required fields"
        else:
            message = "Invalid request"
        logger.warning("[%s] %s: %s", rid, message, exc.errors())
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(NoResultsError)
    async def handle_no_results(request: Request, exc: NoResultsError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Full context is logged server-side; the client gets the generic body."""
        rid = request_id_var.get("")
        logger.error(
            "[%s] Database error on %s %s | Context: %s",
            rid,
            request.method,
            request.url.path,
            exc.context,
            exc_info=exc.__cause__ is not None,
        )
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: An already-built pool. When given, handlers use it from
            the first request on, without waiting for the lifespan to run.

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Employees API",
        description="CRUD over the Employees table, backed by parameterized SQL.",
        version=__version__,
        docs_url="/api-docs",      # Swagger UI
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(employees.router)
    app.include_router(health.router)

    return app


# uvicorn expects `employees_api.main:app` to be importable
app = create_app()
