"""
Aid Board Backend - FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       the lifespan owns configuration, the connection pool and migrations.
Who:   uvicorn (`uvicorn aidboard.main:app`) or run() / `python -m aidboard`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access Log → CORS (*)    │
    │                                                     │
    │  Routes:                                            │
    │   GET /health                                       │
    │   GET|POST /todos                                   │
    │   GET|POST /api/requests                            │
    │   PATCH /api/requests/{id}/status                   │
    │                                                     │
    │  Exception Handlers:                                │
    │   DatabaseError → 500 │ Exception → 500             │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Load configuration (missing DATABASE_URL aborts startup)
    2. Configure logging from LOG_LEVEL
    3. Build the connection pool (Database); an unreachable store aborts startup
    4. Attach the pool to app.state
    5. Apply migrations (failure is a warning)
    6. Log the listening address

    Shutdown:
    1. Dispose the connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aidboard import __version__
from aidboard.config import Settings, get_settings
from aidboard.database import Database
from aidboard.exceptions import ConfigurationError, DatabaseError
from aidboard.middleware.logging import RequestLoggingMiddleware
from aidboard.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from aidboard.routes import health, requests, todos
from aidboard.schema_init import apply_migrations

logger = logging.getLogger(__name__)

# Third-party loggers quieted to WARNING unless LOG_LEVEL names them.
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "sqlalchemy.pool")


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger from the LOG_LEVEL filter expression.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s

    The request ID comes from RequestIDLogFilter; records logged outside a
    request show "-".

    "info,sqlalchemy.engine=debug" sets the root logger to INFO and the
    SQLAlchemy engine logger to DEBUG (which logs every statement).
    """
    default_level, overrides = settings.log_filter

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=default_level,
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    for name in NOISY_LOGGERS:
        if name not in overrides:
            logging.getLogger(name).setLevel(max(default_level, logging.WARNING))

    for name, level in overrides.items():
        logging.getLogger(name).setLevel(level)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

        DatabaseError        → 500 server_error
        Exception (fallback) → 500 internal_server_error

    Neither response carries internal details. A DatabaseError has already
    been logged with its traceback by the service that raised it, so the
    handler only records which request it ended.
    Request validation errors keep FastAPI's own 422 handler.
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.warning("Answered 500 for database error: %s", exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "internal server error",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("Unexpected error: %s", str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "internal server error",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; loaded from the environment at
                  startup when omitted. Nothing is read at import time.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        try:
            active = settings if settings is not None else get_settings()
        except ConfigurationError as e:
            logger.critical("%s", e.message)
            raise

        setup_logging(active)
        logger.info("Aid Board backend %s starting up...", __version__)

        database = Database.from_settings(active)
        try:
            await database.check_connection()
        except DatabaseError as e:
            logger.critical("%s Context: %s", e.message, e.context)
            await database.dispose()
            raise

        app.state.database = database
        await apply_migrations(database, active.migrations_dir)

        logger.info("Listening on http://%s:%d", active.backend_host, active.backend_port)

        try:
            yield
        finally:
            logger.info("Shutting down...")
            await database.dispose()
            logger.info("Shutdown complete.")

    app = FastAPI(
        title="Aid Board API",
        description="Todos and citizen service requests for the mutual-aid board.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → CORS → routes.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(todos.router)
    app.include_router(requests.router)

    return app


app = create_app()


def run() -> None:
    """
    Console entry point: load configuration, then serve with uvicorn.

    Exits with status 1 and a descriptive message when configuration is
    missing or invalid.
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logging.basicConfig(format="%(levelname)s: %(message)s")
        logger.critical("%s", e.message)
        sys.exit(1)

    setup_logging(settings)
    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        log_config=None,
    )
