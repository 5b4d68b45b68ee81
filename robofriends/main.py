"""
RoboFriends — FastAPI Application Factory
===========================================

What:  Creates and configures the Directory Service FastAPI application.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn robofriends.main:app) or python -m robofriends.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌─────┐  │
    │  │  Req ID  │→│  Logging        │→│ GZip │→│CORS │  │
    │  └──────────┘ └─────────────────┘ └──────┘ └─────┘  │
    │                                                     │
    │  Routes:                                            │
    │  GET /api/robots          GET /                     │
    │  GET /api/robots/check-phone/{phone}  GET /health   │
    │  POST /api/robots                                   │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400{msg} │ Duplicate→400{msg} │         │
    │  Database→500{error} │ Exception→500{error}         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, optional schema creation
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from robofriends import __version__
from robofriends.config import settings
from robofriends.database import create_schema, dispose_engine
from robofriends.exceptions import (
    MISSING_FIELDS_MESSAGE,
    DatabaseError,
    DuplicateRobotError,
    ValidationError,
)
from robofriends.middleware.logging import RequestLoggingMiddleware
from robofriends.middleware.request_id import RequestIDMiddleware, request_id_var
from robofriends.routes import health, robots

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An unexpected server error occurred."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Create the robots table if configured and missing
    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("RoboFriends backend %s starting up...", __version__)

    if settings.auto_create_schema:
        try:
            await create_schema()
            logger.info("Robots store schema ready.")
        except Exception as e:
            # Keep serving: /health reports the store as disconnected and
            # robot routes answer 500 until the store is reachable.
            logger.error("Database connection error: %s", str(e))

    logger.info("Server is running on port %d", settings.port)
    logger.info("=" * 60)

    yield

    logger.info("RoboFriends backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for the wire error shapes.

    Handler hierarchy:
        ValidationError         → 400 {"msg", "code": "validation_error"}
        RequestValidationError  → 400 {"msg", "code": "validation_error"}
        DuplicateRobotError     → 400 {"msg", "code": "duplicate_robot"}
        DatabaseError           → 500 {"error"}
        Exception (fallback)    → 500 {"error"}

    Handlers never expose driver messages or stack traces; those are logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=400,
            content={"msg": exc.message, "code": "validation_error", "request_id": rid},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_body(request: Request, exc: RequestValidationError):
        """Body was not a JSON object or a field was not a string."""
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request body: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"msg": MISSING_FIELDS_MESSAGE, "code": "validation_error", "request_id": rid},
        )

    @app.exception_handler(DuplicateRobotError)
    async def handle_duplicate(request: Request, exc: DuplicateRobotError):
        rid = request_id_var.get("")
        logger.warning("[%s] Duplicate robot: %s", rid, exc.context)
        return JSONResponse(
            status_code=400,
            content={"msg": exc.message, "code": "duplicate_robot", "request_id": rid},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the stack trace is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_SERVER_ERROR, "request_id": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in REVERSE order of addition, so the request ID is
    assigned before the access log line is written.
    """
    app = FastAPI(
        title="RoboFriends API",
        description="Directory of generated robot profiles: list, search support and creation.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in origins,
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
    app.include_router(robots.router)
    app.include_router(health.router)

    return app


# uvicorn expects `robofriends.main:app` to be importable
app = create_app()
