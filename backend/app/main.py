"""
StudySphere Backend: FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the module-level `app` is what uvicorn serves (uvicorn app.main:app).

Application Layout:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │    /api/lessons   /api/search   /api/orders         │
    │    /images/{filename}           /health             │
    │                                                     │
    │  Exception Handlers:                                │
    │    Validation→400  NotFound→404  Conflict→409       │
    │    Database→500    anything else→500                │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate settings, log where we listen
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    StudySphereError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.responses import PrettyJSONResponse
from app.routes import health, images, lessons, orders, search

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout
    so container runtimes collect it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("StudySphere Backend %s starting up...", __version__)

    # Keep serving on bad config: health checks and the JSON errors
    # report the problem better than a crash loop does
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Serving lesson images from %s", settings.images_dir)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("StudySphere Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: dict | None = None) -> dict:
    body = {"error": error, "message": message}
    if details:
        body["details"] = details
    body["request_id"] = request_id_var.get("")
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

        ValidationError   → 400
        NotFoundError     → 404
        ConflictError     → 409
        DatabaseError     → 500 (generic message, context logged only)
        StudySphereError  → 500
        Exception         → 500 (stack trace logged only)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return PrettyJSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PrettyJSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return PrettyJSONResponse(
            status_code=409,
            content=_error_body("conflict", exc.message, exc.context),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return PrettyJSONResponse(
            status_code=500,
            content=_error_body(
                "server_error",
                "An internal error occurred. Please try again later.",
            ),
        )

    @app.exception_handler(StudySphereError)
    async def handle_app_error(request: Request, exc: StudySphereError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return PrettyJSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PrettyJSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers into an app."""
    app = FastAPI(
        title="StudySphere API",
        description=(
            "Backend for the StudySphere tutoring marketplace: lesson catalog, "
            "search, orders and lesson images."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=PrettyJSONResponse,
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → GZip → CORS → route
    cors_origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        # Browsers refuse credentialed responses with a wildcard origin
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(lessons.router)
    app.include_router(search.router)
    app.include_router(orders.router)
    app.include_router(images.router)
    app.include_router(health.router)

    return app


app = create_app()
