"""TeamsBot - FastAPI Application

This module creates and configures the FastAPI application hosting the
Avengers messaging extension.
"""

import traceback
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.health import router as health_router
from .api.messages import router as messages_router
from .core.config import get_settings_instance
from .core.exceptions import DataSourceError, TeamsBotException
from .core.logging import get_logger, setup_logging
from .core.middleware import RequestIDMiddleware, TimingMiddleware
from .extension.contracts import assert_extension_contract
from .extension.handler import get_extension_handler
from .manifest import EXTENSION_MANIFEST

logger = get_logger(__name__)


def generate_error_id() -> str:
    """Generate a unique error ID for tracking."""
    return f"ERR-{uuid.uuid4().hex[:8].upper()}"


def get_request_context(request: Request) -> dict[str, Any]:
    """Extract relevant context from request for error logging."""
    return {
        "method": request.method,
        "path": request.url.path,
        "client": request.client.host if request.client else None,
        "request_id": getattr(request.state, "request_id", None),
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    settings = get_settings_instance()

    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Version: {settings.version}")
    logger.info(f"Environment: {settings.environment}")

    handler = get_extension_handler()
    assert_extension_contract(EXTENSION_MANIFEST, handler.registry)
    logger.info("Extension contract verified", extra={"commands": ",".join(handler.registry.command_ids())})

    if settings.preload_store:
        try:
            await handler.store.preload()
        except DataSourceError as e:
            # Queries keep failing with the same error until the source is fixed
            logger.error("Record store preload failed", extra={"reason": e.message})

    yield

    logger.info(f"{settings.app_name} shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings_instance()
    app = FastAPI(
        title=settings.app_name,
        description="Avengers messaging extension",
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app)
    setup_exception_handlers(app)
    setup_routes(app)

    logger.info("TeamsBot FastAPI application created successfully")
    return app


def setup_middleware(app: FastAPI) -> None:
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(TimingMiddleware)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers that turn exceptions into ``{"error": {...}}`` bodies.

    Server errors (5xx) get an error id and are logged at ERROR; client
    errors are logged at WARNING.
    """
    settings = get_settings_instance()

    @app.exception_handler(TeamsBotException)
    async def teamsbot_exception_handler(request: Request, exc: TeamsBotException):
        error_id = generate_error_id() if exc.status_code >= 500 else None

        if exc.status_code >= 500:
            logger.error(
                "TeamsBot server error",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code,
                    "error_message": exc.message,
                    "details": exc.details,
                    "request_context": get_request_context(request),
                },
            )
        else:
            logger.warning(
                "TeamsBot client error",
                extra={
                    "error_code": exc.error_code,
                    "error_message": exc.message,
                    "details": exc.details,
                    "request_context": get_request_context(request),
                },
            )

        error_response = {
            "error": {
                "code": exc.error_code,
                "message": exc.message,
                "details": exc.details,
            }
        }
        if error_id:
            error_response["error"]["error_id"] = error_id

        return JSONResponse(status_code=exc.status_code, content=error_response)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Request validation error",
            extra={"errors": str(exc.errors())[:200], "request_context": get_request_context(request)},
        )
        return JSONResponse(
            status_code=422,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request body is not a valid activity",
                    "details": {"errors": jsonable_errors(exc)},
                }
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "HTTP client error",
            extra={"status_code": exc.status_code, "detail": exc.detail, "request_context": get_request_context(request)},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"code": f"HTTP_{exc.status_code}", "message": exc.detail, "details": {}}},
            headers=getattr(exc, "headers", None) or None,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        error_id = generate_error_id()
        include_traceback = settings.debug or settings.log_level == "DEBUG"

        logger.error(
            "Unhandled exception",
            extra={
                "error_id": error_id,
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "request_context": get_request_context(request),
            },
            exc_info=include_traceback,
        )

        error_response: dict[str, Any] = {
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "Internal server error",
                "error_id": error_id,
                "details": {},
            }
        }
        if include_traceback:
            error_response["error"]["details"] = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exc().split("\n"),
            }

        return JSONResponse(status_code=500, content=error_response)


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [{"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg")} for err in exc.errors()]


def setup_routes(app: FastAPI) -> None:
    settings = get_settings_instance()
    app.include_router(messages_router, prefix=settings.api_prefix)
    app.include_router(health_router, prefix=settings.api_prefix)


# Configure logging before app instantiation; lifespan's call is a no-op
setup_logging()

app = create_app()
