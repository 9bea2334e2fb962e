"""FastAPI application factory.

Main entry point for the SAR training tracker Web API. Run with:

    uvicorn --factory sartrack.web.api:create_app
"""

from __future__ import annotations

import secrets
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path
from typing import AsyncGenerator

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sartrack import __version__
from sartrack.config.app_config import AppConfig, load_app_config
from sartrack.core.auth import TokenService
from sartrack.db.database import init_db
from sartrack.errors import AuthenticationError, SarTrackError, StorageError
from sartrack.web.dependencies import require_user_if_enabled
from sartrack.web.routes import (
    auth_router,
    behaviors_router,
    dogs_router,
    exercises_router,
    health_router,
    links_router,
    sessions_router,
    skills_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    config: AppConfig = app.state.config
    logger.info(
        "api_startup",
        version=__version__,
        db_path=str(Path(config.database.path).absolute()),
        auth_required=config.auth.required,
    )
    yield
    logger.info("api_shutdown")


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _create_token_service(config: AppConfig) -> TokenService:
    secret = config.auth.secret
    if not secret:
        secret = secrets.token_urlsafe(32)
        # Tokens issued with this secret die with the process
        logger.warning("auth.ephemeral_secret", hint="set SARTRACK_AUTH_SECRET")
    return TokenService(secret, ttl=timedelta(hours=config.auth.token_ttl_hours))


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SarTrackError)
    async def domain_error_handler(request: Request, exc: SarTrackError) -> JSONResponse:
        if isinstance(exc, StorageError):
            logger.error(
                "request.storage_error",
                path=request.url.path,
                method=request.method,
                error=exc.message,
            )
            return _error_response(exc.status_code, "internal storage error")

        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return _error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        else:
            message = "invalid request"
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "request.unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config. Loaded from file/environment when None.

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    init_db(Path(config.database.path), busy_timeout=config.database.busy_timeout)

    app = FastAPI(
        title="SAR Training Tracker API",
        description="Record-keeping API for search-and-rescue dog training",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.token_service = _create_token_service(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    guarded = [Depends(require_user_if_enabled)]

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(skills_router, dependencies=guarded)
    app.include_router(behaviors_router, dependencies=guarded)
    app.include_router(exercises_router, dependencies=guarded)
    app.include_router(links_router, dependencies=guarded)
    app.include_router(dogs_router, dependencies=guarded)
    app.include_router(sessions_router, dependencies=guarded)

    return app
