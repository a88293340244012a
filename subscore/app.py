"""FastAPI application factory — entry point for the API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from subscore.config import get_settings
from subscore.constants import CORS_ALLOWED_METHODS
from subscore.errors import InternalFailure, SubscoreError, ValidationFailed
from subscore.routers import categories, diagnostics, subscriptions, users
from subscore.services.auth_service import authenticate_request
from subscore.services.identity_service import build_identity_extractor
from subscore.utils import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    # Auto-create tables for SQLite (dev mode); PostgreSQL uses Alembic
    from subscore.db.session import engine, is_sqlite
    from subscore.models import Base

    settings = get_settings()
    if is_sqlite(settings.database_url):
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, verbose=settings.debug)

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.identity_extractor = build_identity_extractor(settings)

    # --- Middleware (last added runs first: CORS wraps authentication) ---
    app.middleware("http")(authenticate_request)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=["*"],
    )

    # --- Error handlers ---
    @app.exception_handler(SubscoreError)
    async def subscore_error_handler(request: Request, exc: SubscoreError):
        return JSONResponse({"detail": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            {"detail": jsonable_encoder(exc.errors())}, status_code=ValidationFailed.status_code
        )

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        failure = InternalFailure()
        return JSONResponse({"detail": failure.message}, status_code=failure.status_code)

    # --- Routers ---
    app.include_router(users.router)
    app.include_router(categories.router)
    app.include_router(subscriptions.router)
    app.include_router(diagnostics.router)

    return app


app = create_app()
