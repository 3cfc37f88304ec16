"""
jobly.api.app

FastAPI app factory for the Jobly service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Build the process-wide password hasher and token codec from settings.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Render every application error as `{"error": {"message", "status"}}`.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from jobly import __version__
from jobly.api.routers.auth import router as auth_router
from jobly.api.routers.companies import router as companies_router
from jobly.api.routers.health import router as health_router
from jobly.api.routers.jobs import router as jobs_router
from jobly.api.routers.users import router as users_router
from jobly.auth.gate import BearerTokenGate
from jobly.auth.passwords import PasswordHasher
from jobly.auth.tokens import TokenCodec
from jobly.db.init_db import init_db
from jobly.db.session import create_engine, create_sessionmaker
from jobly.errors import JoblyError
from jobly.observability.logging import configure_logging, get_logger
from jobly.observability.middleware import RequestContextMiddleware
from jobly.settings import Settings

log = get_logger(__name__)


def _error_response(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"message": message, "status": status}})


def _token_codec(settings: Settings) -> TokenCodec:
    ttl = (
        timedelta(minutes=settings.token_ttl_minutes)
        if settings.token_ttl_minutes is not None
        else None
    )
    return TokenCodec(secret=settings.jwt_secret, alg=settings.jwt_alg, ttl=ttl)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(JoblyError)
    async def _jobly_error(_: Request, exc: JoblyError) -> JSONResponse:
        log.info("request.failed", status=exc.status_code, error=exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        messages = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        return _error_response(HTTP_400_BAD_REQUEST, "; ".join(messages))

    @app.exception_handler(Exception)
    async def _unhandled(_: Request, exc: Exception) -> JSONResponse:
        log.exception("request.unhandled_error")
        return _error_response(HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    codec = _token_codec(settings)
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, version=__version__)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schemas are managed outside the service.
            await init_db(engine)
        # First unknown-user login must not pay for computing the decoy digest.
        await asyncio.to_thread(lambda: hasher.decoy_digest)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Jobly",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.password_hasher = hasher
    app.state.token_codec = codec

    # Starlette runs the last-added middleware first: request context, then the gate.
    app.add_middleware(BearerTokenGate, codec=codec)
    app.add_middleware(RequestContextMiddleware)

    _register_error_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(companies_router)
    app.include_router(jobs_router)
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is the only place where errors become wire responses and where the
# signing secret and hashing cost are turned into live objects.
