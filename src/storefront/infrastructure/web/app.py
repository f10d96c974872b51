"""FastAPI application factory.

Every failure leaves the API in the same ``{"ok": false, "error": ...}``
shape. Business rejections carry their message; infrastructure failures
carry a generic one and are logged with the detail.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    StoreError,
    StoreUnavailableError,
    ValidationError,
)
from storefront.infrastructure import bootstrap
from storefront.infrastructure.bootstrap import Services
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.web.routes import admin_router, public_router

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response


def _error(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": message},
        headers=headers,
    )


def _describe(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid request: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(InsufficientStockError)
    async def insufficient_stock(request: Request, exc: InsufficientStockError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(EntityNotFoundError)
    async def not_found(request: Request, exc: EntityNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, _describe(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable(request: Request, exc: StoreUnavailableError):
        logger.error("%s %s - store unavailable: %s", request.method, request.url.path, exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database not connected")

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError):
        logger.error("%s %s - store error: %s", request.method, request.url.path, exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    """Build the API.

    Without ``services`` the process-wide ones from ``bootstrap`` are used,
    built on the first request that needs them.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Storefront API starting")
        if settings.seed_catalog:
            try:
                active = services or bootstrap.services()
            except StoreError:
                logger.exception("Store not available at startup")
            else:
                bootstrap.seed_catalog(active.product_repo)
        yield
        logger.info("Storefront API shutting down")

    app = FastAPI(
        title="Storefront",
        description="Internal employee ordering storefront",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    prefix = settings.api_prefix.rstrip("/")
    app.include_router(public_router, prefix=prefix)
    app.include_router(admin_router, prefix=prefix)
    return app
