"""Proxy FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from core.config import settings
from core.exceptions import TransportError
from core.logging import setup_logging
from proxy.dependencies import close_http_client
from proxy.routes import router as users_router

logger = structlog.get_logger()

setup_logging()

INTERNAL_ERROR_BODY = {"message": "Internal server error"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the outbound client on shutdown."""
    logger.info("proxy_started", upstream=settings.user_service_url)
    try:
        yield
    finally:
        await close_http_client()


def setup_proxy_exception_handlers(app: FastAPI) -> None:
    """Render proxy-level failures with the fixed internal-error body."""

    @app.exception_handler(TransportError)
    async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "proxy_unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=True,
        )
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


def create_proxy_app() -> FastAPI:
    """Create and configure the proxy application."""
    app = FastAPI(
        lifespan=lifespan,
        title=f"{settings.app_name} proxy",
        version="1.0.0",
        debug=settings.debug,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    setup_proxy_exception_handlers(app)
    app.include_router(users_router, prefix="/api")

    return app


app = create_proxy_app()
