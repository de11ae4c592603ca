"""
Middleware components for the Journal API.

Security headers, request logging, CORS handling and the lifespan event
handler for startup and shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from journal.configs import settings
from journal.db import close_db, init_db
from journal.monitoring import bind_request_id, clear_context, configure_logging, get_logger
from journal.utils.helpers import get_summary, host

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown."""
    configure_logging()
    if settings.ENVIRONMENT == "development":
        install(show_locals=False)

    logger.info("Starting application", app=app.title, environment=settings.ENVIRONMENT)
    try:
        # Tables are created on the fly only outside production; use Alembic there.
        if settings.ENVIRONMENT != "production":
            await init_db()
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info("Shutting down application", app=app.title)
    await close_db()


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        settings.SITE_URL,
    ]
    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(dict.fromkeys(allowed_origins)),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Bind a request id, then log the request summary and timing."""
        clear_context()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_request_id(request_id)

        start_time = perf_counter()
        route_info = get_summary(request) or f"{request.method} {request.url.path}"
        logger.info("Request", route=route_info, ip=host(request))

        response = await call_next(request)
        duration = perf_counter() - start_time

        logger.info(
            "Response",
            status_code=response.status_code,
            method=request.method,
            path=request.url.path,
            duration_s=round(duration, 4),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
