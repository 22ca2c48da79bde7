# app/middleware/middleware.py
"""
Middleware components for the Posts API.

This module contains middleware for security headers, request logging and
CORS handling, plus the lifespan event handler that opens the database at
startup and closes it at shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from time import perf_counter

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import configure_logging, file_logger, settings
from app.db import Database
from app.utils.helpers import get_summary, host

logger = file_logger(getLogger(__name__))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Manage application startup and shutdown.

    A database that cannot be reached at startup is fatal: the error is
    logged and re-raised so the server exits instead of serving traffic.
    """
    configure_logging()
    logger.info(f"Starting {app.title}...")

    database = Database()
    try:
        await database.connect()
    except Exception:
        logger.exception("Failed to initialize database")
        await database.close()
        raise

    app.state.database = database
    logger.info("Services initialized successfully")
    logger.info(f"  - Backend API: http://{settings.HOST}:{settings.PORT}")
    logger.info(f"  - API Documentation: http://{settings.HOST}:{settings.PORT}/docs")
    logger.info(f"  - Health Check: http://{settings.HOST}:{settings.PORT}/health")

    yield

    logger.info(f"Shutting down {app.title}...")
    await database.close()


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Add production origins if specified
    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        response = await call_next(request)
        duration = perf_counter() - start_time

        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path} "
            f"in {duration:.2f}s",
        )

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
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
