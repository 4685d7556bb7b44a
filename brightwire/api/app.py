"""FastAPI application factory for the Brightwire API.

This module builds the application: row store and services, middleware,
exception handlers that translate service errors into the response envelope,
and the health endpoint.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from brightwire.api.admin import router as admin_router
from brightwire.api.auth import CredentialCheck
from brightwire.api.contact import router as contact_router
from brightwire.api.errors import BrightwireError
from brightwire.api.responses import error_response
from brightwire.api.service import SubmissionService
from brightwire.api.storage import (
    Clock,
    FileRowStore,
    InMemoryRowStore,
    RowStore,
    SupabaseRowStore,
    utc_now,
)
from brightwire.config import Settings, load_settings
from brightwire.version import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def build_store(settings: Settings) -> RowStore:
    """Create the row store selected by settings.

    Raises:
        ConfigurationError: If the backend is unknown or Supabase values are missing
    """
    settings.require_store()
    if settings.store_backend == "file":
        return FileRowStore(settings.data_dir)
    if settings.store_backend == "memory":
        return InMemoryRowStore()
    return SupabaseRowStore(
        settings.supabase_url,
        settings.supabase_key,
        timeout=settings.store_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Logs startup and closes the row store on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info("Starting Brightwire API")
    logger.info("Version: %s", __version__)
    logger.info("Row store backend: %s", settings.store_backend)
    logger.warning(
        "Admin routes under /api/admin are not protected server-side; "
        "restrict access to them at the proxy"
    )

    yield

    await app.state.store.close()
    logger.info("Shutting down Brightwire API")


def register_exception_handlers(app: FastAPI) -> None:
    """Translate errors into the response envelope."""

    @app.exception_handler(BrightwireError)
    async def brightwire_error_handler(request: Request, exc: BrightwireError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "error": exc.message},
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Malformed request",
            extra={"path": request.url.path, "errors": str(exc.errors())},
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths look the same
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return error_response(status.HTTP_404_NOT_FOUND, "Route not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error",
            extra={"path": request.url.path},
            exc_info=exc,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_middleware(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time
        logger.info(
            "%s %s - %s (%.3fs)",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        return response


def create_app(
    settings: Settings | None = None,
    store: RowStore | None = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (loaded from the environment when omitted)
        store: Row store to use (built from settings when omitted)
        clock: Source of "now" for the weekly counter

    Returns:
        Configured FastAPI application instance

    Raises:
        ConfigurationError: If the row store cannot be built from settings
    """
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = build_store(settings)

    app = FastAPI(
        title="Brightwire API",
        description="""
        Contact intake and admin back-office API.

        ## Features

        - **Contact Form**: validate and store enquiries
        - **Admin**: credential check, submission list, statistics, status triage
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.store = store
    app.state.submission_service = SubmissionService(store, clock=clock)
    app.state.credential_check = CredentialCheck(settings.admin_email, settings.admin_password)

    register_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(contact_router)
    app.include_router(admin_router)

    @app.get(
        "/api/health",
        summary="Health Check",
        description="Check if the API is running",
        tags=["health"],
    )
    async def health_check() -> JSONResponse:
        """Health check endpoint.

        The flat status/timestamp fields are what uptime probes read; data
        carries the same values for envelope consumers.
        """
        health = {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}
        return JSONResponse(content={"success": True, **health, "data": health})

    return app


def main() -> None:
    """Entry point for the brightwire-api command."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "brightwire.api.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
