"""FastAPI application factory and entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from site_selector import __version__
from site_selector.config import Settings, get_settings
from site_selector.exceptions import GatewayError, InvalidLoginAttempt

LOGGER = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Configure application logging."""
    log_level = getattr(logging, settings.server.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("uvicorn.access").setLevel(log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager."""
    settings = get_settings()
    setup_logging(settings)
    LOGGER.info("Starting Global Site Selector v%s", __version__)
    LOGGER.info("Operation mode: %s", settings.gss.mode)
    LOGGER.info("Master admins: %d configured", len(settings.gss.master_admins))
    LOGGER.info("Lookup server configured: %s", settings.lookup.is_configured)
    if settings.gss.saml_slave_mapping:
        LOGGER.info("SAML location attribute: %s", settings.gss.saml_slave_mapping)

    yield

    LOGGER.info("Shutting down Global Site Selector")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    get_settings()

    app = FastAPI(
        title="Global Site Selector",
        description="Master node login gateway for federated Nextcloud nodes",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):  # type: ignore[no-untyped-def]
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cache-Control"] = "no-store"
        return response

    @app.exception_handler(GatewayError)
    async def gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
        LOGGER.warning("Login attempt aborted: %s", exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.public_message},
        )

    @app.exception_handler(InvalidLoginAttempt)
    async def invalid_attempt_handler(request: Request, exc: InvalidLoginAttempt) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled exception: %s", type(exc).__name__)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy", "version": __version__}

    from site_selector.api.router import router as login_router

    app.include_router(login_router)

    return app


def run() -> None:
    """Run the application using uvicorn."""
    settings = get_settings()
    setup_logging(settings)

    uvicorn.run(
        "site_selector.main:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
        workers=settings.server.workers if not settings.server.reload else 1,
        log_level=settings.server.log_level,
    )


if __name__ == "__main__":
    run()
