"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health, invoicing)
- Error handlers (centralized error-to-HTTP translation)
- Security middleware (CORS, headers, rate limiting)
- Request metrics (Prometheus counters served at /metrics)
- Logging configuration
- Connection pool lifecycle (verified at startup, disposed at shutdown)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from invoicing_api.core.config import settings
from invoicing_api.infrastructure.db.pool import ConnectionPool, build_engine
from invoicing_api.infrastructure.invoicing.invoice_repository import (
    PostgresInvoiceRepository,
)
from invoicing_api.interfaces.health import router as health_router
from invoicing_api.interfaces.invoicing.router import router as invoicing_router
from invoicing_api.interfaces.metrics import router as metrics_router
from invoicing_api.shared.errors.handlers import register_error_handlers
from invoicing_api.shared.logging import configure_logging
from invoicing_api.shared.metrics import MetricsMiddleware
from invoicing_api.shared.security.headers import SecurityHeadersMiddleware
from invoicing_api.shared.security.rate_limiting import install_rate_limiting

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open and verify the pool, then dispose it.

    An unreachable database at startup is fatal: ``ConnectionPool.verify``
    exits the process instead of letting the service start degraded.
    """
    pool = ConnectionPool(build_engine(settings))
    pool.verify()
    app.state.invoice_repository = PostgresInvoiceRepository(
        pool, strict_writes=settings.strict_writes
    )
    logger.info("%s %s started.", settings.project_name, settings.version)

    yield

    logger.info("Shutting down...")
    pool.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, security and metrics middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    install_rate_limiting(app)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Metrics ---
    app.add_middleware(MetricsMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(invoicing_router, prefix=settings.api_prefix)
    app.include_router(metrics_router, prefix=settings.api_prefix)

    return app


app = create_app()
