"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Database schema bootstrap (optional)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.core.config import settings
from app.infrastructure.database import dispose_engine, ensure_schema, get_engine
from app.interfaces.health import router as health_router
from app.interfaces.orders.router import router as orders_router
from app.interfaces.pages.router import router as pages_router
from app.interfaces.products.router import catalog_router, projects_router
from app.interfaces.products.router import router as products_router
from app.interfaces.subscriptions.router import router as subscriptions_router
from app.shared.errors.handlers import register_error_handlers
from app.shared.logging import configure_logging
from app.shared.security.headers import SecurityHeadersMiddleware
from app.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: optional schema bootstrap, pool disposal on shutdown."""
    if settings.auto_create_schema:
        ensure_schema(get_engine())
    else:
        logger.info("Schema bootstrap disabled (AUTO_CREATE_SCHEMA=false).")

    yield

    dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level, sql_echo=settings.debug)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(subscriptions_router, prefix="/api/v1")
    app.include_router(orders_router, prefix="/api/v1")
    app.include_router(pages_router, prefix="/api/v1")
    app.include_router(products_router, prefix="/api/v1")
    app.include_router(projects_router, prefix="/api/v1")
    app.include_router(catalog_router, prefix="/api/v1")

    return app


app = create_app()
