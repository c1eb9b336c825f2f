"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    health_router,
    identities_router,
    ledger_router,
    products_router,
    reports_router,
    stats_router,
)
from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Initializes resources on startup and cleans up on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
        storage_backend=settings.storage.backend,
    )

    # Initialize database
    if settings.storage.backend == "sqlite":
        try:
            from src.infrastructure.storage.sqlite import get_connection_pool
            from src.infrastructure.storage.sqlite.migrations.migrator import run_migrations

            # Run migrations
            await run_migrations()
            logger.info("database_initialized")

            # Initialize connection pool
            await get_connection_pool()
            logger.info("connection_pool_ready")

        except Exception as e:
            logger.error("database_init_failed", error=str(e))
            raise

    # Demo records
    if settings.ledger.seed_demo:
        from src.application.services import get_product_ledger
        from src.core.services import seed_demo_products

        seeded = await seed_demo_products(get_product_ledger())
        logger.info("demo_seed_complete", seeded=len(seeded))

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")

    if settings.storage.backend == "sqlite":
        try:
            from src.infrastructure.storage.sqlite import close_connection_pool

            await close_connection_pool()
            logger.info("connection_pool_closed")

        except Exception as e:
            logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title="Product Authenticity Ledger API",
        description="Product registration, chain of custody and counterfeit reporting",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(reports_router)
    app.include_router(stats_router)
    app.include_router(ledger_router)
    app.include_router(identities_router)

    return app


# Create app instance
app = create_app()


# Root endpoint
@app.get("/")
async def root() -> dict[str, str]:
    """Return API info."""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


# Root health endpoint (for k8s/docker health checks)
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Simple health check at root level."""
    return {
        "status": "healthy",
        "version": get_settings().app_version,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
