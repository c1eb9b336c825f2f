"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from src.application.dto.responses import HealthResponse, ProviderHealthResponse
from src.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Storage health check.

    Tests SQLite connectivity and response time. The memory backend is
    always available.
    """
    settings = get_settings()
    backend = settings.storage.backend

    if backend == "memory":
        storage_status = ProviderHealthResponse(name="memory", available=True, latency_ms=0.0)
    else:
        from src.infrastructure.storage.sqlite import get_connection_pool

        try:
            pool = await get_connection_pool()
            start = time.time()
            available = await pool.ping()
            storage_status = ProviderHealthResponse(
                name="sqlite",
                available=available,
                latency_ms=(time.time() - start) * 1000,
            )

        except Exception as e:
            storage_status = ProviderHealthResponse(
                name="sqlite",
                available=False,
                error=str(e),
            )

    return HealthResponse(
        status="healthy" if storage_status.available else "unhealthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        storage=storage_status,
    )
