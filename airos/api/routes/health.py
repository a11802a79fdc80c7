"""
Health check endpoints.
"""

from fastapi import APIRouter

from airos import __version__
from airos.application.dto.responses import HealthResponse
from airos.config import get_logger
from airos.core.exceptions import StoreUnavailableError

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Runs a trivial query and reports any schema tables that are missing.
    """
    from airos.infrastructure.storage.sqlite.schema import missing_tables

    try:
        missing = await missing_tables()
    except StoreUnavailableError as e:
        logger.warning("db_health_failed", error=e.message)
        return HealthResponse(status="unhealthy", version=__version__, database="unavailable")

    return HealthResponse(
        status="degraded" if missing else "healthy",
        version=__version__,
        database="sqlite",
        missing_tables=missing,
    )
