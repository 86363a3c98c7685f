"""Health check endpoints for liveness and readiness probes."""

from fastapi import APIRouter

from app.api.dependencies import CacheDep
from app.core.config import get_settings
from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(cache: CacheDep) -> ReadinessResponse:
    """Return 200 while the process serves; report whether Redis is reachable.

    Pages render from Strapi when the cache is down, so an unreachable cache
    does not make the service unready.
    """
    return ReadinessResponse(cache_available=await cache.ping(), version=get_settings().app_version)
