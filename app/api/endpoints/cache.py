"""Manual cache flush for operators (header or ?secret= on GET)."""

import logging

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import CacheDep, require_admin_secret, require_webhook_signature
from app.application.interfaces.services import ICacheService
from app.core.limiter import limit_admin
from app.schemas.cache import CacheClearResponse
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


async def _clear(cache: ICacheService) -> CacheClearResponse:
    cleared = await cache.clear_all()
    if cleared:
        message = "All caches cleared"
    else:
        message = "Cache unavailable; nothing to clear"
        logger.warning("Cache clear requested but the cache is unavailable")
    return CacheClearResponse(success=cleared, message=message, timestamp=utc_now())


@router.post(
    "/clear",
    response_model=CacheClearResponse,
    dependencies=[Depends(require_webhook_signature)],
)
@limit_admin
async def clear_cache(request: Request, cache: CacheDep) -> CacheClearResponse:
    """Delete every key in the cache namespace. Secret in the signature header only."""
    return await _clear(cache)


@router.get(
    "/clear",
    response_model=CacheClearResponse,
    dependencies=[Depends(require_admin_secret)],
)
@limit_admin
async def clear_cache_get(request: Request, cache: CacheDep) -> CacheClearResponse:
    """Same as POST, for browsers: secret in the header or ?secret=."""
    return await _clear(cache)
