"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (cache, CMS client,
services, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.cache_invalidation import CacheInvalidationService
from app.application.services.content_cache import ContentCache
from app.application.services.content_service import ContentService
from app.core.config import get_settings
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.cms.strapi_client import StrapiClient
from app.shared.telemetry.telemetry import Telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup builds the service graph on app.state. Redis is not contacted
    here: CacheService connects on first use, so a missing or broken Redis
    never blocks startup. Shutdown order: pending cache writes, CMS client,
    Redis connection, telemetry.
    """
    settings = get_settings()

    # ---- Startup ----
    telemetry: Telemetry | None = None
    if settings.telemetry_enabled:
        telemetry = Telemetry(settings)
        telemetry.start(app)
    app.state.telemetry = telemetry

    cache = CacheService(settings=settings)
    content_cache = ContentCache(cache)
    cms = StrapiClient(settings=settings)

    app.state.cache = cache
    app.state.content_cache = content_cache
    app.state.invalidation = CacheInvalidationService(cache)
    app.state.cms = cms
    app.state.content = ContentService(cms, content_cache)
    logger.info(
        "Content cache ready (redis %s, strapi %s)",
        "configured" if settings.redis_url else "not configured",
        settings.strapi_url,
    )

    yield

    # ---- Shutdown ----
    await content_cache.drain()
    await cms.aclose()
    logger.info("Strapi client closed")

    await cache.disconnect()

    if telemetry is not None:
        telemetry.shutdown()
