"""Operator diagnostics: cache contents and raw CMS navigation."""

from typing import Any

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import CacheDep, CmsDep, require_admin_secret
from app.core.config import get_settings
from app.domain.exceptions import ResourceNotFoundException
from app.schemas.cache import CacheStatsResponse

router = APIRouter(dependencies=[Depends(require_admin_secret)])


@router.get("/cache", response_model=CacheStatsResponse)
async def cache_status(cache: CacheDep) -> CacheStatsResponse:
    """Return availability and every key under the namespace (prefix stripped)."""
    stats = await cache.stats()
    return CacheStatsResponse(**stats.to_dict())


@router.get("/navigation")
async def navigation_status(
    cms: CmsDep,
    locale: str | None = Query(None, description="Content locale; defaults to DEFAULT_LOCALE"),
) -> dict[str, Any]:
    """Return navigation straight from Strapi, bypassing the cache."""
    settings = get_settings()
    locale = (locale or settings.default_locale).lower()
    if locale not in settings.locales:
        raise ResourceNotFoundException("locale", locale)
    entries = await cms.fetch_navigation(locale)
    return {
        "strapiUrl": settings.strapi_url,
        "locale": locale,
        "totalItems": len(entries),
        "items": [
            {
                "id": entry.get("id"),
                "title": entry.get("title"),
                "navbar": entry.get("navbar"),
                "footer": entry.get("footer"),
                "linkType": (entry.get("link") or {}).get("type"),
                "linkPage": ((entry.get("link") or {}).get("page") or {}).get("slug"),
                "linkUrl": (entry.get("link") or {}).get("url"),
            }
            for entry in entries
        ],
        "raw": entries,
    }
