"""Application services: content façade, cached CMS reads, invalidation."""

from app.application.services.cache_invalidation import (
    INVALIDATION_RULES,
    CacheInvalidationService,
    build_patterns,
)
from app.application.services.content_cache import ContentCache, cached
from app.application.services.content_service import ContentService, resolve_link

__all__ = [
    "INVALIDATION_RULES",
    "CacheInvalidationService",
    "ContentCache",
    "ContentService",
    "build_patterns",
    "cached",
    "resolve_link",
]
