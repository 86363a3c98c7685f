"""Cache: Redis service and cache key utilities.

Used by the content façade and the invalidation dispatcher. CacheService
uses app.core.config; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.keys import (
    escape_pattern,
    footer_key,
    icons_key,
    intranet_news_article_key,
    intranet_news_list_key,
    intranet_page_key,
    navigation_key,
    news_article_key,
    news_list_key,
    news_slugs_key,
    page_hierarchy_key,
    page_key,
    page_slugs_key,
    search_index_key,
)
from app.infrastructure.cache.redis_cache import CacheService, CacheStats

__all__ = [
    "CacheService",
    "CacheStats",
    "escape_pattern",
    "footer_key",
    "icons_key",
    "intranet_news_article_key",
    "intranet_news_list_key",
    "intranet_page_key",
    "navigation_key",
    "news_article_key",
    "news_list_key",
    "news_slugs_key",
    "page_hierarchy_key",
    "page_key",
    "page_slugs_key",
    "search_index_key",
]
