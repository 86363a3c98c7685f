"""Core constants: cache key namespace, TTLs and shared literal values.

Single source of truth for cache key structure (DRY). Changing CACHE_PREFIX
makes every existing entry unreachable, which is equivalent to a full flush.
"""

# Namespace prefix applied by CacheService to every key it reads or writes
CACHE_PREFIX = "sagena:"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# 24 hours; not configurable from the environment
DEFAULT_TTL_SECONDS = 24 * 60 * 60

# Cached stand-in for a fetch that legitimately returned None
CACHE_MISS_MARKER = {"__missing__": True}
NEGATIVE_TTL_SECONDS = 60

# Cache key tags (first segment after the prefix)
CACHE_TAG_PAGE = "page"
CACHE_TAG_PAGE_HIERARCHY = "page-hierarchy"
CACHE_TAG_PAGE_SLUGS = "page-slugs"
CACHE_TAG_NAV = "nav"
CACHE_TAG_FOOTER = "footer"
CACHE_TAG_NEWS_ARTICLE = "news-article"
CACHE_TAG_NEWS_LIST = "news-list"
CACHE_TAG_NEWS_SLUGS = "news-slugs"
CACHE_TAG_INTRANET_PAGE = "intranet-page"
CACHE_TAG_INTRANET_NEWS_ARTICLE = "intranet-news-article"
CACHE_TAG_INTRANET_NEWS_LIST = "intranet-news-list"
CACHE_TAG_SEARCH_INDEX = "search-index"
CACHE_TAG_ICONS = "icons"

# Strapi sends the shared secret verbatim in this header
WEBHOOK_SIGNATURE_HEADER = "X-Strapi-Webhook-Signature"
