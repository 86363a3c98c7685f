"""Cache key builders. Single place for key format (DRY).

Keys are built without CACHE_PREFIX; CacheService applies it. Every key the
content service writes comes from here, and the invalidation rules in
app.application.services.cache_invalidation match exactly these shapes.

Key components (locale, slug, tag slugs) must not contain CACHE_KEY_SEP to
avoid ambiguous or colliding keys. Slugs may contain "/" (nested pages).
"""

from collections.abc import Iterable

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_TAG_FOOTER,
    CACHE_TAG_ICONS,
    CACHE_TAG_INTRANET_NEWS_ARTICLE,
    CACHE_TAG_INTRANET_NEWS_LIST,
    CACHE_TAG_INTRANET_PAGE,
    CACHE_TAG_NAV,
    CACHE_TAG_NEWS_ARTICLE,
    CACHE_TAG_NEWS_LIST,
    CACHE_TAG_NEWS_SLUGS,
    CACHE_TAG_PAGE,
    CACHE_TAG_PAGE_HIERARCHY,
    CACHE_TAG_PAGE_SLUGS,
    CACHE_TAG_SEARCH_INDEX,
)

# Redis SCAN MATCH metacharacters
_GLOB_SPECIAL = frozenset("*?[]\\")


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def _join(*parts: str) -> str:
    return CACHE_KEY_SEP.join(parts)


def _flag(value: bool | None) -> str:
    if value is None:
        return "any"
    return "1" if value else "0"


def escape_pattern(value: str) -> str:
    """Escape glob metacharacters so value matches only itself in SCAN MATCH."""
    return "".join(f"\\{ch}" if ch in _GLOB_SPECIAL else ch for ch in value)


def page_key(locale: str, slug: str) -> str:
    """Cache key for a page by locale and slug."""
    _validate_key_component(locale, "locale")
    _validate_key_component(slug, "slug")
    return _join(CACHE_TAG_PAGE, locale, slug)


def page_hierarchy_key(locale: str, slug: str) -> str:
    """Cache key for the breadcrumb trail derived from a page's parents."""
    _validate_key_component(locale, "locale")
    _validate_key_component(slug, "slug")
    return _join(CACHE_TAG_PAGE_HIERARCHY, locale, slug)


def page_slugs_key(locale: str) -> str:
    """Cache key for the list of all page slugs in a locale."""
    _validate_key_component(locale, "locale")
    return _join(CACHE_TAG_PAGE_SLUGS, locale)


def navigation_key(locale: str, navbar: bool | None = None, footer: bool | None = None) -> str:
    """Cache key for resolved navigation items, per navbar/footer filter."""
    _validate_key_component(locale, "locale")
    return _join(CACHE_TAG_NAV, locale, f"navbar-{_flag(navbar)}", f"footer-{_flag(footer)}")


def footer_key(locale: str) -> str:
    """Cache key for the footer single type."""
    _validate_key_component(locale, "locale")
    return _join(CACHE_TAG_FOOTER, locale)


def news_article_key(locale: str, slug: str) -> str:
    """Cache key for a news article detail."""
    _validate_key_component(locale, "locale")
    _validate_key_component(slug, "slug")
    return _join(CACHE_TAG_NEWS_ARTICLE, locale, slug)


def news_list_key(
    locale: str,
    tags: Iterable[str] | None = None,
    limit: int | None = None,
    sort: str = "date:desc",
) -> str:
    """Cache key for a news listing (aggregates article summaries).

    Tag order does not matter; the sort expression's colon is replaced so
    it cannot be confused with the key separator.
    """
    _validate_key_component(locale, "locale")
    tag_list = sorted(set(tags or []))
    for tag in tag_list:
        _validate_key_component(tag, "tag")
    tags_part = ",".join(tag_list) or "all"
    limit_part = str(limit) if limit else "all"
    sort_part = sort.replace(CACHE_KEY_SEP, ".")
    return _join(CACHE_TAG_NEWS_LIST, locale, tags_part, limit_part, sort_part)


def news_slugs_key(locale: str) -> str:
    """Cache key for the list of all news article slugs in a locale."""
    _validate_key_component(locale, "locale")
    return _join(CACHE_TAG_NEWS_SLUGS, locale)


def intranet_page_key(locale: str, slug: str) -> str:
    """Cache key for an intranet page by locale and slug."""
    _validate_key_component(locale, "locale")
    _validate_key_component(slug, "slug")
    return _join(CACHE_TAG_INTRANET_PAGE, locale, slug)


def intranet_news_article_key(locale: str, slug: str) -> str:
    """Cache key for an intranet news article detail."""
    _validate_key_component(locale, "locale")
    _validate_key_component(slug, "slug")
    return _join(CACHE_TAG_INTRANET_NEWS_ARTICLE, locale, slug)


def intranet_news_list_key(locale: str, limit: int | None = None) -> str:
    """Cache key for an intranet news listing."""
    _validate_key_component(locale, "locale")
    return _join(CACHE_TAG_INTRANET_NEWS_LIST, locale, str(limit) if limit else "all")


def search_index_key(locale: str) -> str:
    """Cache key for the per-locale search index (pages and news)."""
    _validate_key_component(locale, "locale")
    return _join(CACHE_TAG_SEARCH_INDEX, locale)


def icons_key() -> str:
    """Cache key for the icon library (not localized)."""
    return CACHE_TAG_ICONS
