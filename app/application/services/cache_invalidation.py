"""Cache invalidation: maps a CMS content change to the keys it stales.

Each content type owns a fixed list of pattern templates with {locale} and
{slug} placeholders. A known qualifier is glob-escaped before substitution so
a slug cannot widen the match; an unknown one becomes "*". The templates
mirror the shapes produced by app.infrastructure.cache.keys.
"""

from __future__ import annotations

import logging

from app.application.dtos.cache import InvalidationResult
from app.application.interfaces.services import ICacheService
from app.core.constants import (
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
from app.domain.events import InvalidationEvent
from app.infrastructure.cache.keys import escape_pattern
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

WILDCARD = "*"

INVALIDATION_RULES: dict[str, tuple[str, ...]] = {
    "page": (
        f"{CACHE_TAG_PAGE}:{{locale}}:{{slug}}",
        # Child pages embed their parent chain (titles) and carry the parent slug as prefix
        f"{CACHE_TAG_PAGE}:{{locale}}:{{slug}}/*",
        f"{CACHE_TAG_PAGE_HIERARCHY}:{{locale}}:{{slug}}",
        f"{CACHE_TAG_PAGE_HIERARCHY}:{{locale}}:{{slug}}/*",
        f"{CACHE_TAG_PAGE_SLUGS}:{{locale}}",
        f"{CACHE_TAG_SEARCH_INDEX}:{{locale}}",
    ),
    "news-article": (
        f"{CACHE_TAG_NEWS_ARTICLE}:{{locale}}:{{slug}}",
        f"{CACHE_TAG_NEWS_LIST}:{{locale}}:*",
        f"{CACHE_TAG_NEWS_SLUGS}:{{locale}}",
        f"{CACHE_TAG_SEARCH_INDEX}:{{locale}}",
    ),
    "intranet-page": (
        f"{CACHE_TAG_INTRANET_PAGE}:{{locale}}:{{slug}}",
    ),
    "intranet-news-article": (
        f"{CACHE_TAG_INTRANET_NEWS_ARTICLE}:{{locale}}:{{slug}}",
        f"{CACHE_TAG_INTRANET_NEWS_LIST}:{{locale}}:*",
    ),
    "navigation": (
        f"{CACHE_TAG_NAV}:{{locale}}:*",
    ),
    "footer": (
        f"{CACHE_TAG_FOOTER}:{{locale}}",
    ),
    # Tags are embedded in listings and article details
    "tag": (
        f"{CACHE_TAG_NEWS_LIST}:{{locale}}:*",
        f"{CACHE_TAG_NEWS_ARTICLE}:{{locale}}:*",
    ),
    "icon": (
        CACHE_TAG_ICONS,
    ),
}

_FALLBACK_TEMPLATE = "{content_type}:{locale}:{slug}"


def _qualifier(value: str | None) -> str:
    return escape_pattern(value) if value else WILDCARD


def build_patterns(content_type: str, slug: str | None = None, locale: str | None = None) -> list[str]:
    """Expand the rule for content_type into concrete, de-duplicated patterns.

    Unknown content types fall back to "{content_type}:{locale}:{slug}".
    """
    substitutions = {"locale": _qualifier(locale), "slug": _qualifier(slug)}
    templates = INVALIDATION_RULES.get(content_type)
    if templates is None:
        templates = (
            _FALLBACK_TEMPLATE.replace("{content_type}", escape_pattern(content_type)),
        )
    patterns: list[str] = []
    for template in templates:
        pattern = template.format(**substitutions)
        if pattern not in patterns:
            patterns.append(pattern)
    return patterns


class CacheInvalidationService:
    """Fans a content change out to pattern deletes on the cache.

    Stateless and idempotent: repeating a call deletes nothing new.
    """

    def __init__(self, cache: ICacheService) -> None:
        self.cache = cache

    @traced("cache.invalidate")
    async def invalidate(
        self,
        content_type: str,
        slug: str | None = None,
        locale: str | None = None,
    ) -> InvalidationResult:
        """Delete every cached key affected by a change to one content item.

        Args:
            content_type: Normalized model name (e.g. "page", "news-article").
            slug: Changed item's slug; None widens to all slugs.
            locale: Changed item's locale; None widens to all locales.

        Returns:
            Patterns attempted, keys deleted and patterns that failed.
        """
        if content_type not in INVALIDATION_RULES:
            logger.warning(
                "No invalidation rule for content type %r; using generic pattern",
                content_type,
            )
        result = InvalidationResult(
            content_type=content_type,
            patterns=build_patterns(content_type, slug, locale),
        )
        for pattern in result.patterns:
            try:
                result.deleted += await self.cache.delete_pattern(pattern)
            except Exception:
                logger.exception("Invalidation of pattern %s failed", pattern)
                result.failed_patterns.append(pattern)

        add_span_attributes(
            **{
                "cache.content_type": content_type,
                "cache.patterns": len(result.patterns),
                "cache.deleted": result.deleted,
            }
        )
        logger.info(
            "Invalidated %s (slug=%s, locale=%s): %s keys across %s patterns",
            content_type,
            slug,
            locale,
            result.deleted,
            len(result.patterns),
        )
        return result

    async def handle(self, event: InvalidationEvent) -> InvalidationResult:
        """Invalidate for a parsed webhook event."""
        return await self.invalidate(event.content_type, slug=event.slug, locale=event.locale)
