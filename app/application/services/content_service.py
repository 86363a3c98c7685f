"""Cached CMS reads for the public site.

Every method goes through ContentCache via @cached, with keys from
app.infrastructure.cache.keys so that CacheInvalidationService can find them
again when Strapi reports a change.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.interfaces.services import ICmsClient
from app.application.services.content_cache import ContentCache, cached
from app.infrastructure.cache.keys import (
    footer_key,
    icons_key,
    navigation_key,
    news_article_key,
    news_list_key,
    news_slugs_key,
    page_hierarchy_key,
    page_key,
    page_slugs_key,
    search_index_key,
)

logger = logging.getLogger(__name__)

HOME_LABELS = {"cs": "Úvod", "en": "Home"}

# Czech route segment used for news in both locales
NEWS_ROUTE = "aktuality"


def resolve_link(link: dict[str, Any] | None, locale: str) -> dict[str, str] | None:
    """Resolve a Strapi link component to {href, target}.

    Priority: page > url > file > anchor. Returns None when the link has no
    destination, so the navigation entry is dropped.
    """
    if not link:
        return None
    anchor = link.get("anchor")
    page = link.get("page")
    if isinstance(page, dict) and page.get("slug"):
        href = f"/{locale}/{page['slug']}/"
        if anchor:
            href = f"{href}#{anchor}"
        return {"href": href, "target": "_self"}

    url = link.get("url")
    if url:
        href = f"{url}#{anchor}" if anchor else url
        return {"href": href, "target": "_blank" if url.startswith("http") else "_self"}

    file = link.get("file")
    if isinstance(file, dict) and file.get("url"):
        return {"href": file["url"], "target": "_blank"}

    if anchor:
        return {"href": f"#{anchor}", "target": "_self"}
    return None


def _page_href(locale: str, slug: str) -> str:
    return f"/{locale}/{slug}/"


class ContentService:
    """Read side of the CMS, cached per locale and slug."""

    def __init__(self, cms: ICmsClient, cache: ContentCache) -> None:
        self.cms = cms
        self.cache = cache

    @cached(lambda locale, navbar=None, footer=None: navigation_key(locale, navbar, footer))
    async def get_navigation(
        self,
        locale: str,
        navbar: bool | None = None,
        footer: bool | None = None,
    ) -> list[dict[str, str]]:
        """Return resolved navigation items {name, href, target}.

        Args:
            locale: Content locale.
            navbar: Keep only entries whose navbar flag equals this (None: any).
            footer: Keep only entries whose footer flag equals this (None: any).
        """
        items: list[dict[str, str]] = []
        for entry in await self.cms.fetch_navigation(locale):
            if navbar is not None and bool(entry.get("navbar")) != navbar:
                continue
            if footer is not None and bool(entry.get("footer")) != footer:
                continue
            resolved = resolve_link(entry.get("link"), locale)
            if resolved is None:
                logger.warning("Navigation entry %r has no link target", entry.get("title"))
                continue
            items.append({"name": entry.get("title") or "", **resolved})
        return items

    @cached(lambda locale: footer_key(locale))
    async def get_footer(self, locale: str) -> dict[str, Any] | None:
        return await self.cms.fetch_footer(locale)

    @cached(lambda slug, locale: page_key(locale, slug))
    async def get_page(self, slug: str, locale: str) -> dict[str, Any] | None:
        return await self.cms.fetch_page_by_slug(slug, locale)

    @cached(lambda slug, locale: page_hierarchy_key(locale, slug))
    async def get_page_breadcrumbs(self, slug: str, locale: str) -> list[dict[str, str]] | None:
        """Return breadcrumb items from home down to the page, or None if missing.

        Walks the populated parent chain; a relation cycle stops the walk.
        """
        page = await self.get_page(slug, locale)
        if page is None:
            return None

        ancestors: list[dict[str, str]] = []
        seen = {slug}
        parent = page.get("parent")
        while isinstance(parent, dict) and parent.get("slug"):
            if parent["slug"] in seen:
                logger.warning("Page parent cycle detected at %s (%s)", parent["slug"], locale)
                break
            seen.add(parent["slug"])
            ancestors.append(
                {"label": parent.get("title") or parent["slug"], "href": _page_href(locale, parent["slug"])}
            )
            parent = parent.get("parent")

        return [
            {"label": HOME_LABELS.get(locale, HOME_LABELS["en"]), "href": f"/{locale}/"},
            *reversed(ancestors),
            {"label": page.get("title") or slug, "href": _page_href(locale, slug)},
        ]

    @cached(lambda locale: page_slugs_key(locale))
    async def get_page_slugs(self, locale: str) -> list[str]:
        return await self.cms.fetch_all_page_slugs(locale)

    @cached(
        lambda locale, tags=None, limit=None, sort="date:desc": news_list_key(
            locale, tags, limit, sort
        )
    )
    async def get_news_articles(
        self,
        locale: str,
        tags: list[str] | None = None,
        limit: int | None = None,
        sort: str = "date:desc",
    ) -> list[dict[str, Any]]:
        """Return article summaries, newest first unless sort says otherwise."""
        return await self.cms.fetch_news_articles(locale, tags=tags, limit=limit, sort=sort)

    @cached(lambda slug, locale: news_article_key(locale, slug))
    async def get_news_article(self, slug: str, locale: str) -> dict[str, Any] | None:
        return await self.cms.fetch_news_article_by_slug(slug, locale)

    @cached(lambda locale: news_slugs_key(locale))
    async def get_news_article_slugs(self, locale: str) -> list[str]:
        return await self.cms.fetch_all_news_article_slugs(locale)

    @cached(lambda locale: search_index_key(locale))
    async def get_search_index(self, locale: str) -> list[dict[str, str]]:
        """Return {title, href, kind} entries for every page and news article."""
        entries: list[dict[str, str]] = []
        for page in await self.cms.fetch_all_pages(locale):
            if page.get("slug"):
                entries.append(
                    {
                        "title": page.get("title") or page["slug"],
                        "href": _page_href(locale, page["slug"]),
                        "kind": "page",
                    }
                )
        for article in await self.cms.fetch_news_articles(locale):
            if article.get("slug"):
                entries.append(
                    {
                        "title": article.get("title") or article["slug"],
                        "href": f"/{locale}/{NEWS_ROUTE}/{article['slug']}/",
                        "kind": "news",
                    }
                )
        return entries

    @cached(lambda: icons_key())
    async def get_icons(self) -> list[dict[str, Any]]:
        return await self.cms.fetch_icons()
