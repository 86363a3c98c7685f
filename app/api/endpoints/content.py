"""Public content API: cached Strapi reads per locale.

Every route reads through ContentService, so a repeated request is served from
Redis until a webhook or TTL expiry removes the entry.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Query

from app.api.dependencies import ContentDep, LocaleDep
from app.core.constants import CACHE_KEY_SEP
from app.domain.exceptions import ResourceNotFoundException
from app.schemas.content import BreadcrumbItem, NavigationItem, SearchIndexEntry

router = APIRouter()

SORT_PATTERN = r"^[A-Za-z][A-Za-z0-9_.]*:(asc|desc)$"


def _clean_slug(slug: str, resource_type: str) -> str:
    """Strip surrounding slashes; reject slugs that cannot form a cache key."""
    cleaned = slug.strip("/")
    if not cleaned or CACHE_KEY_SEP in cleaned:
        raise ResourceNotFoundException(resource_type, slug)
    return cleaned


@router.get("/navigation", response_model=list[NavigationItem])
async def navigation(
    locale: LocaleDep,
    content: ContentDep,
    navbar: bool | None = None,
    footer: bool | None = None,
) -> list[dict[str, str]]:
    """Resolved navigation; filter with ?navbar=true or ?footer=true."""
    return await content.get_navigation(locale, navbar=navbar, footer=footer)


@router.get("/footer")
async def footer(locale: LocaleDep, content: ContentDep) -> dict[str, Any]:
    data = await content.get_footer(locale)
    if data is None:
        raise ResourceNotFoundException("footer", locale)
    return data


@router.get("/pages")
async def page_slugs(locale: LocaleDep, content: ContentDep) -> list[str]:
    return await content.get_page_slugs(locale)


@router.get("/pages/{slug:path}")
async def page(slug: str, locale: LocaleDep, content: ContentDep) -> dict[str, Any]:
    """Single page with content, sidebar, parents and localizations. Slugs may nest."""
    slug = _clean_slug(slug, "page")
    data = await content.get_page(slug, locale)
    if data is None:
        raise ResourceNotFoundException("page", slug)
    return data


@router.get("/breadcrumbs/{slug:path}", response_model=list[BreadcrumbItem])
async def breadcrumbs(slug: str, locale: LocaleDep, content: ContentDep) -> list[dict[str, str]]:
    slug = _clean_slug(slug, "page")
    items = await content.get_page_breadcrumbs(slug, locale)
    if items is None:
        raise ResourceNotFoundException("page", slug)
    return items


@router.get("/news")
async def news_list(
    locale: LocaleDep,
    content: ContentDep,
    tags: Annotated[list[str] | None, Query(description="Tag slugs (OR)")] = None,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    sort: Annotated[str, Query(pattern=SORT_PATTERN)] = "date:desc",
) -> list[dict[str, Any]]:
    """News article summaries, optionally filtered by any of the given tags."""
    if tags:
        tags = [_clean_slug(tag, "tag") for tag in tags]
    return await content.get_news_articles(locale, tags=tags, limit=limit, sort=sort)


@router.get("/news/{slug}")
async def news_article(slug: str, locale: LocaleDep, content: ContentDep) -> dict[str, Any]:
    slug = _clean_slug(slug, "news-article")
    data = await content.get_news_article(slug, locale)
    if data is None:
        raise ResourceNotFoundException("news-article", slug)
    return data


@router.get("/search-index", response_model=list[SearchIndexEntry])
async def search_index(locale: LocaleDep, content: ContentDep) -> list[dict[str, str]]:
    return await content.get_search_index(locale)


@router.get("/icons")
async def icons(locale: LocaleDep, content: ContentDep) -> list[dict[str, Any]]:
    """Icon library (shared across locales; the locale segment only validates)."""
    return await content.get_icons()
