"""Async Strapi REST API client.

Read-only access to the content types the site renders. Strapi parses query
strings with the `qs` library, so nested populate/filter/sort options are sent
in bracket notation (populate[link][populate][0]=page). All HTTP calls use a
shared httpx.AsyncClient; errors surface as CmsUnavailableException and are
never cached.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from app.core.config import Settings, get_settings
from app.domain.exceptions import CmsUnavailableException
from app.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

# Strapi caps pageSize at 100 by default
_PAGE_SIZE = 100

# Breadcrumbs walk parent relations this many levels up
_PARENT_DEPTH = 5

_LINK_POPULATE: dict[str, Any] = {"populate": ["page", "file"]}

_NEWS_DETAIL_POPULATE: dict[str, Any] = {
    "image": True,
    "tags": True,
    "video": True,
    "gallery": {"populate": {"photos": {"populate": ["image"]}}},
    "documents": {"populate": {"documents": {"populate": ["file"]}}},
}


def _parent_populate(depth: int) -> dict[str, Any]:
    """Nested populate for parent → parent → … with title/slug only."""
    node: dict[str, Any] = {"fields": ["title", "slug"]}
    if depth > 1:
        node["populate"] = {"parent": _parent_populate(depth - 1)}
    return node


def build_query_params(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten nested params into qs-style bracket notation pairs.

    Lists use indexed keys, mappings use named keys, None is dropped and
    booleans are lowercased the way JavaScript stringifies them.

    Example:
        >>> build_query_params({"populate": {"link": {"populate": ["page"]}}})
        [('populate[link][populate][0]', 'page')]
    """
    pairs: list[tuple[str, str]] = []

    def encode(key: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                encode(f"{key}[{sub_key}]", sub_value)
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                encode(f"{key}[{index}]", item)
        elif isinstance(value, bool):
            pairs.append((key, "true" if value else "false"))
        else:
            pairs.append((key, str(value)))

    for key, value in params.items():
        encode(key, value)
    return pairs


class StrapiClient:
    """Strapi 5 REST client returning raw documents (no attributes wrapper)."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Optional settings override; defaults to get_settings().
            http_client: Optional pre-built client (tests); owned by the caller.
        """
        self.settings = settings or get_settings()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self.settings.strapi_url.rstrip("/"),
            timeout=self.settings.strapi_timeout_seconds,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.settings.strapi_api_token
        if token is not None and token.get_secret_value():
            headers["Authorization"] = f"Bearer {token.get_secret_value()}"
        return headers

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    async def _get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        allow_not_found: bool = False,
    ) -> dict[str, Any] | None:
        """GET /api{path} and return the decoded body.

        Raises:
            CmsUnavailableException: On transport errors, invalid JSON or
                non-2xx status (404 returns None when allow_not_found).
        """
        url = f"/api{path}"
        try:
            response = await self._http.get(
                url,
                params=build_query_params(params or {}),
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.error("Strapi request to %s failed: %s", url, e)
            raise CmsUnavailableException(f"Strapi request failed: {e}", path=url) from e

        if response.status_code == 404 and allow_not_found:
            return None
        if response.is_error:
            logger.error(
                "Strapi API error: %s %s for %s",
                response.status_code,
                response.reason_phrase,
                url,
            )
            raise CmsUnavailableException(
                f"Strapi API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                path=url,
            )
        try:
            return response.json()
        except ValueError as e:
            raise CmsUnavailableException(
                "Strapi returned invalid JSON", status_code=response.status_code, path=url
            ) from e

    async def _get_collection(self, path: str, params: Mapping[str, Any]) -> list[dict[str, Any]]:
        body = await self._get(path, params)
        data = (body or {}).get("data") or []
        return [item for item in data if isinstance(item, dict)]

    @traced("strapi.fetch_navigation")
    async def fetch_navigation(self, locale: str) -> list[dict[str, Any]]:
        """Return navigation entries with link.page and link.file populated."""
        return await self._get_collection(
            "/navigations",
            {
                "locale": locale,
                "populate": {"link": _LINK_POPULATE},
                "pagination": {"pageSize": _PAGE_SIZE},
            },
        )

    @traced("strapi.fetch_footer")
    async def fetch_footer(self, locale: str) -> dict[str, Any] | None:
        """Return the footer single type, or None when it is not published."""
        body = await self._get(
            "/footer",
            {"locale": locale, "populate": {"links": {"populate": "*"}, "logo": True}},
            allow_not_found=True,
        )
        if body is None:
            return None
        data = body.get("data")
        return data if isinstance(data, dict) else None

    @traced("strapi.fetch_page_by_slug")
    async def fetch_page_by_slug(self, slug: str, locale: str) -> dict[str, Any] | None:
        """Return one page with content, sidebar, parents and localizations."""
        pages = await self._get_collection(
            "/pages",
            {
                "locale": locale,
                "filters": {"slug": {"$eq": slug}},
                "populate": {
                    "content": {"populate": "*"},
                    "sidebar": {"populate": "*"},
                    "parent": _parent_populate(_PARENT_DEPTH),
                    "localizations": {"fields": ["locale", "slug"]},
                },
            },
        )
        for page in pages:
            if page.get("slug") == slug:
                return page
        return None

    @traced("strapi.fetch_all_page_slugs")
    async def fetch_all_page_slugs(self, locale: str) -> list[str]:
        """Return every page slug in the locale."""
        pages = await self._get_collection(
            "/pages",
            {"locale": locale, "fields": ["slug"], "pagination": {"pageSize": _PAGE_SIZE}},
        )
        return [page["slug"] for page in pages if page.get("slug")]

    @traced("strapi.fetch_all_pages")
    async def fetch_all_pages(self, locale: str) -> list[dict[str, Any]]:
        """Return title/slug summaries of every page in the locale."""
        return await self._get_collection(
            "/pages",
            {
                "locale": locale,
                "fields": ["title", "slug"],
                "pagination": {"pageSize": _PAGE_SIZE},
            },
        )

    @traced("strapi.fetch_news_articles")
    async def fetch_news_articles(
        self,
        locale: str,
        tags: list[str] | None = None,
        limit: int | None = None,
        sort: str = "date:desc",
    ) -> list[dict[str, Any]]:
        """Return news article summaries; tags filter with OR semantics."""
        params: dict[str, Any] = {
            "locale": locale,
            "sort": [sort],
            "populate": {"image": True, "tags": True},
        }
        if tags:
            params["filters"] = {"tags": {"slug": {"$in": list(tags)}}}
        if limit:
            params["pagination"] = {"limit": limit}
        return await self._get_collection("/news-articles", params)

    @traced("strapi.fetch_news_article_by_slug")
    async def fetch_news_article_by_slug(self, slug: str, locale: str) -> dict[str, Any] | None:
        """Return one news article with media, gallery and documents populated."""
        articles = await self._get_collection(
            "/news-articles",
            {
                "locale": locale,
                "filters": {"slug": {"$eq": slug}},
                "populate": _NEWS_DETAIL_POPULATE,
            },
        )
        return articles[0] if articles else None

    @traced("strapi.fetch_all_news_article_slugs")
    async def fetch_all_news_article_slugs(self, locale: str) -> list[str]:
        """Return every news article slug in the locale."""
        articles = await self._get_collection(
            "/news-articles",
            {"locale": locale, "fields": ["slug"], "pagination": {"pageSize": _PAGE_SIZE}},
        )
        return [article["slug"] for article in articles if article.get("slug")]

    @traced("strapi.fetch_icons")
    async def fetch_icons(self) -> list[dict[str, Any]]:
        """Return the icon library with image url/dimensions."""
        return await self._get_collection(
            "/icons",
            {
                "populate": {
                    "image": {"fields": ["url", "alternativeText", "width", "height"]},
                },
                "pagination": {"pageSize": _PAGE_SIZE},
            },
        )
