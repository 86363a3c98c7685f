"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure implementations (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.cache import CacheStats


class ICacheService(Protocol):
    """Cache port shared by the content façade and the invalidation dispatcher.

    Implementations never raise: reads degrade to None, writes to False,
    pattern deletes to 0.
    """

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = ...) -> bool:
        """Store value with TTL in seconds. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""

    async def clear_all(self) -> bool:
        """Delete every key in the cache namespace."""

    async def ping(self) -> bool:
        """Return True if the backing store answers."""

    async def stats(self) -> CacheStats:
        """Return availability and key listing."""


class ICmsClient(Protocol):
    """Read-only port onto the CMS REST API (raw Strapi documents)."""

    async def fetch_navigation(self, locale: str) -> list[dict[str, Any]]:
        """Return navigation entries with link relations populated."""

    async def fetch_footer(self, locale: str) -> dict[str, Any] | None:
        """Return the footer single type, or None when unpublished."""

    async def fetch_page_by_slug(self, slug: str, locale: str) -> dict[str, Any] | None:
        """Return a fully populated page, or None."""

    async def fetch_all_page_slugs(self, locale: str) -> list[str]:
        """Return every page slug in the locale."""

    async def fetch_all_pages(self, locale: str) -> list[dict[str, Any]]:
        """Return title/slug summaries of every page in the locale."""

    async def fetch_news_articles(
        self,
        locale: str,
        tags: list[str] | None = None,
        limit: int | None = None,
        sort: str = "date:desc",
    ) -> list[dict[str, Any]]:
        """Return news article summaries, optionally filtered by tag slugs."""

    async def fetch_news_article_by_slug(self, slug: str, locale: str) -> dict[str, Any] | None:
        """Return a fully populated news article, or None."""

    async def fetch_all_news_article_slugs(self, locale: str) -> list[str]:
        """Return every news article slug in the locale."""

    async def fetch_icons(self) -> list[dict[str, Any]]:
        """Return the icon library."""
