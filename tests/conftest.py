"""Pytest configuration and fixtures for the content cache service.

Uses app.main:app for HTTP tests. ASGITransport does not run the lifespan, so
the service graph is placed on app.state by the services fixture, backed by an
in-memory cache and a mocked Strapi client.
"""

import os
import re
from typing import Any
from unittest.mock import AsyncMock

# Settings are read when app.main is imported; fix the environment first.
os.environ["STRAPI_WEBHOOK_SECRET"] = "test-webhook-secret"
os.environ["REDIS_URL"] = ""
os.environ["STRAPI_URL"] = "http://strapi.test"
os.environ["SUPPORTED_LOCALES"] = "cs,en"
os.environ["DEFAULT_LOCALE"] = "cs"

import pytest
from httpx import ASGITransport, AsyncClient

from app.application.dtos.cache import CacheStats
from app.application.services.cache_invalidation import CacheInvalidationService
from app.application.services.content_cache import ContentCache
from app.application.services.content_service import ContentService
from app.core.config import get_settings
from app.core.limiter import limiter
from app.infrastructure.cms.strapi_client import StrapiClient
from app.main import app

WEBHOOK_SECRET = "test-webhook-secret"
SIGNATURE_HEADER = "X-Strapi-Webhook-Signature"


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a Redis MATCH glob (*, ?, backslash escapes) to a regex."""
    out: list[str] = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            out.append(re.escape(next(chars, "\\")))
        elif ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        else:
            out.append(re.escape(ch))
    return re.compile("".join(out) + r"\Z", re.DOTALL)


class InMemoryCache:
    """ICacheService double with Redis glob semantics; records TTLs and deletes."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, int] = {}
        self.deleted_patterns: list[str] = []
        self.available = True

    async def get(self, key: str) -> Any:
        return self.data.get(key) if self.available else None

    async def set(self, key: str, value: Any, ttl: int = 0) -> bool:
        if not self.available:
            return False
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        self.data.pop(key, None)
        return self.available

    async def delete_pattern(self, pattern: str) -> int:
        self.deleted_patterns.append(pattern)
        if not self.available:
            return 0
        regex = _glob_to_regex(pattern)
        matched = [key for key in self.data if regex.match(key)]
        for key in matched:
            del self.data[key]
        return len(matched)

    async def clear_all(self) -> bool:
        if not self.available:
            return False
        self.data.clear()
        return True

    async def ping(self) -> bool:
        return self.available

    async def stats(self) -> CacheStats:
        if not self.available:
            return CacheStats(available=False)
        keys = sorted(self.data)
        return CacheStats(available=True, key_count=len(keys), keys=keys)


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    limiter.reset()


@pytest.fixture
def memory_cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def cms() -> AsyncMock:
    """Strapi client mock; every fetch returns empty content unless a test sets it."""
    mock = AsyncMock(spec=StrapiClient)
    mock.fetch_navigation.return_value = []
    mock.fetch_footer.return_value = None
    mock.fetch_page_by_slug.return_value = None
    mock.fetch_all_page_slugs.return_value = []
    mock.fetch_all_pages.return_value = []
    mock.fetch_news_articles.return_value = []
    mock.fetch_news_article_by_slug.return_value = None
    mock.fetch_all_news_article_slugs.return_value = []
    mock.fetch_icons.return_value = []
    return mock


@pytest.fixture
async def services(memory_cache: InMemoryCache, cms: AsyncMock) -> ContentCache:
    """Install the service graph on app.state (what the lifespan does in production)."""
    content_cache = ContentCache(memory_cache)
    app.state.cache = memory_cache
    app.state.content_cache = content_cache
    app.state.invalidation = CacheInvalidationService(memory_cache)
    app.state.cms = cms
    app.state.content = ContentService(cms, content_cache)
    yield content_cache
    await content_cache.drain()


@pytest.fixture
async def client(services: ContentCache) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def no_webhook_secret():
    """Run a test with STRAPI_WEBHOOK_SECRET unset."""
    prev = os.environ.pop("STRAPI_WEBHOOK_SECRET", None)
    get_settings.cache_clear()
    try:
        yield
    finally:
        if prev is not None:
            os.environ["STRAPI_WEBHOOK_SECRET"] = prev
        get_settings.cache_clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {SIGNATURE_HEADER: WEBHOOK_SECRET}
