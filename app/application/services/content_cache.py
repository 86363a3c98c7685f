"""Content fetch façade: read-through cache in front of the CMS.

Callers hand over a key and a zero-argument async fetch function. A hit is
returned without touching the CMS; a miss fetches, schedules the cache write
as a background task and returns immediately. Writes never delay a response
and their failures are logged, never raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from app.application.interfaces.services import ICacheService
from app.core.constants import CACHE_MISS_MARKER, DEFAULT_TTL_SECONDS, NEGATIVE_TTL_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContentCache:
    """Get-or-populate wrapper over an ICacheService."""

    def __init__(self, cache: ICacheService) -> None:
        self.cache = cache
        self._background_tasks: set[asyncio.Task[None]] = set()

    async def get_or_set(
        self,
        key: str,
        fetch_fn: Callable[[], Awaitable[T]],
        ttl: int = DEFAULT_TTL_SECONDS,
    ) -> T | None:
        """Return the cached value for key, or fetch it and populate the cache.

        A None result is stored as a short-lived negative marker so the next
        call also returns None without fetching. Exceptions from fetch_fn
        propagate and nothing is written.

        Args:
            key: Un-prefixed cache key (see app.infrastructure.cache.keys).
            fetch_fn: Async callable producing the fresh value.
            ttl: Time-to-live in seconds for a non-None value.

        Returns:
            Cached or freshly fetched value.
        """
        cached = await self.cache.get(key)
        if cached is not None:
            if cached == CACHE_MISS_MARKER:
                return None
            return cached

        value = await fetch_fn()
        if value is None:
            self._schedule_write(key, CACHE_MISS_MARKER, min(ttl, NEGATIVE_TTL_SECONDS))
        else:
            self._schedule_write(key, value, ttl)
        return value

    def _schedule_write(self, key: str, value: Any, ttl: int) -> None:
        async def write() -> None:
            try:
                stored = await self.cache.set(key, value, ttl)
            except Exception:
                logger.exception("Background cache write failed for key %s", key)
                return
            if not stored:
                logger.debug("Cache write skipped for key %s", key)

        task = asyncio.create_task(write())
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    @property
    def pending_writes(self) -> int:
        return len(self._background_tasks)

    async def drain(self) -> None:
        """Wait for outstanding background writes (shutdown and tests)."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)


def cached(
    key_builder: Callable[..., str],
    ttl: int = DEFAULT_TTL_SECONDS,
) -> Callable:
    """Decorator routing an async method through its owner's ContentCache.

    The owner must expose the façade as ``self.cache``. key_builder receives
    the same arguments as the method (without self).

    Example:
        @cached(lambda slug, locale: page_key(locale, slug))
        async def get_page(self, slug, locale): ...
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @wraps(func)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            key = key_builder(*args, **kwargs)
            cache: ContentCache = self.cache
            return await cache.get_or_set(key, lambda: func(self, *args, **kwargs), ttl)

        return wrapper

    return decorator
