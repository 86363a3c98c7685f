"""Redis-based cache service in front of the CMS.

Provides async Redis caching with TTL support for CMS content. Every key is
written under CACHE_PREFIX so pattern deletes and clear_all never touch
unrelated data sharing the same Redis database. Integrates with
app.infrastructure.cache.keys for key format (DRY).

Nothing here raises to callers: on any failure reads behave as a miss and
writes report False, so total cache loss is equivalent to "not configured".
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff

from app.application.dtos.cache import CacheStats
from app.core.config import Settings, get_settings
from app.core.constants import CACHE_PREFIX, DEFAULT_TTL_SECONDS

logger = logging.getLogger(__name__)

# Backoff between retries is capped below the request budget of a page render.
_RETRY_BACKOFF_CAP_SECONDS = 2.0
_RETRY_BACKOFF_BASE_SECONDS = 0.1


class CacheService:
    """Async Redis cache service with TTL support and lazy connection.

    The connection is opened on first use, not at startup. Without REDIS_URL,
    or after a failed connection attempt, the service disables itself for
    the rest of the process lifetime instead of retrying on every request.
    A redeploy (fresh process) gets a fresh attempt.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
        prefix: str = CACHE_PREFIX,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI; still pinged lazily.
            settings: Optional settings override; defaults to get_settings().
            prefix: Namespace prefix for every key.
        """
        self.settings = settings or get_settings()
        self.prefix = prefix
        self._redis = redis_client
        self._connected = False
        self._disabled = False
        self._connect_lock = asyncio.Lock()

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _strip_prefix(self, key: str) -> str:
        return key[len(self.prefix):] if key.startswith(self.prefix) else key

    def _build_client(self) -> redis.Redis:
        retry = Retry(
            ExponentialBackoff(cap=_RETRY_BACKOFF_CAP_SECONDS, base=_RETRY_BACKOFF_BASE_SECONDS),
            self.settings.redis_max_retries,
        )
        return redis.from_url(
            self.settings.redis_url,
            decode_responses=True,
            socket_timeout=self.settings.redis_socket_timeout,
            socket_connect_timeout=self.settings.redis_connect_timeout,
            retry=retry,
            retry_on_error=[redis.ConnectionError, redis.TimeoutError],
        )

    async def _get_client(self) -> redis.Redis | None:
        """Return a connected client, connecting on first use; None when disabled."""
        if self._connected:
            return self._redis
        if self._disabled:
            return None
        async with self._connect_lock:
            if self._connected:
                return self._redis
            if self._disabled:
                return None
            if self._redis is None:
                if not self.settings.redis_url:
                    logger.warning("REDIS_URL not configured, caching disabled")
                    self._disabled = True
                    return None
                self._redis = self._build_client()
            try:
                await self._redis.ping()
            except (redis.RedisError, OSError) as e:
                logger.error("Redis connection failed: %s. Cache disabled for this process.", e)
                await self._close_quietly()
                self._disabled = True
                return None
            self._connected = True
            logger.info("Redis cache connected")
            return self._redis

    async def _close_quietly(self) -> None:
        client, self._redis = self._redis, None
        if client is None:
            return
        try:
            await client.aclose()
        except (redis.RedisError, OSError) as e:
            logger.debug("Ignoring error while closing Redis client: %s", e)

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self._redis is not None:
            await self._close_quietly()
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable (False before first use)."""
        return self._connected and self._redis is not None

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key without prefix (use app.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """
        client = await self._get_client()
        if client is None:
            return None
        try:
            value = await client.get(self._full_key(key))
        except (redis.RedisError, OSError) as e:
            logger.error("Cache get error for key %s: %s", key, e)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            result = json.loads(value)
        except ValueError:
            logger.error("Cache entry for key %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return result

    async def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL_SECONDS) -> bool:
        """Store value with TTL. Returns True on success.

        Args:
            key: Cache key without prefix.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds (default 24h).

        Returns:
            True if stored, False otherwise. Callers treat writes as best-effort.
        """
        client = await self._get_client()
        if client is None:
            return False
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error("Cache value for key %s is not JSON-serializable: %s", key, e)
            return False
        try:
            await client.setex(self._full_key(key), ttl, serialized)
        except (redis.RedisError, OSError) as e:
            logger.error("Cache set error for key %s: %s", key, e)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command succeeded.

        Args:
            key: Cache key to delete, without prefix.

        Returns:
            True if the delete ran (whether or not the key existed), False otherwise.
        """
        client = await self._get_client()
        if client is None:
            return False
        try:
            await client.delete(self._full_key(key))
        except (redis.RedisError, OSError) as e:
            logger.error("Cache delete error for key %s: %s", key, e)
            return False
        logger.debug("Cache DELETE: %s", key)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking).

        Uses scan_iter to avoid KEYS blocking; collects keys in chunks and
        UNLINKs each chunk to minimize round-trips and keep deletion async on server.

        Args:
            pattern: Glob pattern without prefix (e.g. page:cs:*); scoped to the prefix.

        Returns:
            Number of keys deleted (0 if unavailable).
        """
        client = await self._get_client()
        if client is None:
            return 0
        chunk_size = self.settings.redis_scan_count
        deleted = 0
        try:
            chunk: list[str] = []
            async for key in client.scan_iter(match=self._full_key(pattern), count=chunk_size):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += await self._unlink(client, chunk)
                    chunk = []
            if chunk:
                deleted += await self._unlink(client, chunk)
        except (redis.RedisError, OSError) as e:
            logger.error("Cache delete_pattern error for %s: %s", pattern, e)
            return deleted
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    @staticmethod
    async def _unlink(client: redis.Redis, keys: list[str]) -> int:
        async with client.pipeline(transaction=False) as pipe:
            pipe.unlink(*keys)
            results = await pipe.execute()
        return sum(int(r or 0) for r in results)

    async def clear_all(self) -> bool:
        """Delete every key under the namespace prefix (never FLUSHDB).

        Returns:
            True if the namespace was scanned and cleared, False otherwise.
        """
        client = await self._get_client()
        if client is None:
            return False
        try:
            keys = [key async for key in client.scan_iter(match=self._full_key("*"))]
            for start in range(0, len(keys), self.settings.redis_scan_count):
                await self._unlink(client, keys[start:start + self.settings.redis_scan_count])
        except (redis.RedisError, OSError) as e:
            logger.error("Cache clear error: %s", e)
            return False
        logger.warning("Cache CLEARED: %s keys deleted", len(keys))
        return True

    async def ping(self) -> bool:
        """Return True if Redis answers PING. Used by the readiness check."""
        client = await self._get_client()
        if client is None:
            return False
        try:
            return bool(await client.ping())
        except (redis.RedisError, OSError) as e:
            logger.warning("Cache ping failed: %s", e)
            return False

    async def stats(self) -> CacheStats:
        """Return availability and the keys under the prefix (without prefix). Never raises."""
        client = await self._get_client()
        if client is None:
            return CacheStats(available=False)
        try:
            keys = sorted(
                [self._strip_prefix(key) async for key in client.scan_iter(match=self._full_key("*"))]
            )
        except (redis.RedisError, OSError) as e:
            logger.error("Cache stats error: %s", e)
            return CacheStats(available=False)
        return CacheStats(available=True, key_count=len(keys), keys=keys)
