"""
Redis store wrapper for the Characters Service.
"""

from typing import Optional

import redis.asyncio as redis

from shared.logging import get_logger
from shared.errors import CacheStoreError


class RedisStore:
    """String key/value store with per-key expiry, backed by Redis.

    Every Redis failure is re-raised as ``CacheStoreError`` so callers see a
    single error type for the store.
    """

    def __init__(
        self,
        redis_url: str,
        *,
        socket_timeout: float = 5.0,
        client: Optional[redis.Redis] = None,
    ):
        self.redis_url = redis_url
        self.socket_timeout = socket_timeout
        self.logger = get_logger("characters.cache.redis")
        self.redis: Optional[redis.Redis] = client

    def _client(self) -> redis.Redis:
        if self.redis is None:
            self.redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=self.socket_timeout,
                socket_timeout=self.socket_timeout,
                health_check_interval=30
            )
        return self.redis

    async def start(self) -> None:
        """Open the connection and verify Redis answers."""
        try:
            await self._client().ping()
        except Exception as e:
            self.logger.error("Failed to connect to Redis", redis_url=self.redis_url, error=str(e))
            raise CacheStoreError(f"Unable to connect to Redis at {self.redis_url}: {e}") from e

        self.logger.info("Connected to Redis", redis_url=self.redis_url)

    async def stop(self) -> None:
        """Close the Redis connection."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self.logger.info("Redis connection closed")

    async def get(self, key: str) -> Optional[str]:
        """Return the stored string for ``key`` or None when absent or expired."""
        try:
            return await self._client().get(key)
        except Exception as e:
            self.logger.error("Redis read failed", key=key, error=str(e))
            raise CacheStoreError(f"Redis read failed: {e}", details={"key": key}) from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, expiring after ``ttl_seconds``."""
        try:
            await self._client().set(key, value, ex=ttl_seconds)
        except Exception as e:
            self.logger.error("Redis write failed", key=key, error=str(e))
            raise CacheStoreError(f"Redis write failed: {e}", details={"key": key}) from e

    async def flush(self) -> str:
        """Flush the whole database and return Redis's acknowledgment."""
        try:
            acknowledged = await self._client().flushdb()
        except Exception as e:
            self.logger.error("Redis flush failed", error=str(e))
            raise CacheStoreError(f"Redis flush failed: {e}") from e

        return "OK" if acknowledged else "FAILED"

    async def key_count(self) -> int:
        """Number of keys currently held in the database."""
        try:
            return int(await self._client().dbsize())
        except Exception as e:
            self.logger.error("Redis key count failed", error=str(e))
            raise CacheStoreError(f"Redis key count failed: {e}") from e

    async def is_connected(self) -> bool:
        """Return True when Redis responds to a ping."""
        if self.redis is None:
            return False
        try:
            return bool(await self.redis.ping())
        except Exception as e:
            self.logger.warning("Redis ping failed", error=str(e))
            return False
