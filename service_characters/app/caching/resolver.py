"""
Cache-aside resolution: read through Redis, fall back to the upstream API.
"""

import json
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TYPE_CHECKING

from shared.logging import get_logger

from .store import RedisStore
from ..stats.aggregator import StatsAggregator

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


@dataclass(frozen=True)
class CacheResult:
    """Resolved payload and where it came from."""

    value: Any
    cached: bool
    elapsed_ms: float


class CacheAsideResolver:
    """Look up a key in the store, fetching and storing it on a miss.

    Concurrent misses for the same key are not coalesced: each caller fetches
    upstream and the last write wins. A fetch that raises leaves the store
    untouched. A failed store read is not recorded in the stats.
    """

    def __init__(
        self,
        store: RedisStore,
        stats: StatsAggregator,
        *,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.store = store
        self.stats = stats
        self.metrics = metrics
        self.logger = get_logger("characters.cache.resolver")

    async def resolve(
        self,
        key: str,
        ttl_seconds: int,
        fetch: Callable[[], Awaitable[Any]],
        *,
        cache_type: str = "default",
    ) -> CacheResult:
        start = time.perf_counter()
        cached = await self._read(key)
        self.stats.record_request()

        if cached is not None:
            self.stats.record_hit()
            self._count("cache_hits_total", cache_type)
            elapsed_ms = self._elapsed_ms(start)
            self.logger.info("Cache hit", key=key, cache_type=cache_type, elapsed_ms=elapsed_ms)
            return CacheResult(value=cached, cached=True, elapsed_ms=elapsed_ms)

        self.stats.record_miss()
        self._count("cache_misses_total", cache_type)
        self.logger.info("Cache miss", key=key, cache_type=cache_type)

        if self.metrics is not None:
            with self.metrics.time_operation("upstream_request_duration_seconds", cache_type=cache_type):
                value = await fetch()
        else:
            value = await fetch()

        await self.store.set(key, json.dumps(value), ttl_seconds)

        elapsed_ms = self._elapsed_ms(start)
        self.logger.info(
            "Cached upstream response",
            key=key,
            cache_type=cache_type,
            ttl_seconds=ttl_seconds,
            elapsed_ms=elapsed_ms,
        )
        return CacheResult(value=value, cached=False, elapsed_ms=elapsed_ms)

    async def _read(self, key: str) -> Optional[Any]:
        """Return the decoded cached value, or None on a miss."""
        raw = await self.store.get(key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            self.logger.warning("Discarding malformed cache payload", key=key)
            return None

    def _count(self, metric_name: str, cache_type: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter(metric_name, cache_type=cache_type)

    @staticmethod
    def _elapsed_ms(start: float) -> float:
        return round((time.perf_counter() - start) * 1000, 2)
