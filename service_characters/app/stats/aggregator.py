"""
Process-wide hit/miss bookkeeping for cache-aside lookups.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class StatsSnapshot:
    """Point-in-time copy of the counters."""

    hits: int
    misses: int
    total: int
    uptime_seconds: int

    @property
    def hit_rate(self) -> float:
        """Hit percentage rounded to two decimals, 0 when nothing was requested."""
        if self.total == 0:
            return 0.0
        return round(self.hits / self.total * 100, 2)


class StatsAggregator:
    """Counts cache hits, misses and lookups since process start.

    A lookup is counted once the store read succeeds, so hits + misses
    always equals total. Lookups that fail reading Redis are not counted.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self.start_time = self._clock()
        self._hits = 0
        self._misses = 0
        self._total = 0

    def record_request(self) -> None:
        with self._lock:
            self._total += 1

    def record_hit(self) -> None:
        with self._lock:
            self._hits += 1

    def record_miss(self) -> None:
        with self._lock:
            self._misses += 1

    def uptime_seconds(self) -> int:
        return int(self._clock() - self.start_time)

    def snapshot(self) -> StatsSnapshot:
        with self._lock:
            hits, misses, total = self._hits, self._misses, self._total
        return StatsSnapshot(
            hits=hits,
            misses=misses,
            total=total,
            uptime_seconds=self.uptime_seconds(),
        )


def format_uptime(seconds: int) -> str:
    """Render seconds as ``"<h>h <m>m <s>s"``."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}h {minutes}m {secs}s"
