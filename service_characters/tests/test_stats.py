"""
Unit tests for cache statistics.
"""

import threading

import pytest

from service_characters.app.stats.aggregator import StatsAggregator, StatsSnapshot, format_uptime
from shared.test_helpers import FakeClock


class TestStatsAggregator:
    """Test cases for StatsAggregator."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def stats(self, clock):
        return StatsAggregator(clock=clock)

    def test_hit_rate_is_zero_without_requests(self, stats):
        snapshot = stats.snapshot()

        assert snapshot.total == 0
        assert snapshot.hit_rate == 0

    def test_hit_rate_is_percentage_rounded_to_two_decimals(self):
        assert StatsSnapshot(hits=1, misses=2, total=3, uptime_seconds=0).hit_rate == 33.33
        assert StatsSnapshot(hits=1, misses=0, total=8, uptime_seconds=0).hit_rate == 12.5
        assert StatsSnapshot(hits=4, misses=0, total=4, uptime_seconds=0).hit_rate == 100.0

    def test_counters_accumulate(self, stats):
        for _ in range(3):
            stats.record_request()
        stats.record_hit()
        stats.record_miss()
        stats.record_miss()

        snapshot = stats.snapshot()
        assert (snapshot.hits, snapshot.misses, snapshot.total) == (1, 2, 3)

    def test_uptime_follows_clock(self, stats, clock):
        clock.advance(3725.9)

        assert stats.uptime_seconds() == 3725
        assert stats.snapshot().uptime_seconds == 3725

    def test_concurrent_updates_are_not_lost(self, stats):
        def worker():
            for _ in range(1000):
                stats.record_request()
                stats.record_hit()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        snapshot = stats.snapshot()
        assert snapshot.total == 8000
        assert snapshot.hits == 8000


@pytest.mark.parametrize(
    "seconds,expected",
    [
        (0, "0h 0m 0s"),
        (59, "0h 0m 59s"),
        (61, "0h 1m 1s"),
        (3725, "1h 2m 5s"),
        (90000, "25h 0m 0s"),
    ],
)
def test_format_uptime(seconds, expected):
    assert format_uptime(seconds) == expected
