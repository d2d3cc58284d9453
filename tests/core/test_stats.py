import dataclasses

import pytest

from lrukit import LRUCache
from lrukit.core.stats import CacheMetrics, CacheStats


class TestCacheStats:
    """Tests for the CacheStats snapshot."""

    def test_utilization_ratio(self):
        stats = CacheStats(size=1, max_size=4, is_full=False)
        assert stats.utilization_ratio == 0.25

    def test_empty_and_full_bounds(self):
        assert CacheStats(size=0, max_size=5, is_full=False).utilization_ratio == 0.0
        assert CacheStats(size=5, max_size=5, is_full=True).utilization_ratio == 1.0

    def test_is_frozen(self):
        stats = CacheStats(size=1, max_size=2, is_full=False)
        with pytest.raises(dataclasses.FrozenInstanceError):
            stats.size = 2

    def test_to_dict(self):
        stats = CacheStats(size=2, max_size=8, is_full=False)
        assert stats.to_dict() == {
            'size': 2,
            'max_size': 8,
            'is_full': False,
            'utilization_ratio': 0.25,
        }

    def test_str_rounds_to_one_decimal(self):
        stats = CacheStats(size=1, max_size=3, is_full=False)
        assert str(stats) == "CacheStats(size: 1/3, utilization: 33.3%)"


class TestCacheMetrics:
    """Tests for the operation counters kept by LRUCache."""

    def test_hit_rate_without_lookups(self):
        assert CacheMetrics().hit_rate == 0.0

    def test_counters_track_operations(self):
        cache = LRUCache(2)
        cache.put("a", 1)
        cache.put("a", 2)
        cache.put("b", 3)
        cache.put("c", 4)
        cache.get("b")
        cache.get("a")
        cache.remove("c")

        metrics = cache.metrics
        assert metrics.insertions == 3
        assert metrics.updates == 1
        assert metrics.evictions == 1
        assert metrics.hits == 1
        assert metrics.misses == 1
        assert metrics.removals == 1
        assert metrics.total_lookups == 2
        assert metrics.hit_rate == 0.5

    def test_reset_metrics_keeps_entries(self):
        cache = LRUCache(2)
        cache.put("a", 1)
        cache.get("a")
        cache.reset_metrics()

        assert cache.metrics.to_dict()["hits"] == 0
        assert cache.get("a") == 1

    def test_clear_keeps_metrics(self):
        cache = LRUCache(2)
        cache.put("a", 1)
        cache.get("a")
        cache.clear()
        assert cache.metrics.hits == 1

    def test_str(self):
        metrics = CacheMetrics(hits=3, misses=1, evictions=2)
        assert str(metrics) == "CacheMetrics(hits=3, misses=1, hit_rate=75.0%, evictions=2)"
