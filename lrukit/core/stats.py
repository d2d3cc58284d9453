"""
Statistics and metrics types for lrukit caches.

`CacheStats` is an immutable utilization snapshot computed on demand from a
cache. `CacheMetrics` accumulates operation counters over a cache's lifetime.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStats:
    """
    Point-in-time utilization snapshot of a cache.

    Attributes:
        size: Number of entries held when the snapshot was taken
        max_size: Capacity of the cache
        is_full: True when size equals max_size
    """
    size: int
    max_size: int
    is_full: bool

    @property
    def utilization_ratio(self) -> float:
        """Fraction of capacity in use, in the range [0, 1]."""
        return self.size / self.max_size

    def to_dict(self) -> dict:
        """Convert stats to a dictionary for easy serialization."""
        return {
            'size': self.size,
            'max_size': self.max_size,
            'is_full': self.is_full,
            'utilization_ratio': self.utilization_ratio,
        }

    def __str__(self) -> str:
        return (
            f"CacheStats(size: {self.size}/{self.max_size}, "
            f"utilization: {self.utilization_ratio * 100:.1f}%)"
        )


@dataclass
class CacheMetrics:
    """
    Operation counters for a cache.

    Attributes:
        hits: Number of get() calls that found their key
        misses: Number of get() calls that did not
        insertions: Number of put() calls that added a new key
        updates: Number of put() calls that overwrote an existing key
        evictions: Number of entries dropped to make room for a new key
        removals: Number of entries deleted through remove()
    """
    hits: int = 0
    misses: int = 0
    insertions: int = 0
    updates: int = 0
    evictions: int = 0
    removals: int = 0

    @property
    def total_lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Cache hit rate (hits / total lookups), 0.0 before any lookup."""
        total = self.total_lookups
        return self.hits / total if total > 0 else 0.0

    def reset(self) -> None:
        """Zero every counter."""
        self.hits = 0
        self.misses = 0
        self.insertions = 0
        self.updates = 0
        self.evictions = 0
        self.removals = 0

    def to_dict(self) -> dict:
        """Convert metrics to a dictionary for easy serialization."""
        return {
            'hits': self.hits,
            'misses': self.misses,
            'insertions': self.insertions,
            'updates': self.updates,
            'evictions': self.evictions,
            'removals': self.removals,
            'total_lookups': self.total_lookups,
            'hit_rate': self.hit_rate,
        }

    def __str__(self) -> str:
        return (
            f"CacheMetrics(hits={self.hits}, misses={self.misses}, "
            f"hit_rate={self.hit_rate:.1%}, evictions={self.evictions})"
        )
