"""Core cache types for lrukit."""

from .cache import CacheEntry, LRUCache
from .stats import CacheMetrics, CacheStats
from .synchronized import SynchronizedLRUCache
from .memoize import lru_memoize, make_key

__all__ = [
    "CacheEntry",
    "LRUCache",
    "CacheMetrics",
    "CacheStats",
    "SynchronizedLRUCache",
    "lru_memoize",
    "make_key",
]
