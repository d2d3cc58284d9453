"""
lrukit - Bounded LRU Caching
============================

A fixed-capacity, least-recently-used cache with O(1) operations and a small
statistics surface.
"""

__version__ = "0.1.0"

from .core.cache import LRUCache, CacheEntry
from .core.stats import CacheStats, CacheMetrics
from .core.synchronized import SynchronizedLRUCache
from .core.memoize import lru_memoize
from .exceptions import (
    LRUKitError,
    ConfigurationError,
    ValidationError,
    InvalidArgumentError
)

__all__ = [
    "LRUCache",
    "CacheEntry",
    "CacheStats",
    "CacheMetrics",
    "SynchronizedLRUCache",
    "lru_memoize",
    "LRUKitError",
    "ConfigurationError",
    "ValidationError",
    "InvalidArgumentError"
]
