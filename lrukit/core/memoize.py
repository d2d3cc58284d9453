"""
Memoization decorator backed by a bounded LRU cache.

Works on plain functions and coroutines. Results are kept in a
SynchronizedLRUCache, so a decorated function can be shared across threads.
"""
import functools
import inspect
import logging
from typing import Any, Awaitable, Callable, Hashable, Optional, TypeVar, Union, cast

from typing_extensions import ParamSpec, TypeAlias

from lrukit.core.synchronized import SynchronizedLRUCache
from lrukit.utils.validation import ensure_callable_or_none, validate_capacity

P = ParamSpec("P")
R = TypeVar("R")
FuncT: TypeAlias = Union[
    Callable[P, Awaitable[R]],  # Async function
    Callable[P, R],  # Sync function
]

logger = logging.getLogger(__name__)

_MISSING = object()

# Separates positional from keyword arguments in generated keys
_KWD_MARK = object()


def make_key(*args: Any, **kwargs: Any) -> Hashable:
    """
    Build a cache key from call arguments.

    Keyword arguments are sorted, so f(a=1, b=2) and f(b=2, a=1) share a key.
    Every argument must be hashable.
    """
    if not kwargs:
        return args
    return args + (_KWD_MARK,) + tuple(sorted(kwargs.items()))


def lru_memoize(
    capacity: int = 128,
    key: Optional[Callable[..., Hashable]] = None,
    name: Optional[str] = None,
) -> Callable[[FuncT[P, R]], FuncT[P, R]]:
    """
    Decorator that caches results of the wrapped function in an LRU cache.

    Args:
        capacity: Maximum number of results to keep.
        key: Optional function mapping the call arguments to a cache key.
            Defaults to make_key.
        name: Optional cache name for log records. Defaults to the
            function's qualified name.

    Returns:
        A decorator for functions or coroutine functions. The wrapper exposes
        ``cache``, ``cache_clear()`` and ``cache_stats()``.

    Raises:
        InvalidArgumentError: If capacity is not a positive integer or key
            is not callable.
    """
    validate_capacity(capacity)
    ensure_callable_or_none(key, "key")
    key_func = key or make_key

    def decorator(func: FuncT[P, R]) -> FuncT[P, R]:
        func_name = getattr(func, "__qualname__", repr(func))
        cache: SynchronizedLRUCache[Hashable, Any] = SynchronizedLRUCache(
            capacity, name=(name or func_name)[:100]
        )

        if inspect.iscoroutinefunction(func):
            # Handle async functions; the lock is never held across an await
            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                cache_key = key_func(*args, **kwargs)
                cached = cache.get(cache_key, _MISSING)
                if cached is not _MISSING:
                    return cast(R, cached)

                result = await cast(Awaitable[R], func(*args, **kwargs))
                cache.put(cache_key, result)
                return result

            wrapper: Any = async_wrapper
        else:
            # Handle sync functions
            @functools.wraps(func)
            def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                cache_key = key_func(*args, **kwargs)
                return cast(R, cache.get_or_compute(cache_key, lambda _: func(*args, **kwargs)))

            wrapper = sync_wrapper

        wrapper.cache = cache
        wrapper.cache_clear = cache.clear
        wrapper.cache_stats = lambda: cache.stats
        logger.debug("Memoizing %s with capacity %d", func_name, capacity)
        return cast(FuncT[P, R], wrapper)

    return decorator
