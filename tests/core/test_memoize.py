import functools

import pytest

from lrukit import lru_memoize
from lrukit.core.memoize import make_key
from lrukit.exceptions import InvalidArgumentError

def test_make_key_orders_kwargs():
    assert make_key(1, 2) == (1, 2)
    assert make_key(1, a=1, b=2) == make_key(1, b=2, a=1)
    assert make_key(1) != make_key(1, a=None)

def test_invalid_arguments_raise():
    with pytest.raises(InvalidArgumentError):
        lru_memoize(capacity=0)
    with pytest.raises(InvalidArgumentError):
        lru_memoize(key="not callable")

def test_sync_results_are_cached():
    calls = []

    @lru_memoize(capacity=4)
    def square(x):
        calls.append(x)
        return x * x

    assert square(3) == 9
    assert square(3) == 9
    assert square(4) == 16
    assert calls == [3, 4]
    assert square.cache_stats().size == 2
    assert square.__name__ == "square"

def test_sync_least_recent_result_is_evicted():
    calls = []

    @lru_memoize(capacity=2)
    def label(x):
        calls.append(x)
        return f"#{x}"

    label(1)
    label(2)
    label(1)
    label(3)
    label(1)
    label(2)

    assert calls == [1, 2, 3, 2]

def test_cache_clear():
    calls = []

    @lru_memoize(capacity=2)
    def ident(x):
        calls.append(x)
        return x

    ident(1)
    ident.cache_clear()
    ident(1)
    assert calls == [1, 1]
    assert ident.cache.size == 1

def test_custom_key_function():
    calls = []

    @lru_memoize(capacity=8, key=lambda text, **_: text.lower())
    def shout(text, suffix="!"):
        calls.append(text)
        return text.upper() + suffix

    assert shout("hi") == "HI!"
    assert shout("HI", suffix="?") == "HI!"
    assert calls == ["hi"]

def test_exceptions_are_not_cached():
    attempts = []

    @lru_memoize()
    def flaky(x):
        attempts.append(x)
        if len(attempts) == 1:
            raise ValueError("first call fails")
        return x

    with pytest.raises(ValueError):
        flaky(1)
    assert flaky(1) == 1
    assert flaky(1) == 1
    assert attempts == [1, 1]

def test_none_result_is_cached():
    calls = []

    @lru_memoize()
    def nothing(x):
        calls.append(x)
        return None

    assert nothing(1) is None
    assert nothing(1) is None
    assert calls == [1]

def test_unhashable_arguments_raise_type_error():
    @lru_memoize()
    def total(values):
        return sum(values)

    with pytest.raises(TypeError):
        total([1, 2, 3])

@pytest.mark.asyncio
async def test_async_results_are_cached():
    calls = []

    @lru_memoize(capacity=2)
    async def fetch(x):
        calls.append(x)
        return {"id": x}

    assert await fetch(1) == {"id": 1}
    assert await fetch(1) == {"id": 1}
    await fetch(2)
    await fetch(3)
    await fetch(1)

    assert calls == [1, 2, 3, 1]
    assert fetch.cache.metrics.hits == 1

@pytest.mark.asyncio
async def test_async_exceptions_are_not_cached():
    @lru_memoize()
    async def broken(x):
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        await broken(1)
    assert not broken.cache.contains_key((1,))

def test_keyword_call_does_not_collide_with_positional_tuples():
    """f(1, a=1) and f((1,), (("a", 1),)) must be cached separately."""
    @lru_memoize()
    def echo(*args, **kwargs):
        return args, kwargs

    assert echo(1, a=1) == ((1,), {"a": 1})
    assert echo((1,), (("a", 1),)) == (((1,), (("a", 1),)), {})
    assert echo.cache.size == 2

def test_make_key_separates_kwargs():
    assert make_key(1, a=1) != make_key((1,), (("a", 1),))
    assert make_key(1, a=1) != make_key(1, "a", 1)

def test_partial_without_qualname():
    """Callables lacking __qualname__ can still be decorated."""
    def scale(factor, x):
        return factor * x

    double = lru_memoize(capacity=2)(functools.partial(scale, 2))

    assert double(4) == 8
    assert double(4) == 8
    assert double.cache.metrics.hits == 1
    assert double.cache.name.startswith("functools.partial")
