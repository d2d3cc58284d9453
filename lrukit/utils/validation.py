from typing import Any, Callable

from lrukit.exceptions import InvalidArgumentError

def validate_capacity(capacity: int):
    """Ensures capacity is a positive integer."""
    # bool is an int subclass, but True is not a capacity
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidArgumentError(
            "Capacity must be an integer.", argument="capacity", value=capacity
        )

    if capacity <= 0:
        raise InvalidArgumentError(
            "Capacity must be greater than 0.", argument="capacity", value=capacity
        )

def validate_callable(func: Any, argument: str):
    """Ensures a factory or key function is callable."""
    if not callable(func):
        raise InvalidArgumentError(
            f"{argument} must be callable.", argument=argument, value=func
        )

def validate_name(name: Any):
    """Checks an optional cache name used in log records."""
    if name is None:
        return

    if not isinstance(name, str):
        raise InvalidArgumentError("Cache name must be a string.", argument="name", value=name)

    if not name.strip():
        raise InvalidArgumentError("Cache name cannot be empty.", argument="name", value=name)

    if len(name) > 100:
        raise InvalidArgumentError(
            "Cache name is too long. Maximum length is 100 characters.",
            argument="name",
            value=name,
        )

def ensure_callable_or_none(func: Callable[..., Any], argument: str):
    """Validates an optional callback argument."""
    if func is not None:
        validate_callable(func, argument)
