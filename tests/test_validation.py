import pytest

from lrukit.exceptions import InvalidArgumentError
from lrukit.utils.validation import (
    ensure_callable_or_none,
    validate_callable,
    validate_capacity,
    validate_name,
)

class TestValidateCapacity:
    """Test capacity validation."""

    @pytest.mark.parametrize("capacity", [1, 2, 10_000])
    def test_valid_capacity(self, capacity):
        validate_capacity(capacity)

    @pytest.mark.parametrize("capacity", [0, -5])
    def test_non_positive(self, capacity):
        with pytest.raises(InvalidArgumentError, match="Capacity must be greater than 0."):
            validate_capacity(capacity)

    @pytest.mark.parametrize("capacity", [False, 2.0, "10", None, [3]])
    def test_wrong_type(self, capacity):
        with pytest.raises(InvalidArgumentError, match="Capacity must be an integer."):
            validate_capacity(capacity)

class TestValidateName:
    """Test cache name validation."""

    def test_none_allowed(self):
        validate_name(None)

    def test_valid_name(self):
        validate_name("formatted-dates")

    def test_non_string(self):
        with pytest.raises(InvalidArgumentError, match="must be a string"):
            validate_name(42)

    def test_blank(self):
        with pytest.raises(InvalidArgumentError, match="cannot be empty"):
            validate_name("   ")

    def test_too_long(self):
        with pytest.raises(InvalidArgumentError, match="too long"):
            validate_name("x" * 101)

class TestValidateCallable:
    """Test factory and callback validation."""

    def test_callable_passes(self):
        validate_callable(len, "factory")
        ensure_callable_or_none(None, "on_evict")
        ensure_callable_or_none(print, "on_evict")

    def test_not_callable(self):
        with pytest.raises(InvalidArgumentError, match="factory must be callable."):
            validate_callable("nope", "factory")
        with pytest.raises(InvalidArgumentError, match="on_evict must be callable."):
            ensure_callable_or_none(3, "on_evict")
