"""Shared fixtures for parameter and scope tests."""

import pytest

from dynparam import ValidationError, make_parameter


@pytest.fixture
def positive():
    """Guard rejecting non-positive numbers."""

    def guard(value):
        if value <= 0:
            raise ValidationError(f"Expected positive value, got {value}")
        return value

    return guard


@pytest.fixture
def letter():
    """Parameter holding a single lower-cased letter."""

    def is_letter(value):
        if not isinstance(value, str) or len(value) != 1 or not value.isalpha():
            raise ValidationError(f"Expected a letter, got {value!r}")
        return value.lower()

    return make_parameter("a", is_letter, name="letter")


@pytest.fixture
def count(positive):
    """Parameter holding a positive number, initially 1."""
    return make_parameter(1, positive, name="count")


@pytest.fixture
def flag():
    """Unguarded parameter, initially False."""
    return make_parameter(False)
