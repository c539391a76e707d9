"""Call-shape checks for guards and bodies."""

import inspect
from typing import Any


def _describe(value: Any) -> str:
    return type(value).__name__


def accepts_positional(func: Any, count: int) -> bool:
    """Check that ``func`` can be called with exactly ``count`` positional args.

    Callables whose signature cannot be introspected (some builtins and
    extension types) are given the benefit of the doubt.
    """
    if not callable(func):
        return False
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return True
    try:
        sig.bind(*([None] * count))
    except TypeError:
        return False
    return True


def shape_of(func: Any) -> str:
    """Human-readable call shape used in error messages."""
    if not callable(func):
        return _describe(func)
    try:
        return f"{getattr(func, '__name__', _describe(func))}{inspect.signature(func)}"
    except (TypeError, ValueError):
        return _describe(func)
