"""Guarded parameter cells.

A parameter is a callable holding one value:

- ``p()`` returns the current value
- ``p(value)`` runs ``value`` through the guard, stores the result and returns it

The guard runs on every write, including the initial value, so the cell
never holds a value the guard rejected. Only make_parameter produces
recognised parameters; is_parameter checks membership in a weak set filled
by make_parameter, never the object's shape.
"""

import weakref
from typing import Any, Callable, Generic, Optional, TypeVar

from ._signatures import accepts_positional, shape_of
from .errors import InvalidGuardError
from .guards import identity

T = TypeVar("T")

Guard = Callable[[T], T]

# Distinguishes p() from p(None)
_MISSING: Any = object()

# Parameters produced by make_parameter, keyed by id(). Weak values so the
# registry never keeps one alive; entries vanish before an id can be reused.
_PARAMETERS: "weakref.WeakValueDictionary[int, Parameter[Any]]" = weakref.WeakValueDictionary()


class Parameter(Generic[T]):
    """A callable cell holding one guarded value.

    Use make_parameter to create instances; instances built any other way
    are not recognised by is_parameter or parameterize.

    Equality and hashing are by identity.
    """

    __slots__ = ("_value", "_guard", "name", "__weakref__")

    def __init__(self, value: T, guard: Guard, name: Optional[str] = None):
        self._value = value
        self._guard = guard
        self.name = name

    def __call__(self, value: T = _MISSING) -> T:
        if value is _MISSING:
            return self._value
        # Only replace the slot once the guard has accepted the value
        new_value = self._guard(value)
        self._value = new_value
        return new_value

    def _restore(self, value: T) -> None:
        """Write a previously guarded value back without re-running the guard."""
        self._value = value

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name is not None else ""
        return f"Parameter({label}{self._value!r})"


def is_parameter(value: Any) -> bool:
    """Return True if ``value`` was produced by make_parameter.

    Compares by reference, so objects overriding __eq__ or __hash__ cannot
    pass as parameters. Never raises.

    Example:
        >>> is_parameter(make_parameter(42))
        True
        >>> is_parameter(lambda value=None: value)
        False
    """
    return _PARAMETERS.get(id(value)) is value


def make_parameter(
    initial_value: T,
    guard: Optional[Guard] = None,
    *,
    name: Optional[str] = None,
) -> Parameter[T]:
    """Create a new parameter holding ``guard(initial_value)``.

    Args:
        initial_value: Value to store, passed through the guard first
        guard: One-argument callable validating or normalising values.
            Defaults to the identity function.
        name: Optional label used in repr and error messages

    Returns:
        A new parameter

    Raises:
        InvalidGuardError: If guard is not callable with one argument
        Exception: Whatever the guard raises for ``initial_value``; no
            parameter is created in that case

    Example:
        >>> count = make_parameter(0)
        >>> count(5)
        5
        >>> count()
        5
    """
    if guard is None:
        guard = identity
    elif not accepts_positional(guard, 1):
        raise InvalidGuardError(
            f"Expected guard to be a callable taking one argument, got {shape_of(guard)}"
        )

    parameter = Parameter(guard(initial_value), guard, name)
    _PARAMETERS[id(parameter)] = parameter
    return parameter
