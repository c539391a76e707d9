"""Ready-made guards for parameters.

A guard is any one-argument callable that returns the value to store or
raises to reject it. The factories here build common guards; all of them
raise ValidationError on rejection.

Example:
    >>> rate = make_parameter(0.5, bounded(0.0, 1.0))
    >>> steps = make_parameter(10, bounded(1, 1000, kind="int"))
    >>> mode = make_parameter("fast", one_of("fast", "exact"))
"""

import math
from typing import Any, Callable, Optional, Tuple, Union

import numpy as np

from ._signatures import accepts_positional, shape_of
from .errors import InvalidGuardError, ValidationError

Scalar = Union[float, int]


def identity(value: Any) -> Any:
    """Default guard: accept anything unchanged."""
    return value


def instance_of(*types: type) -> Callable[[Any], Any]:
    """Guard accepting only instances of the given types."""
    if not types:
        raise ValueError("instance_of requires at least one type")
    expected = " or ".join(t.__name__ for t in types)

    def guard(value: Any) -> Any:
        if not isinstance(value, types):
            raise ValidationError(f"Expected {expected}, got {type(value).__name__}")
        return value

    return guard


def one_of(*choices: Any) -> Callable[[Any], Any]:
    """Guard accepting only values equal to one of ``choices``."""
    if not choices:
        raise ValueError("one_of requires at least one choice")

    def guard(value: Any) -> Any:
        if value not in choices:
            raise ValidationError(f"Expected one of {list(choices)}, got {value!r}")
        return value

    return guard


def bounded(min: Scalar, max: Scalar, kind: str = "float") -> Callable[[Any], Scalar]:
    """Guard for numeric values within inclusive bounds.

    Args:
        min: Lower bound (inclusive)
        max: Upper bound (inclusive)
        kind: "float" or "int"

    Returns:
        Guard returning the value, with integer-like floats converted to
        int when kind is "int"

    Raises:
        ValueError: If kind is unknown, min > max, or int bounds aren't ints
    """
    if kind not in ("float", "int"):
        raise ValueError(f"kind must be 'float' or 'int', got {kind}")
    if min > max:
        raise ValueError(f"min ({min}) > max ({max})")
    if kind == "int" and (not isinstance(min, int) or not isinstance(max, int)):
        raise ValueError("Integer guard must have integer bounds")

    def guard(value: Any) -> Scalar:
        # bool is an int subclass in Python; reject explicitly
        if isinstance(value, bool):
            raise ValidationError(f"Expected {'int' if kind == 'int' else 'numeric'} value, got bool")
        if not isinstance(value, (int, float)):
            raise ValidationError(f"Expected numeric value, got {type(value).__name__}")

        if isinstance(value, float):
            if math.isnan(value):
                raise ValidationError("Value cannot be NaN")
            if math.isinf(value):
                raise ValidationError("Value cannot be infinite")

        if kind == "int" and isinstance(value, float):
            # Accept 3.0, reject 3.9
            if value != math.floor(value):
                raise ValidationError(f"Expected integer value, got float {value}")
            value = int(value)

        if not (min <= value <= max):
            raise ValidationError(f"Value {value} outside bounds [{min}, {max}]")
        return value

    return guard


def as_array(
    dtype: Any = None, shape: Optional[Tuple[Optional[int], ...]] = None
) -> Callable[[Any], np.ndarray]:
    """Guard converting values to read-only numpy arrays.

    Args:
        dtype: dtype passed to numpy.asarray (None keeps numpy's inference)
        shape: Expected shape; None entries match any length on that axis

    Returns:
        Guard returning a read-only copy of the converted array
    """

    def guard(value: Any) -> np.ndarray:
        try:
            array = np.array(value, dtype=dtype, copy=True)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Cannot convert {type(value).__name__} to array: {e}") from e

        if shape is not None:
            if array.ndim != len(shape) or any(
                want is not None and want != got for want, got in zip(shape, array.shape)
            ):
                raise ValidationError(f"Expected array of shape {shape}, got {array.shape}")

        # Stored arrays must not be mutable through an outside reference
        array.setflags(write=False)
        return array

    return guard


def chain(*guards: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose guards left to right; each receives the previous one's output."""
    for g in guards:
        if not accepts_positional(g, 1):
            raise InvalidGuardError(
                f"Expected guard to be a callable taking one argument, got {shape_of(g)}"
            )

    def guard(value: Any) -> Any:
        for g in guards:
            value = g(value)
        return value

    return guard
