"""Temporary rebinding of parameters.

parameterize swaps a set of parameters to new values, runs a zero-argument
body, and puts the previous values back on every exit path: normal return,
guard rejection while applying, an exception from the body, or cancellation
of an async body.

Key rules:
- All bindings are validated before any parameter is touched
- Each parameter's original value is snapshotted once, even if it appears
  more than once; later duplicates win while the body runs
- Restoration runs in snapshot order and bypasses the guard, since the
  snapshotted values already passed it

Parameters are shared cells, not per-thread or per-task state. Concurrent
flows rebinding the same parameter see whichever flow applied last.
"""

import contextlib
import inspect
import logging
from collections.abc import Sequence
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Tuple, TypeVar, Union

from ._signatures import accepts_positional, shape_of
from .errors import InvalidArgumentError
from .parameter import Parameter, is_parameter

logger = logging.getLogger(__name__)

R = TypeVar("R")

Binding = Tuple[Parameter, Any]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _validate_bindings(bindings: Any) -> List[Binding]:
    """Check every pair up front so a bad entry never leaves partial state."""
    if not _is_sequence(bindings):
        raise InvalidArgumentError(
            f"Expected bindings to be a list of (parameter, value) pairs, "
            f"got {type(bindings).__name__}"
        )

    pairs: List[Binding] = []
    for i, pair in enumerate(bindings):
        if not _is_sequence(pair):
            raise InvalidArgumentError(
                f"Expected binding at index {i} to be a (parameter, value) pair, "
                f"got {type(pair).__name__}"
            )
        if len(pair) != 2:
            raise InvalidArgumentError(
                f"Expected binding at index {i} to have 2 items, got {len(pair)}"
            )
        parameter, value = pair
        if not is_parameter(parameter):
            raise InvalidArgumentError(
                f"Expected first item of binding at index {i} to be a parameter, "
                f"got {type(parameter).__name__}"
            )
        pairs.append((parameter, value))
    return pairs


def _validate_body(body: Any) -> None:
    if not accepts_positional(body, 0):
        raise InvalidArgumentError(
            f"Expected body to be a callable taking no arguments, got {shape_of(body)}"
        )


@contextlib.contextmanager
def parameterized(bindings: Sequence) -> Iterator[None]:
    """Context manager rebinding parameters for the duration of the block.

    Args:
        bindings: Sequence of (parameter, value) pairs

    Raises:
        InvalidArgumentError: If bindings are malformed (nothing is changed)
        Exception: Whatever a guard raises while applying a value; all
            parameters are restored first

    Example:
        >>> debug = make_parameter(False)
        >>> with parameterized([(debug, True)]):
        ...     debug()
        True
        >>> debug()
        False
    """
    pairs = _validate_bindings(bindings)

    originals: Dict[Parameter, Any] = {}
    for parameter, _ in pairs:
        if parameter not in originals:
            originals[parameter] = parameter()

    logger.debug(f"Rebinding {len(originals)} parameter(s) from {len(pairs)} binding(s)")
    try:
        for parameter, value in pairs:
            try:
                parameter(value)
            except Exception as e:
                logger.debug(f"Guard rejected value for {parameter!r}: {e}")
                raise
        yield
    finally:
        for parameter, value in originals.items():
            parameter._restore(value)
        logger.debug(f"Restored {len(originals)} parameter(s)")


def parameterize(bindings: Sequence, body: Callable[[], R]) -> R:
    """Run ``body`` with parameters temporarily rebound.

    Args:
        bindings: Sequence of (parameter, value) pairs
        body: Callable taking no arguments

    Returns:
        Whatever body returns

    Raises:
        InvalidArgumentError: If bindings or body are malformed, or body is a
            coroutine function or returns an awaitable (use parameterize_async)
        Exception: Guard failures and body failures propagate after the
            original values are restored

    Example:
        >>> n = make_parameter(1)
        >>> parameterize([(n, 100)], lambda: n() * 2)
        200
        >>> n()
        1
    """
    _validate_body(body)
    if inspect.iscoroutinefunction(body):
        raise InvalidArgumentError(
            "Body is a coroutine function; use parameterize_async so the "
            "bindings stay in place until it finishes"
        )
    with parameterized(bindings):
        result = body()
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise InvalidArgumentError(
                f"Body returned {type(result).__name__}; use parameterize_async so "
                f"the bindings stay in place until it finishes"
            )
        return result


async def parameterize_async(
    bindings: Sequence, body: Callable[[], Union[R, Awaitable[R]]]
) -> R:
    """Async variant of parameterize.

    The body may be a plain callable or return an awaitable; the bindings
    stay in effect until the awaited result is ready. Cancellation
    restores the original values before propagating.
    """
    _validate_body(body)
    with parameterized(bindings):
        result = body()
        if inspect.isawaitable(result):
            result = await result
        return result
