"""Tests for parameterize_async.

Bodies are driven with asyncio.run so no async test plugin is needed.
"""

import asyncio

import pytest

from dynparam import (
    InvalidArgumentError,
    ValidationError,
    make_parameter,
    parameterize_async,
)


class TestParameterizeAsync:
    """Tests for rebinding around bodies that suspend."""

    def test_bindings_survive_suspension(self, letter):
        """Test rebound values stay in effect across await points."""
        seen = []

        async def body():
            seen.append(letter())
            await asyncio.sleep(0)
            seen.append(letter())
            return letter() + "!"

        assert asyncio.run(parameterize_async([(letter, "m")], body)) == "m!"
        assert seen == ["m", "m"]
        assert letter() == "a"

    def test_plain_callable_body(self, count):
        """Test a synchronous body is accepted and its result returned."""
        result = asyncio.run(parameterize_async([(count, 4)], lambda: count() * 10))
        assert result == 40
        assert count() == 1

    def test_body_returning_awaitable(self, flag):
        """Test an awaitable returned by a plain callable is awaited."""

        async def read():
            await asyncio.sleep(0)
            return flag()

        assert asyncio.run(parameterize_async([(flag, True)], lambda: read())) is True
        assert flag() is False

    def test_restores_when_body_raises(self, count):
        """Test restoration runs before an async failure propagates."""

        async def body():
            await asyncio.sleep(0)
            raise RuntimeError("async boom")

        with pytest.raises(RuntimeError, match="async boom"):
            asyncio.run(parameterize_async([(count, 3)], body))
        assert count() == 1

    def test_restores_on_cancellation(self, count):
        """Test cancelling the body restores the original value."""
        observed = []

        async def body():
            observed.append(count())
            await asyncio.sleep(3600)

        async def main():
            task = asyncio.ensure_future(parameterize_async([(count, 8)], body))
            await asyncio.sleep(0.01)
            observed.append(count())
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            return count()

        assert asyncio.run(main()) == 1
        assert observed == [8, 8]

    def test_guard_rejection_rejects_coroutine(self, count):
        """Test guard failures surface when the coroutine is awaited."""
        with pytest.raises(ValidationError):
            asyncio.run(parameterize_async([(count, 0)], lambda: None))
        assert count() == 1

    def test_invalid_arguments_reject(self):
        """Test malformed input fails without running the body."""
        ran = []

        async def body():
            ran.append(True)

        with pytest.raises(InvalidArgumentError):
            asyncio.run(parameterize_async({}, body))
        with pytest.raises(InvalidArgumentError):
            asyncio.run(parameterize_async([], lambda x: x))
        assert ran == []

    def test_shared_parameters_are_not_isolated(self):
        """Test concurrent bodies see whichever rebinding was applied last."""
        mode = make_parameter("default")
        seen = {}

        async def first():
            await asyncio.sleep(0.01)
            seen["first"] = mode()

        async def second():
            seen["second"] = mode()
            await asyncio.sleep(0.02)

        async def main():
            await asyncio.gather(
                parameterize_async([(mode, "one")], first),
                parameterize_async([(mode, "two")], second),
            )

        asyncio.run(main())
        assert seen == {"first": "two", "second": "two"}
        # second snapshotted "one" while first was still bound
        assert mode() == "one"
