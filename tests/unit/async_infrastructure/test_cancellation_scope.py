"""
Tests for CancellationScope.

This test suite validates:
- Monotonic, idempotent triggering
- Cooperative checkpoints raising CancellationError
- Async waiting, including triggers from another thread
"""

import asyncio
import threading

import pytest

from asyncops.async_infrastructure.cancellation import (
    CancellationError,
    CancellationScope,
)
from asyncops.errors.exceptions import AsyncOpsError


class TestCancellationScope:
    """Test the trigger/query contract."""

    def test_initial_state(self):
        """A new scope is not triggered and has no reason."""
        scope = CancellationScope("run-1")

        assert not scope.is_triggered()
        assert not scope.is_cancelled()
        assert scope.reason is None
        assert scope.operation_id == "run-1"

    def test_generated_operation_id(self):
        """Scopes without an explicit id get a unique one."""
        first, second = CancellationScope(), CancellationScope()

        assert first.operation_id.startswith("run-")
        assert first.operation_id != second.operation_id

    def test_trigger(self):
        """Triggering flips the scope for good."""
        scope = CancellationScope()

        scope.trigger()

        assert scope.is_triggered()
        assert scope.reason == "Operation cancelled"

    def test_trigger_is_idempotent(self):
        """A second trigger keeps the first reason."""
        scope = CancellationScope()

        scope.trigger("First reason")
        scope.trigger("Second reason")

        assert scope.is_triggered()
        assert scope.reason == "First reason"

    def test_fresh_scope_is_independent(self):
        """Triggering one run's scope never affects a new one."""
        old = CancellationScope()
        old.trigger()

        new = CancellationScope()

        assert old.is_triggered()
        assert not new.is_triggered()


class TestCheckpoints:
    """Test check_cancellation()."""

    def test_check_passes_when_not_triggered(self):
        CancellationScope().check_cancellation("item 1/3")

    def test_check_raises_when_triggered(self):
        """A triggered scope raises with context and reason."""
        scope = CancellationScope("run-7")
        scope.trigger("User pressed stop")

        with pytest.raises(CancellationError) as exc_info:
            scope.check_cancellation("item 2/6")

        assert "item 2/6" in str(exc_info.value)
        assert "User pressed stop" in str(exc_info.value)
        assert exc_info.value.operation_id == "run-7"
        assert exc_info.value.reason == "User pressed stop"

    def test_cancellation_is_not_a_fault(self):
        """Cancellation stays outside the fault hierarchy."""
        assert not issubclass(CancellationError, AsyncOpsError)


class TestWaitForCancellation:
    """Test the blocking wait primitive."""

    @pytest.mark.asyncio
    async def test_returns_immediately_when_triggered(self):
        scope = CancellationScope()
        scope.trigger()

        await asyncio.wait_for(scope.wait_for_cancellation(), timeout=1)

    @pytest.mark.asyncio
    async def test_wakes_on_trigger(self):
        """Waiters resume once the scope is triggered on the same loop."""
        scope = CancellationScope()

        async def trigger_later():
            await asyncio.sleep(0.01)
            scope.trigger("Delayed cancellation")

        trigger_task = asyncio.create_task(trigger_later())
        await asyncio.wait_for(scope.wait_for_cancellation(), timeout=1)
        await trigger_task

        assert scope.reason == "Delayed cancellation"

    @pytest.mark.asyncio
    async def test_wakes_on_trigger_from_other_thread(self):
        """trigger() is safe to call from outside the event loop thread."""
        scope = CancellationScope()
        waiter = asyncio.create_task(scope.wait_for_cancellation())
        await asyncio.sleep(0)

        thread = threading.Thread(target=scope.trigger)
        thread.start()
        thread.join()

        await asyncio.wait_for(waiter, timeout=1)
        assert scope.is_triggered()

    @pytest.mark.asyncio
    async def test_waiter_on_second_loop_rejected(self):
        """A scope bound to one loop refuses waiters from another."""
        scope = CancellationScope()
        waiter = asyncio.create_task(scope.wait_for_cancellation())
        await asyncio.sleep(0)

        errors = []

        def wait_elsewhere():
            try:
                asyncio.run(scope.wait_for_cancellation())
            except RuntimeError as e:
                errors.append(e)

        thread = threading.Thread(target=wait_elsewhere)
        thread.start()
        thread.join()

        scope.trigger()
        await asyncio.wait_for(waiter, timeout=1)
        assert len(errors) == 1
        assert "another event loop" in str(errors[0])
