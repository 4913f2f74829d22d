"""
AsyncCommand - a guarded, observable wrapper around a cancellable coroutine.

The wrapped action receives the CancellationScope created for the current
invocation. Every invocation gets a fresh scope, so a triggered scope is
never reused by a later run.
"""

import asyncio
from collections.abc import Awaitable
from typing import Any, Callable, Optional

from asyncops.async_infrastructure.cancellation import (
    CancellationError,
    CancellationScope,
    CancellationToken,
)
from asyncops.errors.handler import CommandErrorHandler
from asyncops.logging import get_logger

from .base import CommandBase, Predicate
from .fire_and_forget import fire_and_forget

logger = get_logger(__name__)

AsyncAction = Callable[[CancellationToken], Awaitable[Any]]


class AsyncCommand(CommandBase):
    """
    Command whose action is an awaitable taking a cancellation token.

    ``execute_async()`` is the awaitable form: faults and cancellations
    propagate to the awaiting caller. ``execute()`` is the fire-and-forget
    form: it schedules ``execute_async()`` and routes any failure to the
    injected error handler.
    """

    def __init__(
        self,
        execute: AsyncAction,
        can_execute: Optional[Predicate] = None,
        error_handler: Optional[CommandErrorHandler] = None,
        scope_factory: Callable[[], CancellationScope] = CancellationScope,
        name: Optional[str] = None,
    ):
        super().__init__(can_execute, error_handler, name)
        self._execute = execute
        self._scope_factory = scope_factory
        self._current_scope: Optional[CancellationScope] = None

    @property
    def current_scope(self) -> Optional[CancellationScope]:
        """Scope of the in-flight invocation, None while idle."""
        return self._current_scope

    def execute(self) -> asyncio.Task:
        """
        Start an invocation without waiting for it.

        Must be called from a running event loop. The returned task never
        raises when awaited.
        """
        return fire_and_forget(
            self.execute_async(), self.error_handler, name=f"{self.name}.execute"
        )

    async def execute_async(self) -> None:
        """
        Run the action once, unless the command cannot execute right now.

        A rejected invocation is a silent no-op. Otherwise the executing flag
        is held for the whole invocation and released on every outcome.

        Raises:
            CancellationError: If the run's scope was triggered and the
                action observed it
            Exception: Any fault raised by the action
        """
        # Check-then-set happens before the first suspension point
        if not self.can_execute():
            logger.debug(f"{self.name}: invocation skipped, command cannot execute")
            self.raise_can_execute_changed()
            return

        scope = self._scope_factory()
        self._current_scope = scope
        self._is_executing = True
        self.raise_can_execute_changed()
        logger.info(f"{self.name}: started ({scope.operation_id})")

        try:
            await self._execute(scope)
            logger.info(f"{self.name}: completed ({scope.operation_id})")
        except CancellationError:
            logger.info(f"{self.name}: cancelled ({scope.operation_id})")
            raise
        except Exception as e:
            logger.warning(f"{self.name}: failed ({scope.operation_id}): {e}")
            raise
        finally:
            self._is_executing = False
            self._current_scope = None
            self.raise_can_execute_changed()

    def cancel(self, reason: str = "Cancelled by user") -> bool:
        """
        Trigger the scope of the in-flight invocation.

        Returns:
            True if a running invocation was signalled, False when idle
        """
        scope = self._current_scope
        if scope is None:
            logger.debug(f"{self.name}: cancel requested while idle")
            return False
        scope.trigger(reason)
        return True
