"""
RelayCommand - the synchronous member of the command family.
"""

from typing import Any, Callable, Optional

from asyncops.errors.handler import CommandErrorHandler
from asyncops.logging import get_logger

from .base import CommandBase, Predicate
from .fire_and_forget import dispatch_error

logger = get_logger(__name__)


class RelayCommand(CommandBase):
    """
    Command around a plain callable.

    ``execute()`` blocks for the duration of the action and hands any fault
    to the error handler; ``execute_async()`` runs the action inline and lets
    faults propagate.
    """

    def __init__(
        self,
        execute: Callable[[], Any],
        can_execute: Optional[Predicate] = None,
        error_handler: Optional[CommandErrorHandler] = None,
        name: Optional[str] = None,
    ):
        super().__init__(can_execute, error_handler, name)
        self._execute = execute

    def execute(self) -> None:
        try:
            self._run()
        except Exception as e:
            dispatch_error(e, self.error_handler)

    async def execute_async(self) -> None:
        self._run()

    def _run(self) -> None:
        if not self.can_execute():
            logger.debug(f"{self.name}: invocation skipped, command cannot execute")
            self.raise_can_execute_changed()
            return

        self._is_executing = True
        self.raise_can_execute_changed()
        try:
            self._execute()
        finally:
            self._is_executing = False
            self.raise_can_execute_changed()
