"""
Command capability set and the shared executability bookkeeping.
"""

import threading
from typing import Any, Callable, Optional, Protocol

from asyncops.errors.handler import CommandErrorHandler
from asyncops.logging import get_logger

logger = get_logger(__name__)

CanExecuteChangedHandler = Callable[["Command"], None]
Predicate = Callable[[], bool]


class Command(Protocol):
    """
    Capability set shared by every command.

    Any presentation layer can bind to these members without knowing which
    concrete command it drives.
    """

    def can_execute(self) -> bool: ...

    def execute(self) -> Any: ...

    async def execute_async(self) -> None: ...

    def add_can_execute_changed(self, handler: CanExecuteChangedHandler) -> None: ...

    def remove_can_execute_changed(
        self, handler: CanExecuteChangedHandler
    ) -> None: ...


class CommandBase:
    """
    Reentrancy flag, predicate evaluation and observer registry.

    Subclasses own the flag transitions; this class only answers
    ``can_execute()`` and fans executability notifications out.
    """

    def __init__(
        self,
        can_execute: Optional[Predicate] = None,
        error_handler: Optional[CommandErrorHandler] = None,
        name: Optional[str] = None,
    ):
        self._can_execute = can_execute
        self.error_handler = error_handler
        self.name = name or type(self).__name__
        self._is_executing = False
        self._handlers: list[CanExecuteChangedHandler] = []
        self._handlers_lock = threading.Lock()

    @property
    def is_executing(self) -> bool:
        return self._is_executing

    def can_execute(self) -> bool:
        """True iff not currently executing and the predicate (default true) holds."""
        if self._is_executing:
            return False
        return self._can_execute() if self._can_execute is not None else True

    def add_can_execute_changed(self, handler: CanExecuteChangedHandler) -> None:
        with self._handlers_lock:
            self._handlers.append(handler)

    def remove_can_execute_changed(self, handler: CanExecuteChangedHandler) -> None:
        with self._handlers_lock:
            if handler in self._handlers:
                self._handlers.remove(handler)

    def raise_can_execute_changed(self) -> None:
        """
        Notify observers that ``can_execute()`` may return a different value.

        Call this whenever state read by the predicate changes. A failing
        observer is logged and does not prevent the others from running.
        """
        with self._handlers_lock:
            handlers = list(self._handlers)

        for handler in handlers:
            try:
                handler(self)
            except Exception as e:
                logger.warning(f"{self.name}: can-execute observer failed: {e}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, executing={self._is_executing})"
