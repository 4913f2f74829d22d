"""
Cooperative cancellation for asyncops runs.

A CancellationScope owns exactly one cancellation signal for one
orchestration run. Triggering is monotonic: once a scope has been triggered it
stays triggered, and a retried run must construct a fresh scope. Nothing here
interrupts running work; long loops poll the scope at their own checkpoints.

Key Components:
- CancellationToken: Protocol consumed by long-running operations
- CancellationScope: Thread-safe implementation owned by one run
- CancellationError: The cancellation outcome, distinct from any fault
"""

import asyncio
import threading
import uuid
from typing import Optional, Protocol

from asyncops.logging import get_logger

logger = get_logger(__name__)


class CancellationToken(Protocol):
    """Read side of a cancellation scope, handed to units of work."""

    def is_cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        ...

    def check_cancellation(self, context: str = "") -> None:
        """Raise CancellationError if cancellation has been requested."""
        ...

    async def wait_for_cancellation(self) -> None:
        """Async wait for the cancellation signal."""
        ...


class CancellationError(Exception):
    """Exception raised when an operation is cancelled."""

    def __init__(
        self,
        message: str,
        operation_id: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation_id = operation_id
        self.reason = reason


class CancellationScope:
    """
    One cancellation signal for one orchestration run.

    ``trigger()`` may be called from any thread; the async waiters are woken
    on the loop the scope was first awaited from.
    """

    def __init__(self, operation_id: Optional[str] = None):
        self.operation_id = operation_id or f"run-{uuid.uuid4().hex[:8]}"
        self._triggered = False
        self._reason: Optional[str] = None
        self._lock = threading.RLock()
        self._event: Optional[asyncio.Event] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def reason(self) -> Optional[str]:
        """Get cancellation reason."""
        with self._lock:
            return self._reason

    def is_triggered(self) -> bool:
        """Check if the scope has been triggered."""
        with self._lock:
            return self._triggered

    # Token protocol spelling
    is_cancelled = is_triggered

    def trigger(self, reason: str = "Operation cancelled") -> None:
        """
        Trigger the scope. Idempotent: the first reason is kept.

        Args:
            reason: Human-readable cancellation reason
        """
        with self._lock:
            if self._triggered:
                return
            self._triggered = True
            self._reason = reason
            event, loop = self._event, self._loop

        logger.info(f"Cancellation requested for {self.operation_id}: {reason}")

        if event is None or loop is None or loop.is_closed():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            event.set()
        else:
            loop.call_soon_threadsafe(event.set)

    def check_cancellation(self, context: str = "") -> None:
        """
        Check cancellation and raise exception if cancelled.

        Args:
            context: Optional context information for better error messages

        Raises:
            CancellationError: If the scope has been triggered
        """
        if not self.is_triggered():
            return

        message_parts = [f"Operation {self.operation_id} cancelled"]
        if context:
            message_parts.append(f"at {context}")
        if self.reason:
            message_parts.append(f"({self.reason})")

        raise CancellationError(
            ": ".join(message_parts),
            operation_id=self.operation_id,
            reason=self.reason,
        )

    async def wait_for_cancellation(self) -> None:
        """
        Async wait for the scope to be triggered.

        All waiters of one scope must share an event loop: the first waiter
        binds the scope to its loop.

        Raises:
            RuntimeError: If awaited from a loop other than the bound one
        """
        running = asyncio.get_running_loop()
        with self._lock:
            if self._triggered:
                return
            if self._event is None:
                self._event = asyncio.Event()
                self._loop = running
            elif self._loop is not running:
                raise RuntimeError(
                    f"{self!r} is bound to another event loop; "
                    "waiters must share the loop of the first waiter"
                )
            event = self._event
        await event.wait()

    def __repr__(self) -> str:
        state = "triggered" if self.is_triggered() else "active"
        return f"CancellationScope({self.operation_id!r}, {state})"
