"""
Run a coroutine in the background and funnel its outcome to an error handler.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, Optional

from asyncops.async_infrastructure.cancellation import CancellationError
from asyncops.errors.handler import CommandErrorHandler
from asyncops.logging import get_logger, log_error

logger = get_logger(__name__)

# Strong references so pending background tasks are not garbage collected
_background_tasks: set[asyncio.Task] = set()


def fire_and_forget(
    coro: Coroutine[Any, Any, Any],
    error_handler: Optional[CommandErrorHandler] = None,
    name: Optional[str] = None,
) -> asyncio.Task:
    """
    Schedule ``coro`` on the running loop without awaiting it.

    Any exception the coroutine raises, including task cancellation, is passed
    to ``error_handler`` instead of propagating. Without a handler the failure
    is logged.

    Args:
        coro: Coroutine to run
        error_handler: Receives the failure, if any
        name: Optional task name

    Returns:
        The scheduled task. Awaiting it never raises.

    Raises:
        RuntimeError: If called without a running event loop
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        coro.close()
        raise

    task = loop.create_task(_guarded(coro, error_handler, name), name=name)
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


async def _guarded(
    coro: Coroutine[Any, Any, Any],
    error_handler: Optional[CommandErrorHandler],
    name: Optional[str],
) -> None:
    try:
        await coro
    except asyncio.CancelledError:
        dispatch_error(
            CancellationError(f"Background task {name or 'task'} was cancelled"),
            error_handler,
        )
    except Exception as e:
        dispatch_error(e, error_handler)


def dispatch_error(
    error: BaseException, error_handler: Optional[CommandErrorHandler]
) -> None:
    """
    Hand a failed invocation to its error handler.

    Nothing is raised: without a handler the failure is logged, and a
    handler that fails is logged as well.
    """
    if error_handler is None:
        if isinstance(error, CancellationError):
            logger.info(f"Background operation stopped: {error}")
        else:
            log_error(error, logger=logger)
        return

    try:
        error_handler.handle_error(error)
    except Exception as handler_error:
        log_error(handler_error, logger=logger)
