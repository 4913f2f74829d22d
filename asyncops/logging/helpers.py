"""
Helper methods for common logging patterns.

This module provides a performance-tracking decorator that works for both
plain and coroutine functions, and a consistent way of logging exceptions.
"""

import functools
import inspect
import logging
import time
import traceback
from typing import Any, Callable, Optional, TypeVar, Union, cast

from asyncops.logging.config import get_logger

F = TypeVar("F", bound=Callable[..., Any])


def log_performance(
    logger: Optional[logging.Logger] = None,
    threshold_ms: float = 0,  # 0 means log all calls
    log_level: int = logging.DEBUG,
) -> Callable[[F], F]:
    """
    Decorator to log function performance.

    Coroutine functions are timed until the awaited result is available.

    Args:
        logger: Logger to use (if None, get logger based on module name)
        threshold_ms: Only log if execution time exceeds threshold (milliseconds)
        log_level: Log level for performance messages

    Returns:
        Decorated function with performance logging
    """

    def decorator(func: F) -> F:
        log = logger or get_logger(func.__module__)
        func_name = func.__qualname__

        def _report(start_time: float) -> None:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            if elapsed_ms >= threshold_ms:
                log.log(log_level, f"Performance: {func_name} took {elapsed_ms:.2f}ms")

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                start_time = time.perf_counter()
                try:
                    return await func(*args, **kwargs)
                finally:
                    _report(start_time)

            return cast(F, async_wrapper)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _report(start_time)

        return cast(F, wrapper)

    return decorator


def log_error(
    exception: Union[BaseException, str],
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
    include_traceback: bool = True,
    extra: Optional[dict[str, Any]] = None,
) -> None:
    """
    Log an exception or error message with consistent formatting.

    Args:
        exception: Exception object or error message string
        logger: Logger to use (defaults to logger for calling module)
        level: Log level to use
        include_traceback: Whether to include traceback information
        extra: Extra contextual information to include
    """
    if logger is None:
        frame = inspect.currentframe()
        module = inspect.getmodule(frame.f_back) if frame and frame.f_back else None
        logger = get_logger(module.__name__ if module else "__main__")

    if isinstance(exception, BaseException):
        error_msg = f"{exception.__class__.__name__}: {exception}"
        if include_traceback and exception.__traceback__ is not None:
            tb_str = "".join(
                traceback.format_exception(
                    type(exception), exception, exception.__traceback__
                )
            )
            error_msg += f"\n{tb_str}"
    else:
        error_msg = str(exception)

    logger.log(level, error_msg, extra=extra)
