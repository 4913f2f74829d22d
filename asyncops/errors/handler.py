"""
Error handlers for fire-and-forget command invocations.

A command executed through ``execute()`` never lets a failure escape to its
caller; instead the failure is handed to an injected CommandErrorHandler.
"""

import logging
from typing import Optional, Protocol

from asyncops.async_infrastructure.cancellation import CancellationError
from asyncops.errors.exceptions import (
    AsyncOpsError,
    ConfigurationError,
    ConnectionError,
    ValidationError,
)
from asyncops.logging import get_logger, log_error

logger = get_logger(__name__)

# User-friendly error message templates, most specific first
ERROR_MESSAGES = {
    ConnectionError: "Connection error: {message}",
    ValidationError: "Invalid input: {message}",
    ConfigurationError: "Configuration error: {message}",
}

# Error code prefixes for each error class
ERROR_CODE_PREFIXES = {
    ConnectionError: "CONN",
    ValidationError: "VALIDATION",
    ConfigurationError: "CONFIG",
}


class CommandErrorHandler(Protocol):
    """Receives failures from fire-and-forget command executions."""

    def handle_error(self, error: BaseException) -> None: ...


class NullErrorHandler:
    """Explicitly swallow every failure."""

    def handle_error(self, error: BaseException) -> None:
        return None


class LoggingErrorHandler:
    """
    Log failures, keeping cancellations out of the error log.

    Cancellations are user-initiated stops and are logged at INFO without a
    traceback; every other failure is logged at ERROR with its traceback.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(__name__)
        self.last_error: Optional[BaseException] = None

    def handle_error(self, error: BaseException) -> None:
        self.last_error = error
        if isinstance(error, CancellationError):
            self.logger.info(f"Operation stopped: {error}")
            return

        log_error(
            error,
            logger=self.logger,
            extra={"error_code": get_error_code(error)},
        )


def error_to_user_message(error: BaseException) -> str:
    """
    Convert an error to a user-friendly message.

    Args:
        error: The exception to convert

    Returns:
        User-friendly error message
    """
    if isinstance(error, CancellationError):
        return "Operation cancelled"

    message = error.message if isinstance(error, AsyncOpsError) else str(error)

    for err_cls, template in ERROR_MESSAGES.items():
        if isinstance(error, err_cls):
            return template.format(message=message)

    return f"An error occurred: {message}"


def get_error_code(error: BaseException) -> str:
    """
    Get an error code for an error.

    Uses the error's own code when it carries one, otherwise derives a code
    from its category prefix and class name.
    """
    if isinstance(error, AsyncOpsError) and error.error_code is not None:
        return error.error_code

    prefix = "ERR"
    for err_cls, err_prefix in ERROR_CODE_PREFIXES.items():
        if isinstance(error, err_cls):
            prefix = err_prefix
            break

    return f"{prefix}-{type(error).__name__}"
