"""
Error handling framework for asyncops.

This module provides the exception hierarchy for faults raised by units of
work and by the surrounding infrastructure, the error code registry, and the
error handlers that fire-and-forget command invocations report to.
"""

from asyncops.errors.error_codes import ErrorCodes
from asyncops.errors.exceptions import (
    AsyncOpsError,
    ConfigurationError,
    ConnectionError,
    FetchError,
    FetchTimeoutError,
    ValidationError,
)
from asyncops.errors.handler import (
    CommandErrorHandler,
    LoggingErrorHandler,
    NullErrorHandler,
    error_to_user_message,
    get_error_code,
)

__all__ = [
    # Base exception
    "AsyncOpsError",
    # Exception hierarchy
    "ConnectionError",
    "FetchError",
    "FetchTimeoutError",
    "ValidationError",
    "ConfigurationError",
    # Codes
    "ErrorCodes",
    # Handlers
    "CommandErrorHandler",
    "LoggingErrorHandler",
    "NullErrorHandler",
    "error_to_user_message",
    "get_error_code",
]
