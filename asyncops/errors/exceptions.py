"""
Exception hierarchy for asyncops.

Every fault raised by the library derives from AsyncOpsError. Cancellation is
deliberately not part of this hierarchy: it lives in
asyncops.async_infrastructure.cancellation so callers can tell a
user-initiated stop apart from a failure with a plain ``except`` clause.
"""

from typing import Any, Optional


class AsyncOpsError(Exception):
    """
    Base exception class for all asyncops faults.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for reference and documentation
        details: Optional dictionary with additional error details
        suggestion: Optional suggestion text for how to fix the error
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for display or structured logging."""
        result: dict[str, Any] = {
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


# --- Validation Errors ---


class ValidationError(AsyncOpsError):
    """
    Exception raised when an argument passed to the core is invalid.

    Examples:
        Progress out of range:
            >>> raise ValidationError(
            ...     message="completed must be between 0 and total",
            ...     error_code="VALIDATION-OutOfRange",
            ...     details={"completed": 7, "total": 6}
            ... )
    """

    pass


# --- Connection Errors ---


class ConnectionError(AsyncOpsError):
    """
    Base class for errors related to network connectivity.

    This class of errors covers network issues, timeouts and unexpected
    responses from remote services.
    """

    pass


class FetchError(ConnectionError):
    """
    Exception raised when a single unit of work cannot be fetched.

    A FetchError is the one fault a FetchPort surfaces for a failed
    identifier; the port never retries internally.
    """

    def __init__(
        self,
        message: str,
        identifier: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        details = dict(details or {})
        if identifier is not None:
            details.setdefault("identifier", identifier)
        super().__init__(message, error_code, details, suggestion)
        self.identifier = identifier


class FetchTimeoutError(FetchError):
    """Exception raised when a fetch exceeds the configured timeout."""

    pass


# --- Configuration Errors ---


class ConfigurationError(AsyncOpsError):
    """Exception raised for invalid or unreadable configuration."""

    pass
