"""
Central registry of error codes for asyncops.

Error codes follow the pattern: CATEGORY-ErrorName

Categories:
- CONFIG: Configuration and settings errors
- VALIDATION: Invalid arguments passed to the core
- FETCH: Unit-of-work (download) failures

Usage:
    from asyncops.errors.error_codes import ErrorCodes

    raise FetchError(
        message="Request failed",
        error_code=ErrorCodes.FETCH_REQUEST_FAILED,
    )
"""


class ErrorCodes:
    """Central registry of error codes for consistent error handling."""

    # Configuration errors
    CONFIG_LOAD_FAILED = "CONFIG-LoadFailed"
    CONFIG_INVALID_VALUE = "CONFIG-InvalidValue"

    # Validation errors
    VALIDATION_OUT_OF_RANGE = "VALIDATION-OutOfRange"
    VALIDATION_EMPTY_WORKLOAD = "VALIDATION-EmptyWorkload"
    VALIDATION_UNKNOWN_STRATEGY = "VALIDATION-UnknownStrategy"
    VALIDATION_MISSING_TOKEN = "VALIDATION-MissingToken"

    # Fetch errors
    FETCH_REQUEST_FAILED = "FETCH-RequestFailed"
    FETCH_HTTP_STATUS = "FETCH-HttpStatus"
    FETCH_TIMEOUT = "FETCH-Timeout"
