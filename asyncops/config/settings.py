"""
asyncops Settings Manager - Runtime configuration management.

Every settings class takes its defaults from the YAML metadata and can be
overridden through environment variables carrying the class's prefix.
List values are given as JSON, e.g.
``ASYNCOPS_WORKLOAD_SITES='["https://a.example", "https://b.example"]'``.
"""

from functools import lru_cache
from typing import Optional, TypeVar

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .. import metadata
from ..errors.error_codes import ErrorCodes
from ..errors.exceptions import ConfigurationError

SettingsT = TypeVar("SettingsT", bound=BaseSettings)

DEFAULT_SITES = [
    "https://www.yahoo.com",
    "https://www.google.com",
    "https://www.microsoft.com",
    "https://www.cnn.com",
    "https://www.codeproject.com",
    "https://www.stackoverflow.com",
]


class FetchSettings(BaseSettings):
    """HTTP fetch settings."""

    timeout: float = Field(
        default=metadata.get("fetch.timeout", 30.0),
        gt=0,
        description="Per-request timeout in seconds",
    )
    follow_redirects: bool = Field(
        default=metadata.get("fetch.follow_redirects", True),
        description="Follow HTTP redirects",
    )
    user_agent: str = Field(
        default=metadata.get("fetch.user_agent", "asyncops/1.0"),
        description="User-Agent header sent with every request",
    )

    model_config = SettingsConfigDict(env_prefix="ASYNCOPS_FETCH_")


class WorkloadSettings(BaseSettings):
    """The fixed, ordered work list."""

    sites: list[str] = Field(
        default=metadata.get("workload.sites", DEFAULT_SITES),
        description="Identifiers processed by every run, in order",
    )

    model_config = SettingsConfigDict(env_prefix="ASYNCOPS_WORKLOAD_")

    @field_validator("sites")
    @classmethod
    def _not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("workload must contain at least one site")
        return value


class LoggingSettings(BaseSettings):
    """Logging Settings."""

    level: str = Field(default=metadata.get("logging.level", "INFO"))
    log_dir: Optional[str] = Field(default=metadata.get("logging.log_dir"))

    model_config = SettingsConfigDict(env_prefix="ASYNCOPS_LOGGING_")


def _load(settings_class: type[SettingsT]) -> SettingsT:
    """Build a settings object, turning invalid values into ConfigurationError."""
    try:
        return settings_class()
    except PydanticValidationError as e:
        raise ConfigurationError(
            message=f"Invalid {settings_class.__name__}: {e.errors()[0]['msg']}",
            error_code=ErrorCodes.CONFIG_INVALID_VALUE,
            details={"fields": [".".join(map(str, err["loc"])) for err in e.errors()]},
            suggestion="Check the ASYNCOPS_* environment variables and config/asyncops_metadata.yaml",
        ) from e


# Cache settings to avoid repeated disk/env access
@lru_cache
def get_fetch_settings() -> FetchSettings:
    """Get fetch settings with caching."""
    return _load(FetchSettings)


@lru_cache
def get_workload_settings() -> WorkloadSettings:
    """Get workload settings with caching."""
    return _load(WorkloadSettings)


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Get logging settings with caching."""
    return _load(LoggingSettings)


# Clear settings cache (for testing)
def clear_settings_cache() -> None:
    """Clear settings cache."""
    get_fetch_settings.cache_clear()
    get_workload_settings.cache_clear()
    get_logging_settings.cache_clear()
