"""
asyncops Configuration Package.

Runtime settings with YAML defaults and environment variable overrides.
"""

from .. import metadata
from .settings import (
    FetchSettings,
    LoggingSettings,
    WorkloadSettings,
    clear_settings_cache,
    get_fetch_settings,
    get_logging_settings,
    get_workload_settings,
)

__all__ = [
    "metadata",
    "FetchSettings",
    "LoggingSettings",
    "WorkloadSettings",
    "get_fetch_settings",
    "get_logging_settings",
    "get_workload_settings",
    "clear_settings_cache",
]
