"""
Logging system for asyncops.

This module provides a centralized logging configuration with console and
rotating file outputs, a global debug flag, and helper methods for common
logging patterns.
"""

from asyncops.logging.config import (
    configure_logging,
    get_logger,
    is_debug_mode,
    set_component_log_level,
    set_debug_mode,
)
from asyncops.logging.helpers import log_error, log_performance

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "set_debug_mode",
    "is_debug_mode",
    "set_component_log_level",
    # Helper methods
    "log_performance",
    "log_error",
]
