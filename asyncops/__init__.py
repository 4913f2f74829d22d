"""
asyncops - cancellable, observable async commands driving batch downloads.
"""

from dotenv import load_dotenv

from asyncops.logging import (
    configure_logging,
    get_logger,
    is_debug_mode,
    log_error,
    log_performance,
    set_debug_mode,
)
from asyncops.version import __version__

# Load environment variables from .env file
load_dotenv()

__all__ = [
    "__version__",
    "configure_logging",
    "get_logger",
    "is_debug_mode",
    "log_error",
    "log_performance",
    "set_debug_mode",
]
