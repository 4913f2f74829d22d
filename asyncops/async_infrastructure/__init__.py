"""
asyncops async infrastructure

Core infrastructure for long-running async operations: cooperative
cancellation and progress reporting.

Components:
- cancellation: CancellationScope owned by one orchestration run
- progress: ProgressReporter publishing a monotonic 0-100 percentage
"""

from .cancellation import (
    CancellationError,
    CancellationScope,
    CancellationToken,
)
from .progress import ProgressReporter, ProgressState

__all__ = [
    "CancellationError",
    "CancellationScope",
    "CancellationToken",
    "ProgressReporter",
    "ProgressState",
]
