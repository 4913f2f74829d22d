"""
Progress reporting for asyncops runs.

Converts a running (completed, total) pair into a 0-100 integer percentage
and publishes it to a sink. The orchestrating flow is the only writer within
a run, so the reporter keeps nothing beyond the last published state.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from asyncops.errors.error_codes import ErrorCodes
from asyncops.errors.exceptions import ValidationError
from asyncops.logging import get_logger

logger = get_logger(__name__)

ProgressSink = Callable[[int], None]


@dataclass(frozen=True)
class ProgressState:
    """Completed/total counters for one run."""

    completed_count: int
    total_count: int

    @property
    def percentage(self) -> int:
        """floor(completed * 100 / total)."""
        return (self.completed_count * 100) // self.total_count


class ProgressReporter:
    """
    Publishes monotonic percentages for one run at a time.

    Call ``reset()`` at the start of every run; within a run the published
    value never decreases.
    """

    def __init__(self, sink: Optional[ProgressSink] = None):
        self.sink = sink
        self._state: Optional[ProgressState] = None
        self._lock = threading.RLock()

    @property
    def state(self) -> Optional[ProgressState]:
        """Last published state, or None before the first update of a run."""
        with self._lock:
            return self._state

    @property
    def value(self) -> int:
        """Last published percentage (0 before the first update of a run)."""
        state = self.state
        return state.percentage if state else 0

    def reset(self) -> None:
        """Forget the previous run. Nothing is published."""
        with self._lock:
            self._state = None

    def update(self, completed: int, total: int) -> int:
        """
        Publish floor(completed * 100 / total).

        Args:
            completed: Number of finished work items
            total: Number of work items in the run

        Returns:
            The published percentage

        Raises:
            ValidationError: If the counters are out of range or would make
                the percentage go backwards within the current run
        """
        if total <= 0 or not 0 <= completed <= total:
            raise ValidationError(
                message="Progress requires 0 <= completed <= total and total > 0",
                error_code=ErrorCodes.VALIDATION_OUT_OF_RANGE,
                details={"completed": completed, "total": total},
            )

        new_state = ProgressState(completed_count=completed, total_count=total)
        with self._lock:
            previous = self._state
            if previous is not None and new_state.percentage < previous.percentage:
                raise ValidationError(
                    message="Progress cannot decrease within a run",
                    error_code=ErrorCodes.VALIDATION_OUT_OF_RANGE,
                    details={
                        "previous": previous.percentage,
                        "requested": new_state.percentage,
                    },
                )
            self._state = new_state

        logger.debug(f"Progress {completed}/{total} -> {new_state.percentage}%")
        self._publish(new_state.percentage)
        return new_state.percentage

    def _publish(self, percentage: int) -> None:
        if self.sink is None:
            return
        try:
            self.sink(percentage)
        except Exception as e:
            logger.warning(f"Progress sink failed: {e}")
