"""
Data model shared by the fetch port, the orchestrator and the session.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum


class ExecutionStrategy(str, Enum):
    """How a batch of work items is driven."""

    SERIAL_BLOCKING = "sync"
    SERIAL_COOPERATIVE = "async"
    FAN_OUT = "fan-out"


@dataclass(frozen=True)
class WorkItem:
    """One entry of the fixed, ordered work list."""

    identifier: str


@dataclass(frozen=True)
class WorkResult:
    """Outcome of one unit of work."""

    identifier: str
    payload_size: int

    @classmethod
    def from_payload(cls, identifier: str, payload: str) -> "WorkResult":
        return cls(identifier=identifier, payload_size=len(payload))

    def describe(self) -> str:
        """Report line for this result."""
        return f"{self.identifier} downloaded  {self.payload_size} characters long \n"


@dataclass(frozen=True)
class RunReport:
    """Ordered results of a completed run and its wall-clock duration."""

    strategy: ExecutionStrategy
    results: tuple[WorkResult, ...] = field(default_factory=tuple)
    elapsed: timedelta = timedelta(0)

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed.total_seconds() * 1000)

    @property
    def total_payload_size(self) -> int:
        return sum(result.payload_size for result in self.results)

    def summary_line(self) -> str:
        return f"Total execution time: {self.elapsed_ms}"
