"""
Batch orchestration over a fixed, ordered work list.
"""

from asyncops.models import ExecutionStrategy, RunReport, WorkItem, WorkResult

from .orchestrator import DownloadOrchestrator, ReportSink

__all__ = [
    "DownloadOrchestrator",
    "ExecutionStrategy",
    "ReportSink",
    "RunReport",
    "WorkItem",
    "WorkResult",
]
