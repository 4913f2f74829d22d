"""
DownloadOrchestrator - drives a work list through one of three strategies.

- Serial-blocking: one blocking fetch after another, no checkpoints.
- Serial-cooperative: one awaited fetch after another, with a cancellation
  checkpoint after every item.
- Fan-out/join: every fetch launched at once and joined; results come back
  in work-list order. Once the batch is launched there is no checkpoint, so
  triggering the scope does not shorten the run.

The orchestrator does not translate faults raised by the fetch port; it only
stops iterating and lets them propagate.
"""

import asyncio
import time
from collections.abc import Sequence
from datetime import timedelta
from typing import Callable, Optional, Union

from asyncops.async_infrastructure.cancellation import CancellationToken
from asyncops.async_infrastructure.progress import ProgressReporter
from asyncops.errors.error_codes import ErrorCodes
from asyncops.errors.exceptions import ValidationError
from asyncops.fetch.port import FetchPort
from asyncops.logging import get_logger, log_performance
from asyncops.models import ExecutionStrategy, RunReport, WorkItem, WorkResult

logger = get_logger(__name__)

ReportSink = Callable[[str], None]
ResultCallback = Callable[[WorkResult], None]

# Fan-out operations still running after their join failed
_detached_tasks: set[asyncio.Task] = set()


class DownloadOrchestrator:
    """
    Runs a fixed, ordered work list against a FetchPort.

    Args:
        fetch_port: Performs one unit of work per identifier
        work_items: Ordered identifiers (or WorkItems); must not be empty
        report_sink: Receives one report line per result and a final
            "Total execution time" line
        progress: Receives (completed, total) after every processed item
        on_result: Called with each WorkResult as soon as it is reported
    """

    def __init__(
        self,
        fetch_port: FetchPort,
        work_items: Sequence[Union[str, WorkItem]],
        report_sink: Optional[ReportSink] = None,
        progress: Optional[ProgressReporter] = None,
        on_result: Optional[ResultCallback] = None,
    ):
        if not work_items:
            raise ValidationError(
                message="Work list must contain at least one item",
                error_code=ErrorCodes.VALIDATION_EMPTY_WORKLOAD,
            )
        self.fetch_port = fetch_port
        self.work_items: tuple[WorkItem, ...] = tuple(
            item if isinstance(item, WorkItem) else WorkItem(item)
            for item in work_items
        )
        self.report_sink = report_sink
        self.progress = progress or ProgressReporter()
        self.on_result = on_result

    @property
    def total(self) -> int:
        return len(self.work_items)

    async def run(
        self,
        strategy: ExecutionStrategy,
        token: Optional[CancellationToken] = None,
    ) -> RunReport:
        """
        Run the work list with the given strategy.

        The serial-blocking strategy blocks the event loop for the whole run.

        Raises:
            ValidationError: If the serial-cooperative strategy is given no token
        """
        if strategy is ExecutionStrategy.SERIAL_BLOCKING:
            return self.run_serial_blocking()
        if strategy is ExecutionStrategy.SERIAL_COOPERATIVE:
            if token is None:
                raise ValidationError(
                    message="Serial-cooperative runs need a cancellation token",
                    error_code=ErrorCodes.VALIDATION_MISSING_TOKEN,
                )
            return await self.run_serial_cooperative(token)
        if strategy is ExecutionStrategy.FAN_OUT:
            return await self.run_fan_out(token)
        raise ValidationError(
            message=f"Unknown strategy {strategy!r}",
            error_code=ErrorCodes.VALIDATION_UNKNOWN_STRATEGY,
        )

    @log_performance()
    def run_serial_blocking(self) -> RunReport:
        """Fetch every item in order with the blocking port form."""
        logger.info(f"Serial-blocking run over {self.total} items")
        self.progress.reset()
        started = time.perf_counter()
        results: list[WorkResult] = []

        for item in self.work_items:
            result = self.fetch_port.fetch(item.identifier)
            results.append(result)
            self._report(result)
            self.progress.update(len(results), self.total)

        return self._finish(ExecutionStrategy.SERIAL_BLOCKING, results, started)

    @log_performance()
    async def run_serial_cooperative(self, token: CancellationToken) -> RunReport:
        """
        Await every item in order, checking the token after each one.

        Raises:
            CancellationError: When the token is found triggered at a
                checkpoint; results already reported stay reported
        """
        logger.info(f"Serial-cooperative run over {self.total} items")
        self.progress.reset()
        started = time.perf_counter()
        results: list[WorkResult] = []

        for index, item in enumerate(self.work_items, start=1):
            result = await self.fetch_port.fetch_async(item.identifier, token)
            results.append(result)
            self._report(result)
            self.progress.update(len(results), self.total)

            token.check_cancellation(f"item {index}/{self.total}")

        return self._finish(ExecutionStrategy.SERIAL_COOPERATIVE, results, started)

    @log_performance()
    async def run_fan_out(self, token: Optional[CancellationToken] = None) -> RunReport:
        """
        Launch every item at once and join them.

        ``token`` is accepted for signature symmetry only: no checkpoint
        exists once the batch is launched, and the port is not handed the
        token either.

        Raises:
            Exception: The first fault raised by any operation. The remaining
                operations are not cancelled and finish in the background.
        """
        logger.info(f"Fan-out run over {self.total} items")
        self.progress.reset()
        started = time.perf_counter()
        completed = 0
        publishing = True

        async def fetch_one(item: WorkItem) -> WorkResult:
            nonlocal completed
            result = await self.fetch_port.fetch_async(item.identifier)
            # Detached stragglers of a failed join no longer publish
            if publishing:
                completed += 1
                self.progress.update(completed, self.total)
            return result

        tasks = [
            asyncio.ensure_future(fetch_one(item)) for item in self.work_items
        ]
        if token is not None and token.is_cancelled():
            logger.debug("Scope already triggered at launch; fan-out runs regardless")

        try:
            results = await asyncio.gather(*tasks)
        except Exception as e:
            publishing = False
            self._detach(tasks)
            logger.warning(f"Fan-out join failed: {e}")
            raise

        for result in results:
            self._report(result)
        return self._finish(ExecutionStrategy.FAN_OUT, list(results), started)

    def _report(self, result: WorkResult) -> None:
        logger.debug(f"Reported {result.identifier} ({result.payload_size} chars)")
        if self.report_sink is not None:
            self.report_sink(result.describe())
        if self.on_result is not None:
            self.on_result(result)

    def _finish(
        self,
        strategy: ExecutionStrategy,
        results: list[WorkResult],
        started: float,
    ) -> RunReport:
        report = RunReport(
            strategy=strategy,
            results=tuple(results),
            elapsed=timedelta(seconds=time.perf_counter() - started),
        )
        if self.report_sink is not None:
            self.report_sink(report.summary_line())
        logger.info(
            f"{strategy.value} run finished: {len(results)} items in {report.elapsed_ms}ms"
        )
        return report

    def _detach(self, tasks: list[asyncio.Task]) -> None:
        for task in tasks:
            if task.done():
                _consume(task)
                continue
            _detached_tasks.add(task)
            task.add_done_callback(_consume)


def _consume(task: asyncio.Task) -> None:
    _detached_tasks.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(f"Detached fan-out operation failed: {error}")
