"""
DownloadSession - observable state and commands for one download screen.

The session owns the two externally observable sinks (the accumulated result
text and the 0-100 progress value) and exposes one command per action:
serial-blocking run, serial-cooperative run, fan-out run and cancel. Any
presentation layer binds to the commands and subscribes to property changes;
nothing here depends on one.
"""

from collections.abc import Sequence
from typing import Any, Callable, Optional

from asyncops.async_infrastructure.cancellation import CancellationToken
from asyncops.async_infrastructure.progress import ProgressReporter
from asyncops.commands import AsyncCommand, RelayCommand
from asyncops.config.settings import get_workload_settings
from asyncops.errors.handler import CommandErrorHandler, LoggingErrorHandler
from asyncops.fetch.port import FetchPort
from asyncops.logging import get_logger
from asyncops.models import RunReport
from asyncops.orchestration import DownloadOrchestrator

logger = get_logger(__name__)

PropertyObserver = Callable[[str, Any], None]


class DownloadSession:
    """
    Runs the configured workload through any of the three strategies.

    Args:
        fetch_port: Performs the downloads
        sites: Ordered work list (defaults to the configured workload)
        error_handler: Receives failures of fire-and-forget invocations
            (defaults to a LoggingErrorHandler)
    """

    def __init__(
        self,
        fetch_port: FetchPort,
        sites: Optional[Sequence[str]] = None,
        error_handler: Optional[CommandErrorHandler] = None,
    ):
        self.fetch_port = fetch_port
        self.sites = list(sites) if sites is not None else list(get_workload_settings().sites)
        self.error_handler = error_handler or LoggingErrorHandler()
        self.last_report: Optional[RunReport] = None

        self._result_text = ""
        self._progress_value = 0
        self._observers: list[PropertyObserver] = []

        self.run_sync_command = RelayCommand(
            self.run_download_sync,
            error_handler=self.error_handler,
            name="run_download_sync",
        )
        self.run_async_command = AsyncCommand(
            self.run_download_async,
            error_handler=self.error_handler,
            name="run_download_async",
        )
        self.run_fan_out_command = AsyncCommand(
            self.run_download_fan_out,
            error_handler=self.error_handler,
            name="run_download_fan_out",
        )
        self.cancel_command = RelayCommand(
            self.cancel_operation,
            can_execute=lambda: self.run_async_command.is_executing,
            error_handler=self.error_handler,
            name="cancel_operation",
        )
        # Cancel is only available while a cooperative run is in flight
        self.run_async_command.add_can_execute_changed(
            lambda _command: self.cancel_command.raise_can_execute_changed()
        )

    # -- observable properties -------------------------------------------

    def add_observer(self, observer: PropertyObserver) -> None:
        """Register ``observer(property_name, new_value)``."""
        self._observers.append(observer)

    def remove_observer(self, observer: PropertyObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    @property
    def result_text(self) -> str:
        return self._result_text

    @result_text.setter
    def result_text(self, value: str) -> None:
        if value != self._result_text:
            self._result_text = value
            self._notify("result_text", value)

    @property
    def progress_value(self) -> int:
        return self._progress_value

    @progress_value.setter
    def progress_value(self, value: int) -> None:
        if value != self._progress_value:
            self._progress_value = value
            self._notify("progress_value", value)

    def _notify(self, name: str, value: Any) -> None:
        for observer in list(self._observers):
            try:
                observer(name, value)
            except Exception as e:
                logger.warning(f"Observer of {name} failed: {e}")

    # -- actions ---------------------------------------------------------

    def run_download_sync(self) -> RunReport:
        """Serial-blocking run; blocks the caller until every site is fetched."""
        self._start_run()
        self.last_report = self._orchestrator().run_serial_blocking()
        return self.last_report

    async def run_download_async(self, token: CancellationToken) -> RunReport:
        """Serial-cooperative run, stoppable between sites."""
        self._start_run()
        self.last_report = await self._orchestrator().run_serial_cooperative(token)
        return self.last_report

    async def run_download_fan_out(self, token: CancellationToken) -> RunReport:
        """Fan-out run; every site is requested at once."""
        self._start_run()
        self.last_report = await self._orchestrator().run_fan_out(token)
        return self.last_report

    def cancel_operation(self) -> None:
        """Trigger the scope of the running cooperative download."""
        if not self.run_async_command.cancel("Cancelled by user"):
            logger.debug("Nothing to cancel")

    def _start_run(self) -> None:
        self.result_text = ""
        self.progress_value = 0
        self.last_report = None

    def _orchestrator(self) -> DownloadOrchestrator:
        return DownloadOrchestrator(
            self.fetch_port,
            self.sites,
            report_sink=self._append_result,
            progress=ProgressReporter(sink=self._set_progress),
        )

    def _append_result(self, line: str) -> None:
        self.result_text = self.result_text + line

    def _set_progress(self, value: int) -> None:
        self.progress_value = value
