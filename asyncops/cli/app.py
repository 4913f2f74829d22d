"""CLI app entry point.

``asyncops run`` downloads the configured workload with one of the three
strategies; ``asyncops sites`` lists the workload. Ctrl+C during a
cooperative run triggers the run's cancellation scope, so the run stops at
the next checkpoint instead of being killed.
"""

import asyncio
import logging
import signal
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from asyncops.async_infrastructure.cancellation import CancellationError
from asyncops.config.settings import (
    FetchSettings,
    get_fetch_settings,
    get_logging_settings,
    get_workload_settings,
)
from asyncops.errors import AsyncOpsError, error_to_user_message, get_error_code
from asyncops.errors.handler import LoggingErrorHandler
from asyncops.fetch import FetchPort, HttpFetchPort
from asyncops.logging import (
    configure_logging,
    get_logger,
    set_component_log_level,
    set_debug_mode,
)
from asyncops.models import ExecutionStrategy, RunReport
from asyncops.session import DownloadSession

logger = get_logger(__name__)
console = Console()
error_console = Console(stderr=True)

EXIT_FAULT = 1
EXIT_CANCELLED = 130

app = typer.Typer(
    name="asyncops",
    help="asyncops - cancellable batch downloads with three execution strategies.",
    add_completion=False,
    no_args_is_help=True,
)


def build_fetch_port(settings: FetchSettings) -> FetchPort:
    """Create the fetch port used by ``run``."""
    return HttpFetchPort(settings=settings)


def _setup_logging(verbose: bool) -> None:
    logging_settings = get_logging_settings()
    level = getattr(logging, logging_settings.level.upper(), logging.INFO)
    configure_logging(
        log_dir=logging_settings.log_dir,
        console_level=logging.DEBUG if verbose else level,
    )
    set_debug_mode(verbose)
    if verbose:
        set_component_log_level("fetch.http", logging.DEBUG)


@app.command("sites")
def list_sites() -> None:
    """List the configured workload in processing order."""
    for index, site in enumerate(get_workload_settings().sites, start=1):
        console.print(f"{index:>2}. {site}")


@app.command("run")
def run(
    strategy: ExecutionStrategy = typer.Option(
        ExecutionStrategy.SERIAL_COOPERATIVE,
        "--strategy",
        "-s",
        help="sync (serial-blocking), async (serial-cooperative) or fan-out",
    ),
    sites: Optional[List[str]] = typer.Option(
        None, "--site", help="Site to fetch (repeatable); defaults to the workload"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Per-request timeout in seconds"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Minimal output"),
) -> None:
    """
    Download every site of the workload and report their sizes.

    Exit codes: 0 on success, 1 on a fault, 130 when cancelled.
    """
    _setup_logging(verbose)

    settings = get_fetch_settings()
    if timeout is not None:
        settings = settings.model_copy(update={"timeout": timeout})

    try:
        session = DownloadSession(
            build_fetch_port(settings),
            sites=sites or None,
            error_handler=LoggingErrorHandler(logger),
        )
        report = asyncio.run(_run_session(session, strategy, quiet))
    except CancellationError:
        if not quiet:
            error_console.print("\n🛑 Cancelled by user")
        raise typer.Exit(EXIT_CANCELLED)
    except AsyncOpsError as e:
        error_console.print(f"[red]{error_to_user_message(e)}[/red] ({get_error_code(e)})")
        if e.suggestion:
            error_console.print(f"💡 {e.suggestion}")
        raise typer.Exit(EXIT_FAULT)

    if not quiet:
        _print_report(report)


async def _run_session(
    session: DownloadSession, strategy: ExecutionStrategy, quiet: bool
) -> RunReport:
    printed = 0

    def echo_results(name: str, value: object) -> None:
        nonlocal printed
        if name != "result_text" or quiet:
            return
        text = str(value)
        if len(text) < printed:
            printed = 0
        console.print(text[printed:], end="", markup=False, highlight=False)
        printed = len(text)

    session.add_observer(echo_results)

    command = {
        ExecutionStrategy.SERIAL_BLOCKING: session.run_sync_command,
        ExecutionStrategy.SERIAL_COOPERATIVE: session.run_async_command,
        ExecutionStrategy.FAN_OUT: session.run_fan_out_command,
    }[strategy]

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, session.cancel_operation)
        signal_installed = True
    except (NotImplementedError, RuntimeError):
        signal_installed = False

    try:
        if quiet or strategy is ExecutionStrategy.SERIAL_BLOCKING:
            await command.execute_async()
        else:
            await _with_progress_bar(session, command.execute_async())
    finally:
        if signal_installed:
            loop.remove_signal_handler(signal.SIGINT)
        session.remove_observer(echo_results)

    console.print()
    if session.last_report is None:
        raise CancellationError("Run did not complete")
    return session.last_report


async def _with_progress_bar(session: DownloadSession, awaitable) -> None:
    with Progress(
        TextColumn("[bold blue]Downloading"),
        BarColumn(),
        TaskProgressColumn(),
        console=error_console,
        transient=True,
    ) as progress:
        task = progress.add_task("download", total=100)

        def on_progress(name: str, value: object) -> None:
            if name == "progress_value":
                progress.update(task, completed=value)

        session.add_observer(on_progress)
        try:
            await awaitable
        finally:
            session.remove_observer(on_progress)


def _print_report(report: RunReport) -> None:
    table = Table(title=f"{report.strategy.value} run")
    table.add_column("#", justify="right")
    table.add_column("Site")
    table.add_column("Characters", justify="right")
    for index, result in enumerate(report.results, start=1):
        table.add_row(str(index), result.identifier, f"{result.payload_size:,}")
    console.print(table)
    console.print(
        f"✅ {len(report.results)} sites, {report.total_payload_size:,} characters "
        f"in {report.elapsed_ms}ms"
    )


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        error_console.print("\n🛑 Cancelled by user")
        sys.exit(EXIT_CANCELLED)
