"""sysreboot command line (Typer).

Parses flags into a `ScheduleConfig`, opens the log, and hands the workflow
to `core.services.power_pipeline`. Output to the operator goes through Rich
consoles; the log file gets the same notices with timestamps.
"""

from __future__ import annotations

import sys
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.subprocess_runner import DryRunRunner, SubprocessRunner
from adapters.system_power import PowerExecutor
from core.config import APP_NAME, APP_VERSION, AppSettings, EnvironmentSetupError, get_log_file
from core.domain.models import Action, ScheduleConfig
from core.domain.platforms import detect_platform
from core.interfaces.runner import CommandRunner
from core.logging_setup import get_logger, setup_logging
from core.services.power_pipeline import PipelineDeps, PipelineHooks, run_pipeline
from core.services.scheduler import ScheduleError

_EPILOG = (
    "Examples:\n\n"
    f"  {APP_NAME} --reboot --delay 5 --message \"System will reboot in 5 minutes!\"\n\n"
    f"  {APP_NAME} --poweroff --confirm\n\n"
    f"  {APP_NAME} --shutdown --confirm\n\n"
    f"  {APP_NAME} --halt --verbose\n\n"
    f"  {APP_NAME} --time 23:30 --message \"Nightly reboot\""
)

app = typer.Typer(
    name=APP_NAME,
    add_completion=False,
    help="Enhanced reboot tool with smart capabilities.",
    epilog=_EPILOG,
)

_console = Console(highlight=False)
_err_console = Console(stderr=True, highlight=False)

logger = get_logger()


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"{APP_NAME} version {APP_VERSION}")
        raise typer.Exit()


def _print_notice(text: str) -> None:
    _console.print(text, markup=False, soft_wrap=True)


def _host_platform() -> str:
    return sys.platform


def _build_runner(dry_run: bool) -> CommandRunner:
    return DryRunRunner() if dry_run else SubprocessRunner()


@app.command()
def main(
    halt: bool = typer.Option(False, "--halt", "-h", help="Halt the machine."),
    poweroff: bool = typer.Option(False, "--poweroff", "-p", help="Power-off the machine."),
    shutdown: bool = typer.Option(
        False, "--shutdown", "-s", help="Shutdown the machine (alias for poweroff)."
    ),
    reboot: bool = typer.Option(
        False, "--reboot", "-r", help="Reboot the machine (default action)."
    ),
    delay: int = typer.Option(
        0, "--delay", "-d", min=0, help="Delay in minutes before performing the action."
    ),
    at_time: str = typer.Option(
        "", "--time", "-t", help="Specific time for the action in HH:MM format (24-hour)."
    ),
    message: str = typer.Option(
        "", "--message", "-m", help="Message to send to all users before performing the action."
    ),
    confirm: bool = typer.Option(
        False, "--confirm", "-c", help="Require confirmation before performing the action."
    ),
    confirm_timeout: Optional[int] = typer.Option(
        None,
        "--confirm-timeout",
        "-ct",
        min=1,
        help="Confirmation timeout in seconds. [default: 10]",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-vb", help="Output more information."),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Log the platform command instead of running it."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show application version.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Reboot, power off or halt this machine, now or later."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _err_console.print(
            f"Error: invalid {APP_NAME} environment settings: {exc}", markup=False, soft_wrap=True
        )
        raise typer.Exit(code=1) from exc

    try:
        setup_logging(get_log_file(settings), verbose=verbose)
    except EnvironmentSetupError as exc:
        _err_console.print(f"Error: {exc}", markup=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    config = ScheduleConfig(
        action=Action.from_flags(halt=halt, poweroff=poweroff, shutdown=shutdown, reboot=reboot),
        delay_minutes=delay,
        scheduled_time=at_time or None,
        message=message,
        confirm_required=confirm,
        confirm_timeout_seconds=(
            confirm_timeout if confirm_timeout is not None else settings.confirm_timeout_seconds
        ),
        verbose=verbose,
        dry_run=dry_run or settings.dry_run,
    )

    host = _host_platform()
    runner = _build_runner(config.dry_run)
    deps = PipelineDeps(
        executor=PowerExecutor(runner, detect_platform(host), sudo=settings.sudo_command),
        broadcast_runner=runner,
        sys_platform=host,
    )
    hooks = PipelineHooks(notice=_print_notice, prompt=_print_notice)

    try:
        result = run_pipeline(config, deps, hooks)
    except ScheduleError as exc:
        logger.error("Error scheduling action: %s", exc)
        _err_console.print(f"Error: {exc}", markup=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if result.execution is not None and not result.execution.ok:
        _err_console.print(result.execution.message, markup=False, soft_wrap=True)


def run() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    run()
