"""Action executor.

Looks the command up in the platform table and runs it once. A failed or
unsupported command becomes a failed `ExecutionResult`, never an exception.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass

from adapters.command_table import command_for
from core.domain.models import Action
from core.domain.platforms import PlatformFamily
from core.interfaces.runner import CommandError, CommandRunner
from core.logging_setup import get_logger

logger = get_logger("executor")


@dataclass(frozen=True)
class ExecutionResult:
    ok: bool
    message: str
    command: list[str] | None = None
    supported: bool = True


class PowerExecutor:
    """Runs the host command for an `Action` on a given platform family."""

    def __init__(
        self,
        runner: CommandRunner,
        platform: PlatformFamily,
        *,
        sudo: str = "sudo",
    ) -> None:
        self._runner = runner
        self._platform = platform
        self._sudo = sudo

    @property
    def platform(self) -> PlatformFamily:
        return self._platform

    def execute(self, action: Action) -> ExecutionResult:
        argv = command_for(self._platform, action, sudo=self._sudo)
        if argv is None:
            message = f"Unsupported action or OS: {action.value} on {self._platform.value}"
            logger.info(message)
            return ExecutionResult(ok=False, message=message, supported=False)

        logger.debug("Running %s", shlex.join(argv))
        try:
            self._runner.run(argv)
        except CommandError as exc:
            message = f"Failed to execute {action.value}: {exc}"
            logger.info(message)
            return ExecutionResult(ok=False, message=message, command=argv)

        message = f"{action.value} action executed successfully."
        logger.info(message)
        return ExecutionResult(ok=True, message=message, command=argv)
