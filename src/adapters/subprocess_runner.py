"""`CommandRunner` implementations.

- `SubprocessRunner` runs the host command synchronously.
- `DryRunRunner` only logs what would have run.
"""

from __future__ import annotations

import shlex
import subprocess
from typing import Sequence

from core.interfaces.runner import CommandError, CommandRunner
from core.logging_setup import get_logger

logger = get_logger("runner")


class SubprocessRunner(CommandRunner):
    """Runs commands with `subprocess.run`, capturing stderr for error reports."""

    def run(self, argv: Sequence[str]) -> None:
        try:
            completed = subprocess.run(  # noqa: S603
                list(argv),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise CommandError(f"{argv[0]}: {exc}") from exc

        if completed.returncode != 0:
            detail = (completed.stderr or "").strip()
            message = f"exit status {completed.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise CommandError(message)


class DryRunRunner(CommandRunner):
    """Records and logs commands instead of running them."""

    def __init__(self) -> None:
        self.commands: list[list[str]] = []

    def run(self, argv: Sequence[str]) -> None:
        self.commands.append(list(argv))
        logger.info("[dry-run] would run: %s", shlex.join(argv))
