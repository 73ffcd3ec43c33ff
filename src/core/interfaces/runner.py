"""External command contract.

Why a Protocol:
- The executor and notifier only need "run this argv once, synchronously".
- Tests substitute a recording fake without touching the host.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


class CommandError(RuntimeError):
    """An external command could not be started or exited non-zero."""


@runtime_checkable
class CommandRunner(Protocol):
    """Minimal contract for running one host command."""

    def run(self, argv: Sequence[str]) -> None:
        """Run `argv` to completion. Raise `CommandError` on failure."""

        ...
