"""Notifier: broadcast a message to logged-in users with `wall`.

Only hosts with a system-wide broadcast facility are handled; elsewhere the
call is a silent no-op. Failures are logged and never propagate.
"""

from __future__ import annotations

from core.domain.platforms import supports_broadcast
from core.interfaces.runner import CommandError, CommandRunner
from core.logging_setup import get_logger

logger = get_logger("broadcast")


def send_wall_message(
    message: str,
    *,
    runner: CommandRunner,
    sys_platform: str | None = None,
) -> bool:
    """Broadcast `message`. Returns True if `wall` ran successfully."""

    if not message:
        return False

    if not supports_broadcast(sys_platform):
        logger.debug("Wall message feature is not supported on this OS.")
        return False

    logger.debug("Sending wall message.")
    try:
        runner.run(["wall", message])
    except CommandError as exc:
        logger.info("Failed to send wall message: %s", exc)
        return False
    return True
