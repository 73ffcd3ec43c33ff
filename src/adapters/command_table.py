"""Platform command table.

A pure mapping from (platform family, action) to the host command line.
Adding a platform is a table edit here, nothing else changes.
"""

from __future__ import annotations

from core.domain.models import Action
from core.domain.platforms import PlatformFamily

# "{sudo}" is replaced by the configured elevation prefix.
_COMMANDS: dict[PlatformFamily, dict[Action, tuple[str, ...]]] = {
    PlatformFamily.SERVICE_MANAGER: {
        Action.REBOOT: ("systemctl", "reboot"),
        Action.POWEROFF: ("systemctl", "poweroff"),
        Action.HALT: ("systemctl", "halt"),
    },
    PlatformFamily.BSD: {
        Action.REBOOT: ("{sudo}", "shutdown", "-r", "now"),
        Action.POWEROFF: ("{sudo}", "shutdown", "-h", "now"),
        Action.HALT: ("{sudo}", "halt"),
    },
    PlatformFamily.WINDOWS: {
        Action.REBOOT: ("shutdown", "/r", "/t", "0"),
        Action.POWEROFF: ("shutdown", "/s", "/t", "0"),
    },
}


def command_for(
    platform: PlatformFamily,
    action: Action,
    *,
    sudo: str = "sudo",
) -> list[str] | None:
    """Return the argv for `action` on `platform`, or None when unsupported."""

    template = _COMMANDS.get(platform, {}).get(action)
    if template is None:
        return None
    return [sudo if part == "{sudo}" else part for part in template]
