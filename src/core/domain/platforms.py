"""Host platform families.

The executor and the notifier only care about which family of tooling the
host offers, not about the exact `sys.platform` string.
"""

from __future__ import annotations

import sys
from enum import Enum


class PlatformFamily(str, Enum):
    """Family of power-management tooling available on a host."""

    SERVICE_MANAGER = "service-manager"
    BSD = "bsd"
    WINDOWS = "windows"
    UNSUPPORTED = "unsupported"


_BSD_PREFIXES = ("darwin", "freebsd", "openbsd", "netbsd")

# Hosts with a `wall`-style broadcast facility.
_BROADCAST_PLATFORMS = ("linux", "darwin")


def detect_platform(sys_platform: str | None = None) -> PlatformFamily:
    """Map a `sys.platform` value to a `PlatformFamily`."""

    name = (sys_platform if sys_platform is not None else sys.platform).lower()
    if name.startswith("linux"):
        return PlatformFamily.SERVICE_MANAGER
    if name.startswith(_BSD_PREFIXES):
        return PlatformFamily.BSD
    if name.startswith(("win32", "cygwin")):
        return PlatformFamily.WINDOWS
    return PlatformFamily.UNSUPPORTED


def supports_broadcast(sys_platform: str | None = None) -> bool:
    name = (sys_platform if sys_platform is not None else sys.platform).lower()
    return name.startswith(_BROADCAST_PLATFORMS)
