"""Core configuration.

- Environment defaults (pydantic-settings) shared by the CLI and adapters.
- Per-user paths for the `.env` file and the append-only log.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "sysreboot"
APP_VERSION = "0.1.2"


class EnvironmentSetupError(RuntimeError):
    """The per-user environment (log directory/file) is unusable."""


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Environment-level defaults.

    Command-line flags always win over these values; the settings only fill
    in what the operator did not pass explicitly.
    """

    model_config = SettingsConfigDict(
        env_prefix="SYSREBOOT_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    confirm_timeout_seconds: int = Field(
        default=10,
        gt=0,
        description="Default confirmation timeout (seconds).",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for sysreboot.log. Defaults to APPDATA (Windows) or the home directory.",
    )
    dry_run: bool = Field(
        default=False,
        description="Log the platform command instead of running it.",
    )
    sudo_command: str = Field(
        default="sudo",
        min_length=1,
        description="Elevation prefix for BSD-style shutdown commands.",
    )


def get_log_dir(settings: AppSettings | None = None, *, sys_platform: str | None = None) -> Path:
    """Resolve the directory holding the log file.

    Rules:
    - `SYSREBOOT_LOG_DIR` (or `.env`) wins when set.
    - Windows: `%APPDATA%`; unset is an `EnvironmentSetupError`.
    - Elsewhere: the user's home directory.
    """

    settings = settings or AppSettings()
    if settings.log_dir is not None:
        return settings.log_dir

    platform_name = sys_platform if sys_platform is not None else sys.platform
    if platform_name.startswith("win"):
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise EnvironmentSetupError("APPDATA is not set; cannot place the log file")
        return Path(appdata)

    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise EnvironmentSetupError(f"Error getting user home directory: {exc}") from exc


def get_log_file(settings: AppSettings | None = None) -> Path:
    return get_log_dir(settings) / f"{APP_NAME}.log"
