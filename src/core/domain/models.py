"""Domain models (Pydantic v2).

`ScheduleConfig` is the immutable snapshot built once from the command line
(and the environment defaults). Nothing downstream mutates it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Action(str, Enum):
    """Power-state action requested by the operator."""

    REBOOT = "reboot"
    POWEROFF = "poweroff"
    HALT = "halt"

    @classmethod
    def default(cls) -> "Action":
        return cls.REBOOT

    @classmethod
    def from_flags(
        cls,
        *,
        halt: bool = False,
        poweroff: bool = False,
        shutdown: bool = False,
        reboot: bool = False,
    ) -> "Action":
        """Resolve simultaneous flags by fixed precedence.

        halt wins over poweroff/shutdown, which win over reboot. Conflicting
        flags are never rejected. `reboot` is accepted for symmetry only:
        it is also the fallback when nothing else is selected.
        """

        if halt:
            return cls.HALT
        if poweroff or shutdown:
            return cls.POWEROFF
        return cls.default()


class ScheduleConfig(BaseModel):
    """Configuration snapshot for one invocation."""

    model_config = ConfigDict(frozen=True)

    action: Action = Field(
        default=Action.REBOOT,
        description="Action to perform once the schedule fires.",
    )
    delay_minutes: int = Field(
        default=0,
        ge=0,
        description="Minutes to wait before acting. Ignored when `scheduled_time` is set.",
    )
    scheduled_time: str | None = Field(
        default=None,
        description="Raw HH:MM (24-hour) time of day. Parsed by the scheduler.",
    )
    message: str = Field(
        default="",
        description="Text broadcast to logged-in users right before acting.",
    )
    confirm_required: bool = Field(
        default=False,
        description="Ask the operator before acting.",
    )
    confirm_timeout_seconds: int = Field(
        default=10,
        gt=0,
        description="How long the confirmation prompt waits before assuming yes.",
    )
    verbose: bool = Field(
        default=False,
        description="Write extra detail to the log file.",
    )
    dry_run: bool = Field(
        default=False,
        description="Log the platform command instead of running it.",
    )

    @property
    def uses_time_of_day(self) -> bool:
        """True when the time-of-day mode takes precedence over the delay."""

        return bool(self.scheduled_time)


class TimeOfDay(BaseModel):
    """A parsed HH:MM target."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"
