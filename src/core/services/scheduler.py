"""Scheduler: fixed delay or next occurrence of a time of day.

Both modes block the whole process. The clock and the sleep function are
injectable so the arithmetic can be checked without waiting.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from core.domain.models import ScheduleConfig, TimeOfDay
from core.logging_setup import get_logger

_TIME_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")

ONE_DAY = timedelta(hours=24)

logger = get_logger("scheduler")


class ScheduleError(ValueError):
    """The requested schedule cannot be interpreted."""


@dataclass(frozen=True)
class ScheduledWait:
    """A resolved wait: how long, and a human readable notice (or None)."""

    duration: timedelta
    notice: str | None = None


def parse_time_of_day(value: str) -> TimeOfDay:
    """Parse a strict 24-hour `HH:MM` string."""

    match = _TIME_RE.fullmatch(value)
    if not match:
        raise ScheduleError(f"invalid time format: {value!r} (expected HH:MM, 24-hour)")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ScheduleError(f"invalid time format: {value!r} (hour or minute out of range)")
    return TimeOfDay(hour=hour, minute=minute)


def time_until(target: TimeOfDay, now: datetime) -> timedelta:
    """Duration from `now` to the next occurrence of `target`.

    The candidate is today's local midnight plus the target offset. If it
    already passed it moves to tomorrow. The result is real elapsed time
    (POSIX timestamps), so a DST change between now and the target shifts the
    wait, not the local time it fires at.
    """

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    candidate = midnight + timedelta(hours=target.hour, minutes=target.minute)
    if candidate < now:
        candidate += ONE_DAY
    return timedelta(seconds=candidate.timestamp() - now.timestamp())


def format_duration(value: timedelta) -> str:
    """Render a duration as `1h2m3s` (whole seconds)."""

    total = int(value.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"


def plan_wait(
    config: ScheduleConfig,
    *,
    now: Callable[[], datetime] = datetime.now,
) -> ScheduledWait:
    """Resolve the wait for a configuration without blocking.

    Time-of-day mode takes precedence; `delay_minutes` is ignored then.
    """

    action = config.action.value
    if config.uses_time_of_day:
        target = parse_time_of_day(config.scheduled_time or "")
        remaining = time_until(target, now())
        return ScheduledWait(
            duration=remaining,
            notice=f"{action} scheduled at {target} (in {format_duration(remaining)}).",
        )

    if config.delay_minutes > 0:
        return ScheduledWait(
            duration=timedelta(minutes=config.delay_minutes),
            notice=f"{action} scheduled in {config.delay_minutes} minutes.",
        )
    return ScheduledWait(duration=timedelta(0))


def wait(
    config: ScheduleConfig,
    *,
    sleep: Callable[[float], None] = time.sleep,
    now: Callable[[], datetime] = datetime.now,
    notify: Callable[[str], None] | None = None,
) -> ScheduledWait:
    """Block until the schedule fires.

    The notice goes to the log and, through `notify`, to the operator before
    blocking. A zero wait returns immediately without calling `sleep`.
    """

    planned = plan_wait(config, now=now)
    if planned.notice:
        logger.info(planned.notice)
        if notify is not None:
            notify(planned.notice)

    seconds = planned.duration.total_seconds()
    if seconds > 0:
        sleep(seconds)
    return planned
