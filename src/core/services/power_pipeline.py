"""Power action orchestration.

Scheduler -> confirmation gate -> notifier -> executor, in that order and
exactly once each. The CLI delegates the whole workflow here and only
provides hooks for operator-facing output, which keeps printing out of the
core logic and lets tests drive the flow with fakes.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, TextIO

from adapters.broadcast import send_wall_message
from adapters.system_power import ExecutionResult, PowerExecutor
from core.domain.models import ScheduleConfig
from core.interfaces.runner import CommandRunner
from core.logging_setup import get_logger
from core.services import confirmation, scheduler

logger = get_logger("pipeline")

CANCELLED_NOTICE = "Action cancelled."


class PipelineOutcome(str, Enum):
    EXECUTED = "executed"
    FAILED = "failed"
    UNSUPPORTED = "unsupported"
    CANCELLED = "cancelled"


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    notice: Callable[[str], None] | None = None
    prompt: Callable[[str], None] | None = None


@dataclass
class PipelineDeps:
    """Host collaborators. Defaults talk to the real clock and stdin."""

    executor: PowerExecutor
    broadcast_runner: CommandRunner
    sys_platform: str | None = None
    stdin: TextIO | None = None
    sleep: Callable[[float], None] = time.sleep
    now: Callable[[], datetime] = datetime.now


@dataclass
class PipelineResult:
    outcome: PipelineOutcome
    wait: scheduler.ScheduledWait
    answer: confirmation.Answer | None = None
    broadcast_sent: bool = False
    execution: ExecutionResult | None = None
    notices: list[str] = field(default_factory=list)


def _emit(hooks: PipelineHooks, result_notices: list[str], text: str) -> None:
    result_notices.append(text)
    if hooks.notice is not None:
        hooks.notice(text)


def run_pipeline(
    config: ScheduleConfig,
    deps: PipelineDeps,
    hooks: PipelineHooks | None = None,
) -> PipelineResult:
    """Run the full workflow for `config`.

    Raises `scheduler.ScheduleError` for an invalid time of day, before any
    wait begins. Every other failure is reported in the result.
    """

    hooks = hooks or PipelineHooks()
    notices: list[str] = []

    planned = scheduler.wait(
        config,
        sleep=deps.sleep,
        now=deps.now,
        notify=lambda text: _emit(hooks, notices, text),
    )

    answer: confirmation.Answer | None = None
    if config.confirm_required:
        answer = confirmation.ask(
            config.confirm_timeout_seconds,
            stream=deps.stdin,
            prompt=hooks.prompt or print,
        )
        if not answer.proceeds:
            _emit(hooks, notices, CANCELLED_NOTICE)
            logger.info("Action cancelled by user.")
            return PipelineResult(
                outcome=PipelineOutcome.CANCELLED,
                wait=planned,
                answer=answer,
                notices=notices,
            )

    sent = False
    if config.message:
        sent = send_wall_message(
            config.message,
            runner=deps.broadcast_runner,
            sys_platform=deps.sys_platform,
        )

    logger.debug("Executing %s action.", config.action.value)
    execution = deps.executor.execute(config.action)

    if execution.ok:
        outcome = PipelineOutcome.EXECUTED
    elif not execution.supported:
        outcome = PipelineOutcome.UNSUPPORTED
    else:
        outcome = PipelineOutcome.FAILED

    return PipelineResult(
        outcome=outcome,
        wait=planned,
        answer=answer,
        broadcast_sent=sent,
        execution=execution,
        notices=notices,
    )
