"""Confirmation gate: a yes/no prompt raced against a countdown.

Two independent producers feed a single-slot queue:
- a daemon thread reading one line from the input stream,
- a `threading.Timer` firing after the timeout.

The first `put_nowait` wins; the loser hits `queue.Full` and its result is
dropped. The reader thread is never interrupted (console reads cannot be),
it simply finishes later, or never, without effect.
"""

from __future__ import annotations

import queue
import sys
import threading
from enum import Enum
from typing import Callable, TextIO

from core.logging_setup import get_logger

PROMPT = "Are you sure you want to proceed with the action? (y/n)"
TIMEOUT_NOTICE = "Confirmation timer expired, proceeding with action."

logger = get_logger("confirmation")


class Answer(str, Enum):
    APPROVED = "approved"
    DENIED = "denied"
    TIMED_OUT = "timed-out"

    @property
    def proceeds(self) -> bool:
        """Timeout is an implicit yes."""

        return self is not Answer.DENIED


_TIMEOUT = object()


def interpret(response: str) -> Answer:
    """Approve only when the first character is `y` or `Y`."""

    if response[:1] in ("y", "Y"):
        return Answer.APPROVED
    return Answer.DENIED


def _offer(handoff: "queue.Queue[object]", item: object) -> None:
    try:
        handoff.put_nowait(item)
    except queue.Full:
        pass


def _read_line(stream: TextIO, handoff: "queue.Queue[object]") -> None:
    try:
        line = stream.readline()
    except (OSError, ValueError) as exc:
        logger.warning("Could not read confirmation input: %s", exc)
        return
    # EOF without a line means "no answer": leave the decision to the timer.
    if line == "":
        return
    _offer(handoff, line)


def ask(
    timeout_seconds: float,
    *,
    stream: TextIO | None = None,
    prompt: Callable[[str], None] = print,
) -> Answer:
    """Prompt and wait for whichever comes first: one line or the timeout."""

    stream = stream if stream is not None else sys.stdin
    handoff: "queue.Queue[object]" = queue.Queue(maxsize=1)

    prompt(PROMPT)

    timer = threading.Timer(timeout_seconds, _offer, args=(handoff, _TIMEOUT))
    timer.daemon = True
    reader = threading.Thread(
        target=_read_line,
        args=(stream, handoff),
        name="sysreboot-confirm-reader",
        daemon=True,
    )
    timer.start()
    reader.start()

    result = handoff.get()
    if result is _TIMEOUT:
        prompt("\n" + TIMEOUT_NOTICE)
        logger.info(TIMEOUT_NOTICE)
        return Answer.TIMED_OUT

    timer.cancel()
    answer = interpret(str(result))
    logger.debug("Confirmation answer: %s", answer.value)
    return answer
