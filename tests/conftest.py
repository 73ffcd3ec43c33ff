from __future__ import annotations

from datetime import datetime
from typing import Sequence

import pytest

from core.interfaces.runner import CommandError


class RecordingRunner:
    """Fake `CommandRunner`: records argv, optionally fails on a given program."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[list[str]] = []
        self.fail_on = fail_on

    def run(self, argv: Sequence[str]) -> None:
        self.calls.append(list(argv))
        if self.fail_on and argv[0] == self.fail_on:
            raise CommandError("exit status 1: permission denied")


class FakeSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def fixed_now():
    def _make(*args: int):
        moment = datetime(*args)
        return lambda: moment

    return _make
