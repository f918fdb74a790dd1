"""Shared fixtures: deterministic scheduler, fake clock and recording collaborators."""

import pytest

from screening.engine import TimecodeEngine
from screening.timecode.scheduler import ManualScheduler


class FakeNow:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_000):
        self.value = start

    def __call__(self) -> int:
        return self.value

    def advance(self, ms: int) -> int:
        self.value += ms
        return self.value


class Recorder:
    """Records every call as a tuple of its positional arguments."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, *args):
        self.calls.append(args)
        return self.result


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def now():
    return FakeNow()


@pytest.fixture
def engine(scheduler, now):
    """24 fps engine starting at 00:00:00:00."""
    return TimecodeEngine(
        scheduler,
        fps=24,
        start_timecode="00:00:00:00",
        sort_mode="timecode",
        now_ms=now,
    )


@pytest.fixture
def notifier():
    return Recorder()


@pytest.fixture
def sharer():
    return Recorder()


@pytest.fixture
def clipboard():
    return Recorder()


@pytest.fixture
def name_requester():
    return Recorder(result="session one")
