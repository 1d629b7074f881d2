"""Shared pytest fixtures."""

import itertools
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable

import pytest

from src.scheduler.jobs import JobRegistry


class ManualTimer:
    """Timer double that only fires when told to."""

    def __init__(self):
        self.armed: dict[int, tuple[int, Callable[[], Awaitable[None]]]] = {}
        self.arm_count = 0
        self._ids = itertools.count(1)

    def arm(self, period_ms: int, callback: Callable[[], Awaitable[None]]) -> int:
        handle = next(self._ids)
        self.armed[handle] = (period_ms, callback)
        self.arm_count += 1
        return handle

    def disarm(self, handle: Any) -> None:
        self.armed.pop(handle, None)

    async def tick(self) -> None:
        """Simulate one elapsed interval for every armed timer."""
        for _, callback in list(self.armed.values()):
            await callback()

    def periods(self) -> list[int]:
        return [period for period, _ in self.armed.values()]


class FakeClock:
    """Controllable current-time source."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += timedelta(milliseconds=ms)


class RecordingReporter:
    """Failure reporter that remembers what it was told."""

    def __init__(self):
        self.failures: list[tuple[str, BaseException]] = []

    @property
    def channel_name(self) -> str:
        return "recording"

    async def report(self, job_id: str, error: BaseException) -> None:
        self.failures.append((job_id, error))


@pytest.fixture
def timer() -> ManualTimer:
    """Create a manual timer."""
    return ManualTimer()


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def reporter() -> RecordingReporter:
    """Create a recording failure reporter."""
    return RecordingReporter()


@pytest.fixture
def registry(timer, clock, reporter) -> JobRegistry:
    """Create a registry wired to the test doubles."""
    return JobRegistry(timer=timer, reporters=[reporter], clock=clock)
