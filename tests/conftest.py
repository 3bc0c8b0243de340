"""Shared fixtures: a deterministic clock standing in for the asyncio timer backend."""

import pytest

from config import Configuration
from session import ReadingSession


class ManualTimer:
    def __init__(self, clock, due: float, callback):
        self.clock = clock
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True
        if self in self.clock.timers:
            self.clock.timers.remove(self)


class ManualClock:
    """call_later() records timers; advance() fires the due ones in order."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[ManualTimer] = []
        self.delays: list[float] = []
        self.max_pending = 0

    @property
    def pending(self) -> int:
        return len(self.timers)

    def call_later(self, delay_ms, callback) -> ManualTimer:
        timer = ManualTimer(self, self.now + delay_ms, callback)
        self.timers.append(timer)
        self.delays.append(delay_ms)
        self.max_pending = max(self.max_pending, len(self.timers))
        return timer

    def advance(self, ms: float) -> None:
        target = self.now + ms
        while True:
            due = [t for t in self.timers if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            self.now = timer.due
            timer.callback()
        self.now = target

    def run_until_idle(self, limit: int = 10_000) -> None:
        for _ in range(limit):
            if not self.timers:
                return
            self.advance(min(t.due for t in self.timers) - self.now)
        raise AssertionError("timers still pending after limit")


class Recorder:
    def __init__(self):
        self.frames = []
        self.statuses = []
        self.cursors = []


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def session(clock, recorder):
    return ReadingSession(
        config=Configuration(words_per_minute=600),
        timers=clock,
        on_render=recorder.frames.append,
        on_status=lambda held, reason: recorder.statuses.append((held, reason)),
        on_cursor=recorder.cursors.append,
    )
