"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import heapq
import itertools
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


class VirtualTimer:
    """Handle for a timer armed on VirtualTime."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualTime:
    """
    A virtual clock and scheduler.

    Time only moves when a test calls advance(); timers due by then fire
    in (when, arming order) order, including timers armed while firing.
    """

    def __init__(self, start: float = 1000.0):
        self.time = start
        self._queue: list[tuple[float, int, VirtualTimer]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self.time

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> VirtualTimer:
        timer = VirtualTimer(self.time + max(delay_ms, 0), callback)
        heapq.heappush(self._queue, (timer.when, next(self._counter), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of armed, uncancelled timers."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, ms: float) -> None:
        """Move time forward, firing every timer that falls due."""
        target = self.time + ms
        while self._queue and self._queue[0][0] <= target:
            when, _, timer = heapq.heappop(self._queue)
            self.time = max(self.time, when)
            if not timer.cancelled:
                timer.callback()
        self.time = target


@pytest.fixture
def virtual_time() -> VirtualTime:
    """Virtual clock + scheduler for recorder and playback tests."""
    return VirtualTime()
