"""
Time sources for the recorder and playback engine.

Both engines read a monotonic clock in milliseconds and arm one-shot
timers through a scheduler. The defaults use time.monotonic and the
running asyncio loop; tests inject a virtual clock instead.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import Protocol


class Clock(Protocol):
    """A monotonic time source."""

    def now(self) -> float:
        """Milliseconds on a clock that never goes backwards."""
        ...


class TimerHandle(Protocol):
    """A cancellable pending callback."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Deferred execution: run a callback after a delay."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Arm a one-shot timer and return a handle that cancels it."""
        ...


class MonotonicClock:
    """Clock backed by time.monotonic."""

    def now(self) -> float:
        return time.monotonic() * 1000


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop.

    The loop is looked up lazily so the engine can be built outside a
    running loop; timers must be armed from within one.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(delay_ms, 0) / 1000, callback)
