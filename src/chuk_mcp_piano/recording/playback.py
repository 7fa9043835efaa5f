"""
Playback engine - replays a Recording through named listener channels.

Scheduling is cooperative and single-threaded: every due event is fired
in order, then one timer is armed for the next event. Only one timer is
ever outstanding, so pause/stop/seek cancel everything by cancelling it.

Position accounting is in recording milliseconds:

    position = anchor_position + (now - anchor_time) * rate

while playing; paused and idle engines hold a frozen position.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from chuk_mcp_piano.constants import ErrorMessages, PlaybackChannel, PlaybackState
from chuk_mcp_piano.errors import InvalidRate, InvalidState
from chuk_mcp_piano.models.recording import Recording
from chuk_mcp_piano.recording.clock import AsyncioScheduler, Clock, MonotonicClock, Scheduler, TimerHandle

logger = logging.getLogger(__name__)

# Slack when comparing positions, so float error in delay/rate never strands an event
_EPSILON_MS = 1e-6

Listener = Callable[[Any], None]


@dataclass(frozen=True)
class PlaybackEvent:
    """A recorded event being played."""

    event_type: str
    note: int
    velocity: int
    channel: int
    timestamp: float
    index: int


@dataclass(frozen=True)
class PlaybackProgress:
    """Progress after an event fired."""

    progress: float  # 0-100, by event count
    current_time: float
    duration: float
    event_index: int
    total_events: int


@dataclass(frozen=True)
class PlaybackComplete:
    """Emitted on the complete channel, and on the loop channel at wrap-around."""

    duration: float
    total_events: int


@dataclass(frozen=True)
class PlaybackStopped:
    """Why playback stopped."""

    reason: str


class PlaybackEngine:
    """
    Plays a Recording in real (or virtual) time.

    Example:
        engine = PlaybackEngine()
        engine.on("event", lambda e: synth.send(e.event_type, e.note, e.velocity))
        engine.load_recording(recording)
        engine.play()
    """

    def __init__(self, clock: Clock | None = None, scheduler: Scheduler | None = None):
        self.clock = clock or MonotonicClock()
        self.scheduler = scheduler or AsyncioScheduler()

        self._recording: Recording | None = None
        self._state = PlaybackState.IDLE
        self._index = 0
        self._rate = 1.0
        self._loop = False

        self._position = 0.0
        self._anchor_time = 0.0

        self._timer: TimerHandle | None = None
        self._generation = 0
        self._listeners: dict[PlaybackChannel, list[Listener]] = {channel: [] for channel in PlaybackChannel}

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def on(self, channel: PlaybackChannel | str, listener: Listener) -> None:
        """Subscribe a listener to a channel (no-op if already subscribed)."""
        listeners = self._listeners[PlaybackChannel(channel)]
        if listener not in listeners:
            listeners.append(listener)

    def off(self, channel: PlaybackChannel | str, listener: Listener) -> None:
        """Unsubscribe a listener (no-op if not subscribed)."""
        listeners = self._listeners[PlaybackChannel(channel)]
        if listener in listeners:
            listeners.remove(listener)

    def _emit(self, channel: PlaybackChannel, payload: Any) -> None:
        for listener in list(self._listeners[channel]):
            try:
                listener(payload)
            except Exception:
                logger.exception(f"Playback listener failed on {channel.value} channel")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def recording(self) -> Recording | None:
        return self._recording

    @property
    def current_index(self) -> int:
        """Index of the next event to fire."""
        return self._index

    @property
    def playback_rate(self) -> float:
        return self._rate

    @property
    def loop(self) -> bool:
        return self._loop

    def set_loop(self, loop: bool) -> None:
        """Restart from the beginning on completion instead of going idle."""
        self._loop = loop

    def get_progress(self) -> float:
        """Percentage of events fired (0-100)."""
        if not self._recording or not self._recording.events:
            return 0.0
        return self._index / len(self._recording.events) * 100

    def get_current_time(self) -> float:
        """Current position in recording milliseconds."""
        if not self._recording:
            return 0.0
        return min(max(self._position_now(), 0.0), self._recording.duration)

    def _position_now(self) -> float:
        if self._state == PlaybackState.PLAYING:
            return self._position + (self.clock.now() - self._anchor_time) * self._rate
        return self._position

    def _rebase(self) -> None:
        """Freeze the current position as the new anchor."""
        self._position = self._position_now()
        self._anchor_time = self.clock.now()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def load_recording(self, recording: Recording | dict[str, Any]) -> None:
        """
        Load a recording, cancelling any playback in progress.

        Raises:
            InvalidRecording: If the document fails validation
        """
        loaded = Recording.from_document(recording)

        self._cancel_timer()
        self._recording = loaded
        self._state = PlaybackState.IDLE
        self._index = 0
        self._position = 0.0
        logger.debug(f"Loaded recording '{loaded.name}' with {loaded.total_events} events")

    def play(self) -> None:
        """
        Start or resume playback.

        From idle, playback starts at the current index (0, or wherever
        seek left it); from paused, it resumes where it paused.

        Raises:
            InvalidState: If no recording is loaded
        """
        if self._recording is None:
            raise InvalidState(ErrorMessages.NO_RECORDING)
        if self._state == PlaybackState.PLAYING:
            logger.warning("Already playing")
            return

        self._anchor_time = self.clock.now()
        self._state = PlaybackState.PLAYING
        logger.debug(f"Playback started at {self._position:.0f}ms (event {self._index})")
        self._advance()

    def pause(self) -> None:
        """
        Pause playback, keeping the position.

        Raises:
            InvalidState: If not playing
        """
        if self._state != PlaybackState.PLAYING:
            raise InvalidState(f"Cannot pause while {self._state.value}")

        self._cancel_timer()
        self._rebase()
        self._state = PlaybackState.PAUSED
        logger.debug(f"Playback paused at {self._position:.0f}ms")

    def stop(self, reason: str = "stopped") -> None:
        """Stop playback and rewind to the start. Valid in any state."""
        self._cancel_timer()
        self._state = PlaybackState.IDLE
        self._index = 0
        self._position = 0.0
        logger.debug(f"Playback stopped: {reason}")
        self._emit(PlaybackChannel.STOP, PlaybackStopped(reason))

    def seek(self, target_ms: float) -> None:
        """
        Move to a position; the next event is the first at or after it.

        Playing engines keep playing from the new position; paused and
        idle engines stay put with the index pre-positioned.

        Raises:
            InvalidState: If no recording is loaded
        """
        if self._recording is None:
            raise InvalidState(ErrorMessages.NO_RECORDING)

        target = min(max(float(target_ms), 0.0), self._recording.duration)
        events = self._recording.events
        self._index = next(
            (i for i, event in enumerate(events) if event.timestamp >= target),
            len(events),
        )
        self._position = target
        self._anchor_time = self.clock.now()

        if self._state == PlaybackState.PLAYING:
            self._cancel_timer()
            self._advance()

    def set_playback_rate(self, rate: float) -> None:
        """
        Change the speed multiplier (2.0 = double speed).

        Raises:
            InvalidRate: If rate is not positive
        """
        if rate <= 0:
            raise InvalidRate(ErrorMessages.INVALID_RATE.format(rate=rate))

        if self._state == PlaybackState.PLAYING:
            self._cancel_timer()
            self._rebase()
            self._rate = rate
            self._advance()
        else:
            self._rate = rate

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self, generation: int) -> None:
        if generation != self._generation or self._state != PlaybackState.PLAYING:
            return
        self._timer = None
        self._advance()

    def _advance(self) -> None:
        """Fire every due event in order, then arm a timer for the next one."""
        try:
            self._fire_due_events()
        except Exception as e:
            logger.exception("Playback scheduling failed")
            self.stop(reason=f"error: {e}")

    def _fire_due_events(self) -> None:
        recording = self._recording
        if recording is None:
            raise InvalidState(ErrorMessages.NO_RECORDING)
        events = recording.events
        generation = self._generation

        while self._index < len(events):
            event = events[self._index]
            position = self._position_now()
            if event.timestamp > position + _EPSILON_MS:
                delay = (event.timestamp - position) / self._rate
                self._timer = self.scheduler.call_later(delay, lambda: self._on_timer(generation))
                return

            self._fire(recording, self._index)
            if self._interrupted(generation):
                return

        self._complete(recording)

    def _interrupted(self, generation: int) -> bool:
        """Whether a listener paused, stopped or reloaded since generation was taken."""
        return generation != self._generation or self._state != PlaybackState.PLAYING

    def _fire(self, recording: Recording, index: int) -> None:
        event = recording.events[index]
        total = len(recording.events)
        generation = self._generation
        self._index = index + 1

        self._emit(
            PlaybackChannel.EVENT,
            PlaybackEvent(event.event_type, event.note, event.velocity, event.channel, event.timestamp, index),
        )
        if self._interrupted(generation):
            return
        self._emit(
            PlaybackChannel.PROGRESS,
            PlaybackProgress(
                progress=(index + 1) / total * 100,
                current_time=event.timestamp,
                duration=recording.duration,
                event_index=index,
                total_events=total,
            ),
        )

    def _complete(self, recording: Recording) -> None:
        summary = PlaybackComplete(recording.duration, len(recording.events))

        if self._loop and recording.events:
            self._index = 0
            self._position = 0.0
            self._anchor_time = self.clock.now()
            logger.debug("Playback looping")
            self._emit(PlaybackChannel.LOOP, summary)
            if self._state == PlaybackState.PLAYING:
                generation = self._generation
                self._timer = self.scheduler.call_later(0, lambda: self._on_timer(generation))
            return

        self._cancel_timer()
        self._state = PlaybackState.IDLE
        self._index = 0
        self._position = 0.0
        logger.debug(f"Playback complete: {summary.total_events} events")
        self._emit(PlaybackChannel.COMPLETE, summary)
