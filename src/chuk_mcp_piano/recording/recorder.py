"""
Recorder - captures note events into a Recording document.

Timestamps are measured on an injected monotonic clock relative to the
start of the take, with paused time subtracted.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from chuk_mcp_piano.constants import (
    DEFAULT_NOTE_OFF_VELOCITY,
    DEFAULT_NOTE_ON_VELOCITY,
    DEFAULT_RECORDING_NAME,
    RECORDING_VERSION,
    EventType,
    RecorderState,
)
from chuk_mcp_piano.errors import InvalidRecording, InvalidState
from chuk_mcp_piano.models._errors import describe_validation_error
from chuk_mcp_piano.models.recording import Recording, RecordingEvent, epoch_ms, new_id
from chuk_mcp_piano.recording.clock import Clock, MonotonicClock

logger = logging.getLogger(__name__)


class Recorder:
    """
    Records MIDI note events.

    State machine: idle -> recording <-> paused -> idle.

    Example:
        recorder = Recorder()
        recorder.start()
        recorder.record_event("noteOn", 60)
        recorder.record_event("noteOff", 60)
        recording = recorder.stop("Warm-up")
    """

    def __init__(self, clock: Clock | None = None):
        self.clock = clock or MonotonicClock()
        self._state = RecorderState.IDLE
        self._events: list[dict[str, Any]] = []
        self._start_time = 0.0
        self._pause_start: float | None = None
        self._total_pause = 0.0

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def event_count(self) -> int:
        """Number of events captured in the current take."""
        return len(self._events)

    def start(self) -> None:
        """Begin a new take, discarding any previous buffer."""
        if self._state != RecorderState.IDLE:
            raise InvalidState(f"Cannot start recording while {self._state.value}")

        self._reset()
        self._start_time = self.clock.now()
        self._state = RecorderState.RECORDING
        logger.debug("Recording started")

    def record_event(
        self,
        event_type: EventType | str,
        note: int,
        velocity: int | None = None,
        channel: int = 0,
    ) -> None:
        """
        Append a note event at the current take time.

        Args:
            event_type: "noteOn" or "noteOff"
            note: MIDI note number
            velocity: Defaults to 100 for noteOn and 0 for noteOff
            channel: MIDI channel

        Raises:
            InvalidState: If not recording
            InvalidRecording: If note, velocity or channel is out of range (nothing is stored)
            ValueError: If the event type is unknown
        """
        if self._state != RecorderState.RECORDING:
            raise InvalidState(f"Cannot record events while {self._state.value}")

        kind = EventType(event_type)
        if velocity is None:
            velocity = DEFAULT_NOTE_ON_VELOCITY if kind == EventType.NOTE_ON else DEFAULT_NOTE_OFF_VELOCITY

        event = {
            "type": kind.value,
            "note": note,
            "velocity": velocity,
            "timestamp": self.clock.now() - self._start_time - self._total_pause,
            "channel": channel,
        }
        try:
            RecordingEvent.model_validate(event)
        except ValidationError as e:
            raise InvalidRecording(describe_validation_error(e, "Event")) from e

        self._events.append(event)

    def pause(self) -> None:
        """Pause the take; paused time is excluded from timestamps."""
        if self._state != RecorderState.RECORDING:
            raise InvalidState(f"Cannot pause while {self._state.value}")

        self._pause_start = self.clock.now()
        self._state = RecorderState.PAUSED
        logger.debug("Recording paused")

    def resume(self) -> None:
        """Resume a paused take."""
        if self._state != RecorderState.PAUSED or self._pause_start is None:
            raise InvalidState(f"Cannot resume while {self._state.value}")

        self._total_pause += self.clock.now() - self._pause_start
        self._pause_start = None
        self._state = RecorderState.RECORDING
        logger.debug(f"Recording resumed (paused {self._total_pause:.0f}ms in total)")

    def stop(self, name: str = DEFAULT_RECORDING_NAME, metadata: dict[str, Any] | None = None) -> Recording:
        """
        Finish the take and build the Recording.

        Timestamps are shifted so the first event is at 0 and the duration
        is the last event's timestamp.

        Raises:
            InvalidState: If idle
            InvalidRecording: If the name is empty or too long (the take is kept)
        """
        if self._state == RecorderState.IDLE:
            raise InvalidState("Cannot stop: not recording")

        first = min((e["timestamp"] for e in self._events), default=0.0)
        events = [{**e, "timestamp": e["timestamp"] - first} for e in self._events]
        duration = max((e["timestamp"] for e in events), default=0.0)

        recording = Recording.from_document(
            {
                "version": RECORDING_VERSION,
                "id": new_id(),
                "name": name,
                "createdAt": epoch_ms(),
                "duration": duration,
                "metadata": metadata or {},
                "events": events,
            }
        )
        self._reset()

        logger.debug(f"Recording stopped: {recording.total_events} events, {duration:.0f}ms")
        return recording

    def cancel(self) -> None:
        """Discard the take."""
        self._reset()
        logger.debug("Recording cancelled")

    def current_duration(self) -> float:
        """Take time so far in milliseconds (0 when idle)."""
        if self._state == RecorderState.IDLE:
            return 0.0
        now = self._pause_start if self._pause_start is not None else self.clock.now()
        return now - self._start_time - self._total_pause

    def _reset(self) -> None:
        self._state = RecorderState.IDLE
        self._events = []
        self._start_time = 0.0
        self._pause_start = None
        self._total_pause = 0.0
