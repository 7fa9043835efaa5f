"""
Recording and playback of MIDI note events.

This module provides:
- Recorder: captures events into Recording documents
- PlaybackEngine: replays recordings through listener channels
- Clock / Scheduler: injectable time sources
- recording_to_midi / midi_to_recording: Standard MIDI File interchange
"""

from chuk_mcp_piano.recording.clock import AsyncioScheduler, Clock, MonotonicClock, Scheduler, TimerHandle
from chuk_mcp_piano.recording.midi import midi_to_recording, recording_to_midi
from chuk_mcp_piano.recording.playback import (
    PlaybackComplete,
    PlaybackEngine,
    PlaybackEvent,
    PlaybackProgress,
    PlaybackStopped,
)
from chuk_mcp_piano.recording.recorder import Recorder

__all__ = [
    "AsyncioScheduler",
    "Clock",
    "MonotonicClock",
    "PlaybackComplete",
    "PlaybackEngine",
    "PlaybackEvent",
    "PlaybackProgress",
    "PlaybackStopped",
    "Recorder",
    "Scheduler",
    "TimerHandle",
    "midi_to_recording",
    "recording_to_midi",
]
