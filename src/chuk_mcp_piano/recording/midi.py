"""
MIDI file interchange - Recordings to and from Standard MIDI Files.

Export writes a single-track type 0 file at a fixed tempo; import merges
all tracks and converts tick times back to milliseconds using the file's
own tempo map (mido handles set_tempo changes while iterating).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_piano.constants import DEFAULT_RECORDING_NAME, EventType
from chuk_mcp_piano.models.recording import Recording

# Standard ticks per beat (quarter note) - industry standard
TICKS_PER_BEAT = 480

DEFAULT_TEMPO_BPM = 120


def ms_to_ticks(ms: float, tempo_bpm: int = DEFAULT_TEMPO_BPM, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert milliseconds to ticks at a fixed tempo."""
    return round(ms * tempo_bpm * ticks_per_beat / 60_000)


def recording_to_midi(
    recording: Recording,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert a Recording to a MidiFile.

    Args:
        recording: The recording to export
        tempo_bpm: Tempo written to the file; only affects tick resolution
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved

    Same recording in, same bytes out.
    """
    mid = MidiFile(type=0, ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    track.append(MetaMessage("track_name", name=recording.name, time=0))
    track.append(MetaMessage("set_tempo", tempo=int(60_000_000 / tempo_bpm), time=0))

    # Events are already in timestamp order; convert to delta times
    current_ticks = 0
    for event in recording.events:
        ticks = ms_to_ticks(event.timestamp, tempo_bpm, ticks_per_beat)
        message_type = "note_on" if event.is_note_on else "note_off"
        track.append(
            Message(
                message_type,
                channel=event.channel,
                note=event.note,
                velocity=event.velocity,
                time=ticks - current_ticks,
            )
        )
        current_ticks = ticks

    track.append(MetaMessage("end_of_track", time=0))

    return mid


def midi_to_recording(
    source: MidiFile | str | Path,
    name: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Recording:
    """
    Convert a MIDI file to a Recording.

    note_on with velocity 0 is read as noteOff. Leading silence is
    dropped so the first note event is at 0.

    Args:
        source: A MidiFile or a path to a .mid file
        name: Recording name (defaults to the track name or file stem)
        metadata: Optional recording metadata

    Raises:
        InvalidRecording: If the converted events are out of range
    """
    mid = source if isinstance(source, MidiFile) else MidiFile(str(source))

    elapsed = 0.0
    track_name: str | None = None
    events: list[dict[str, Any]] = []

    # Iterating a MidiFile yields merged messages with time in seconds
    for msg in mid:
        elapsed += msg.time
        if msg.type == "track_name" and track_name is None:
            track_name = msg.name or None
        if msg.type not in ("note_on", "note_off"):
            continue

        is_on = msg.type == "note_on" and msg.velocity > 0
        events.append(
            {
                "type": (EventType.NOTE_ON if is_on else EventType.NOTE_OFF).value,
                "note": msg.note,
                "velocity": msg.velocity,
                "timestamp": round(elapsed * 1000, 3),
                "channel": msg.channel,
            }
        )

    first = events[0]["timestamp"] if events else 0.0
    for event in events:
        event["timestamp"] = round(event["timestamp"] - first, 3)

    if name is None:
        name = track_name or (Path(mid.filename).stem if mid.filename else DEFAULT_RECORDING_NAME)

    return Recording.from_document(
        {
            "name": name[:100],
            "duration": events[-1]["timestamp"] if events else 0.0,
            "metadata": metadata or {"source": "midi"},
            "events": events,
        }
    )
