#!/usr/bin/env python3
"""
Example: A short practice session.

Parses a progression in a key, "plays" each chord into the recorder,
identifies what was played, then replays the take at double speed and
exports it as a MIDI file.

Usage:
    python examples/practice_session.py
    # Creates: examples/output/practice.mid
"""

import asyncio
from pathlib import Path

from chuk_mcp_piano.core import chord_notes_as_midi, identify, parse_chord_name, scale_notes
from chuk_mcp_piano.progression import parse_progression
from chuk_mcp_piano.recording import PlaybackEngine, PlaybackEvent, Recorder, recording_to_midi

CHORD_MS = 400


async def record_progression(progression: str, key: str) -> Recorder:
    """Play each chord of a progression into a recorder."""
    result = parse_progression(progression, scale_notes(key, "major"))
    if not result.ok:
        raise SystemExit(result.error)

    recorder = Recorder()
    recorder.start()
    for step in result.chords:
        chord = parse_chord_name(step.name)
        assert chord is not None
        midi = chord.midi_notes(base_octave=5)

        for note in midi:
            recorder.record_event("noteOn", note, velocity=90)
        match = identify(midi)
        print(f"  {step.symbol:>4} -> {step.name:<12} heard as {match.name if match else '?'}")

        await asyncio.sleep(CHORD_MS / 1000)
        for note in midi:
            recorder.record_event("noteOff", note)

    return recorder


def print_note_on(event: PlaybackEvent) -> None:
    if event.event_type == "noteOn":
        print(f"  note {event.note} @ {event.timestamp:.0f}ms")


async def main() -> None:
    """Record, replay and export a I-vi-IV-V in G."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("Recording I vi IV V in G...")
    recorder = await record_progression("I vi IV V", "G")
    recording = recorder.stop("I-vi-IV-V in G", {"key": "G"})
    print(f"  {recording.total_events} events, {recording.duration:.0f}ms")

    print("\nReplaying at double speed...")
    done = asyncio.Event()
    engine = PlaybackEngine()
    engine.on("event", print_note_on)
    engine.on("complete", lambda _: done.set())
    engine.load_recording(recording)
    engine.set_playback_rate(2.0)
    engine.play()
    await done.wait()

    path = output_dir / "practice.mid"
    recording_to_midi(recording).save(str(path))
    print(f"\nCreated: {path}")

    print("\nC major voicings:")
    for inversion in range(3):
        print(f"  inversion {inversion}: {chord_notes_as_midi('C', 'major', inversion, 5)}")


if __name__ == "__main__":
    asyncio.run(main())
