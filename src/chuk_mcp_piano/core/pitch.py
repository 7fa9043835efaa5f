"""
Pitch primitives - the 12-note sharp-canonical alphabet and PitchClass.

Everything above this module speaks in note names drawn from NOTES or in
PitchClass values (0-11). Flats are accepted on input and never produced.
"""

from __future__ import annotations

from enum import IntEnum

from chuk_mcp_piano.core.text import normalize_token
from chuk_mcp_piano.errors import InvalidNote

NOTES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)


def note_index(name: str) -> int | None:
    """
    Get the pitch class (0-11) for a note name.

    Flats and Unicode accidentals are accepted ('Bb', 'B♭' -> 10).
    Returns None for anything that is not a bare note name.
    """
    if not isinstance(name, str):
        return None
    normalized = normalize_token(name)
    if normalized in NOTES:
        return NOTES.index(normalized)
    return None


def canonical_note(name: str) -> str | None:
    """Get the sharp-canonical spelling of a note name, or None."""
    index = note_index(name)
    return None if index is None else NOTES[index]


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - MIDI 48 and 60 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def interval_to(self, other: PitchClass) -> int:
        """Get the ascending interval in semitones from this pitch class to another."""
        return (other.value - self.value) % 12

    def to_midi(self, octave: int) -> int:
        """Convert to a MIDI note number, where octave = midi // 12."""
        return octave * 12 + self.value

    def spell(self) -> str:
        """Get the sharp-canonical name."""
        return NOTES[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a pitch class from a string like 'C', 'C#', 'Db', 'E♭'.

        Raises:
            InvalidNote: If the text is not a note name
        """
        normalized = normalize_token(name, strict=True)
        if normalized not in NOTES:
            raise InvalidNote(f"Unknown pitch class: {name!r}")
        return cls(NOTES.index(normalized))
