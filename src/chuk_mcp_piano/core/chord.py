"""
Chord primitives - ChordType registry, Chord, and chord-symbol parsing.

Chords are interval sets above a root. The registry order is part of the
identification contract: the identifier walks kinds in this order, so
'major' comes before 'sus2' which comes before 'sus4'.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chuk_mcp_piano.core.pitch import NOTES, PitchClass, note_index
from chuk_mcp_piano.core.text import normalize_token


@dataclass(frozen=True)
class ChordType:
    """
    A chord kind defined by its intervals above the root.

    The root itself (0) is implicit. A major triad is (4, 7); an add9
    chord reaches past the octave with (4, 7, 14).

    Immutable and hashable.
    """

    key: str
    name: str
    intervals: tuple[int, ...]

    @property
    def size(self) -> int:
        """Number of chord tones, root included."""
        return len(self.intervals) + 1

    def pitch_classes(self, root: PitchClass) -> frozenset[int]:
        """Get the pitch-class set of this chord kind on a root."""
        return frozenset((root.value + i) % 12 for i in (0, *self.intervals))

    def __str__(self) -> str:
        return self.name


CHORD_TYPES: dict[str, ChordType] = {}


def register_chord_type(chord_type: ChordType) -> ChordType:
    """Add a chord kind to the registry (replacing any with the same key)."""
    CHORD_TYPES[chord_type.key] = chord_type
    return chord_type


for _key, _name, _intervals in (
    ("major", "Major", (4, 7)),
    ("minor", "Minor", (3, 7)),
    ("diminished", "Diminished", (3, 6)),
    ("augmented", "Augmented", (4, 8)),
    ("major7", "Major 7", (4, 7, 11)),
    ("minor7", "Minor 7", (3, 7, 10)),
    ("dominant7", "Dominant 7", (4, 7, 10)),
    ("diminished7", "Diminished 7", (3, 6, 9)),
    ("half_diminished7", "Half Diminished 7", (3, 6, 10)),
    ("major6", "Major 6", (4, 7, 9)),
    ("add9", "Add9", (4, 7, 14)),
    ("sus2", "Sus2", (2, 7)),
    ("sus4", "Sus4", (5, 7)),
):
    register_chord_type(ChordType(_key, _name, _intervals))


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord with a root pitch and kind.

    This is the resolved form - an actual chord that can be played.
    """

    root: PitchClass
    kind: ChordType

    @property
    def name(self) -> str:
        """Display name, e.g. 'F Major', 'A Minor 7'."""
        return f"{self.root.spell()} {self.kind.name}"

    @property
    def pitch_classes(self) -> frozenset[int]:
        """Root plus intervals, modulo 12."""
        return self.kind.pitch_classes(self.root)

    def notes(self) -> list[str]:
        """Note names in chord order (root first)."""
        return [NOTES[(self.root.value + i) % 12] for i in (0, *self.kind.intervals)]

    def midi_notes(self, inversion: int = 0, base_octave: int = 4) -> list[int]:
        """
        Voice the chord as MIDI note numbers.

        The interval list is rotated left by the inversion (wrapping; negative
        values count as root position). The first tone sits in base_octave and
        every later tone whose pitch class falls below the previous one moves
        up an octave, so the bass is always the inversion's chord tone.

        Args:
            inversion: 0 = root position, 1 = first inversion, ...
            base_octave: Octave of the bass note (MIDI octave, midi // 12)

        Returns:
            Ascending MIDI note numbers
        """
        intervals = [0, *self.kind.intervals]
        inversion = max(inversion, 0) % len(intervals)
        rotated = intervals[inversion:] + intervals[:inversion]

        octave = base_octave
        previous: int | None = None
        midi: list[int] = []
        for interval in rotated:
            pitch_class = (self.root.value + interval) % 12
            if previous is not None and pitch_class < previous:
                octave += 1
            midi.append(octave * 12 + pitch_class)
            previous = pitch_class

        return sorted(midi)

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_names(cls, root: str, kind: str) -> Chord | None:
        """Build a chord from a note name and kind key, or None if either is unknown."""
        root_index = note_index(root)
        chord_type = CHORD_TYPES.get(kind)
        if root_index is None or chord_type is None:
            return None
        return cls(PitchClass(root_index), chord_type)


def chord_notes(root: str, kind: str) -> list[str]:
    """
    Get the note names of a chord: the root followed by each interval.

    Returns [] for an unknown root or kind.
    """
    chord = Chord.from_names(root, kind)
    return chord.notes() if chord else []


def chord_notes_as_midi(root: str, kind: str, inversion: int = 0, base_octave: int = 4) -> list[int]:
    """
    Get the MIDI notes of a chord voiced in an inversion.

    See Chord.midi_notes. Returns [] for an unknown root or kind.
    """
    chord = Chord.from_names(root, kind)
    return chord.midi_notes(inversion, base_octave) if chord else []


# Chord-symbol suffixes accepted after the root ('Em7' -> 'm7')
SYMBOL_SUFFIXES: dict[str, str] = {
    "": "major",
    "M": "major",
    "maj": "major",
    "m": "minor",
    "min": "minor",
    "dim": "diminished",
    "°": "diminished",
    "aug": "augmented",
    "+": "augmented",
    "maj7": "major7",
    "M7": "major7",
    "m7": "minor7",
    "min7": "minor7",
    "7": "dominant7",
    "dim7": "diminished7",
    "°7": "diminished7",
    "m7b5": "half_diminished7",
    "ø": "half_diminished7",
    "ø7": "half_diminished7",
    "6": "major6",
    "add9": "add9",
    "sus2": "sus2",
    "sus4": "sus4",
    "sus": "sus4",
}

_SYMBOL_RE = re.compile(r"^([A-G]#?)(.*)$")


def parse_chord_name(text: str) -> Chord | None:
    """
    Parse a chord symbol or display name.

    Accepts short symbols ('Csus2', 'Em7', 'B♭maj7', 'G/B') and display
    names ('E Minor 7', 'C Sus2'). A slash bass is ignored.

    Returns:
        The Chord, or None if the text is not a known chord
    """
    symbol = normalize_token(text)
    match = _SYMBOL_RE.match(symbol)
    if not match:
        return None

    root = PitchClass(NOTES.index(match.group(1)))
    rest = match.group(2)

    if rest.startswith(" "):
        wanted = rest.strip().lower()
        for chord_type in CHORD_TYPES.values():
            if chord_type.name.lower() == wanted:
                return Chord(root, chord_type)
        return None

    suffix = rest.split("/", 1)[0]
    kind = SYMBOL_SUFFIXES.get(suffix)
    if kind is None or kind not in CHORD_TYPES:
        return None
    return Chord(root, CHORD_TYPES[kind])


def display_name(text: str) -> str | None:
    """Convert a chord symbol to its display name ('Em7' -> 'E Minor 7')."""
    chord = parse_chord_name(text)
    return chord.name if chord else None


def chord_names_match(target: str, detected: str) -> bool:
    """
    Check whether two chord names denote the same chord.

    Either side may be a short symbol or a display name, so a practice
    target of 'Em7' matches a detected 'E Minor 7'.
    """
    if target == detected:
        return True
    a = parse_chord_name(target)
    b = parse_chord_name(detected)
    return a is not None and b is not None and a.root == b.root and a.kind == b.kind
