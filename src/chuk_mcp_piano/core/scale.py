"""
Scale primitives - ScaleType registry and Key.

Scales are step patterns from a root. The registry is data: a new scale
kind is one ScaleType entry, not a code change.
"""

from __future__ import annotations

from dataclasses import dataclass

from chuk_mcp_piano.core.pitch import NOTES, PitchClass, note_index


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its step pattern.

    The steps are from one degree to the next (not cumulative) and include
    the final step back to the octave. A major scale is: W W H W W W H
    (2 2 1 2 2 2 1 semitones). Pentatonic and blues scales have fewer steps.

    Immutable and hashable.
    """

    key: str
    name: str
    steps: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.steps or any(step <= 0 for step in self.steps):
            raise ValueError(f"Scale steps must be positive, got {self.steps}")
        total = sum(self.steps)
        if total != 12:
            raise ValueError(f"Scale steps must sum to 12 semitones, got {total}")

    @property
    def note_count(self) -> int:
        """Number of distinct notes in the scale."""
        return len(self.steps)

    def get_pitches(self, root: PitchClass) -> list[PitchClass]:
        """
        Get all pitch classes in this scale starting from root.

        The last step returns to the root and is not emitted.
        """
        pitches = [root]
        current = root
        for step in self.steps[:-1]:
            current = current.transpose(step)
            pitches.append(current)
        return pitches

    def __str__(self) -> str:
        return self.name


SCALE_TYPES: dict[str, ScaleType] = {}

# Names accepted for backwards compatibility
SCALE_ALIASES: dict[str, str] = {"minor": "natural_minor"}


def register_scale_type(scale_type: ScaleType) -> ScaleType:
    """Add a scale kind to the registry (replacing any with the same key)."""
    SCALE_TYPES[scale_type.key] = scale_type
    return scale_type


for _key, _name, _steps in (
    ("major", "Major", (2, 2, 1, 2, 2, 2, 1)),
    ("natural_minor", "Natural Minor", (2, 1, 2, 2, 1, 2, 2)),
    ("harmonic_minor", "Harmonic Minor", (2, 1, 2, 2, 1, 3, 1)),
    ("melodic_minor", "Melodic Minor", (2, 1, 2, 2, 2, 2, 1)),
    ("major_pentatonic", "Major Pentatonic", (2, 2, 3, 2, 3)),
    ("minor_pentatonic", "Minor Pentatonic", (3, 2, 2, 3, 2)),
    ("blues", "Blues", (3, 2, 1, 1, 3, 2)),
    ("lydian", "Lydian", (2, 2, 2, 1, 2, 2, 1)),
    ("dorian", "Dorian", (2, 1, 2, 2, 2, 1, 2)),
    ("phrygian", "Phrygian", (1, 2, 2, 2, 1, 2, 2)),
    ("mixolydian", "Mixolydian", (2, 2, 1, 2, 2, 1, 2)),
    ("locrian", "Locrian", (1, 2, 2, 1, 2, 2, 2)),
):
    register_scale_type(ScaleType(_key, _name, _steps))


def get_scale_type(kind: str) -> ScaleType | None:
    """Look up a scale kind by key ('major', 'natural_minor', 'minor', ...)."""
    return SCALE_TYPES.get(SCALE_ALIASES.get(kind, kind))


def scale_notes(root: str, kind: str) -> list[str]:
    """
    Get the note names of a scale, starting at the root.

    Args:
        root: Root note name ('C', 'F#', 'Bb')
        kind: Scale kind key ('major', 'blues', ...)

    Returns:
        Sharp-canonical note names, or [] for an unknown root or kind
    """
    root_index = note_index(root)
    scale_type = get_scale_type(kind)
    if root_index is None or scale_type is None:
        return []
    return [NOTES[p] for p in scale_type.get_pitches(PitchClass(root_index))]


def scale_note_count(kind: str) -> int:
    """Get the number of notes in a scale kind (0 if unknown)."""
    scale_type = get_scale_type(kind)
    return scale_type.note_count if scale_type else 0


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch class plus a scale type.

    This is the context for resolving Roman numerals to chords.

    Examples:
        Key(PitchClass.C, SCALE_TYPES["major"]) = C major
        Key(PitchClass.D, SCALE_TYPES["natural_minor"]) = D natural minor
    """

    root: PitchClass
    scale: ScaleType

    def get_pitches(self) -> list[PitchClass]:
        """Get all pitch classes in this key."""
        return self.scale.get_pitches(self.root)

    def notes(self) -> list[str]:
        """Get the note names of this key."""
        return [p.spell() for p in self.get_pitches()]

    def __str__(self) -> str:
        return f"{self.root.spell()} {self.scale.name}"

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C_major', 'D_minor', 'F#_blues'.

        Args:
            name: Key name with underscore separator

        Returns:
            Parsed Key object
        """
        parts = name.split("_")
        if len(parts) < 2:
            raise ValueError(f"Invalid key format: {name}. Expected 'root_scale' like 'C_major'")

        root = PitchClass.parse(parts[0])
        scale_str = "_".join(parts[1:]).lower()
        scale_type = get_scale_type(scale_str)
        if scale_type is None:
            raise ValueError(f"Unknown scale type: {scale_str}")

        return cls(root, scale_type)


# Keys in Circle of Fifths order, sharp-canonical spelling
CIRCLE_OF_FIFTHS: tuple[str, ...] = ("C", "G", "D", "A", "E", "B", "F#", "C#", "G#", "D#", "A#", "F")


def fifth_above(root: str) -> str | None:
    """Get the note a perfect fifth (7 semitones) above a root, or None."""
    index = note_index(root)
    if index is None:
        return None
    return NOTES[(index + 7) % 12]
