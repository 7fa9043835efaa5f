"""
Chord detection - identify sounding chords and suggest completions.

Input is whatever the keyboard reports: an unsorted collection of MIDI
numbers, duplicates allowed. Every (root, kind) reading whose pitch-class
set equals the sounding set is reported; ambiguity (Am7 vs C6) is kept.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from chuk_mcp_piano.constants import INVERSION_LABELS, MAX_SUGGESTIONS
from chuk_mcp_piano.core.chord import CHORD_TYPES, Chord
from chuk_mcp_piano.core.pitch import NOTES, PitchClass


@dataclass(frozen=True)
class ChordMatch:
    """One reading of the sounding notes as a chord."""

    root: str
    kind: str
    name: str
    inversion: str


@dataclass(frozen=True)
class ChordSuggestion:
    """A chord the sounding notes could grow into."""

    root: str
    kind: str
    name: str
    missing_notes: tuple[str, ...]
    complexity: int


def _candidates() -> Iterable[Chord]:
    """All (root, kind) pairs in tie-break order: alphabet, then registry."""
    for root in PitchClass:
        for chord_type in CHORD_TYPES.values():
            yield Chord(root, chord_type)


def inversion_label(chord: Chord, bass: int) -> str:
    """
    Label the inversion of a chord given the bass pitch class.

    The bass tone's 1-based position among the intervals is the inversion
    number; a bass that is not a chord tone counts as root position.
    """
    bass_interval = (bass - chord.root.value) % 12
    if bass_interval == 0:
        return INVERSION_LABELS[0]

    for position, interval in enumerate(chord.kind.intervals, start=1):
        if interval % 12 == bass_interval and position < len(INVERSION_LABELS):
            return INVERSION_LABELS[position]
    return INVERSION_LABELS[0]


def identify_all(active_midi: Iterable[int]) -> list[ChordMatch]:
    """
    Identify every chord reading of a set of sounding MIDI notes.

    Args:
        active_midi: MIDI note numbers (any order, duplicates allowed)

    Returns:
        Matches in alphabet-then-registry order; [] for fewer than three
        distinct pitch classes
    """
    notes = list(active_midi)
    pitch_classes = frozenset(n % 12 for n in notes)
    if len(pitch_classes) < 3:
        return []

    bass = min(notes) % 12
    return [
        ChordMatch(
            root=chord.root.spell(),
            kind=chord.kind.key,
            name=chord.name,
            inversion=inversion_label(chord, bass),
        )
        for chord in _candidates()
        if chord.pitch_classes == pitch_classes
    ]


def identify(active_midi: Iterable[int]) -> ChordMatch | None:
    """Identify the first chord reading of the sounding notes, or None."""
    matches = identify_all(active_midi)
    return matches[0] if matches else None


def suggest_chords(active_midi: Iterable[int], limit: int = MAX_SUGGESTIONS) -> list[ChordSuggestion]:
    """
    Suggest chords that complete a partial chord.

    A candidate qualifies when its pitch-class set strictly contains the
    sounding set and lacks one or two notes. Simpler chords come first,
    then lower roots.

    Args:
        active_midi: MIDI note numbers (any order, duplicates allowed)
        limit: Maximum number of suggestions

    Returns:
        Suggestions; [] for fewer than two distinct pitch classes
    """
    pitch_classes = frozenset(n % 12 for n in active_midi)
    if len(pitch_classes) < 2:
        return []

    suggestions: list[tuple[int, int, ChordSuggestion]] = []
    for chord in _candidates():
        target = chord.pitch_classes
        missing = target - pitch_classes
        if not pitch_classes < target or len(missing) not in (1, 2):
            continue

        missing_notes = tuple(
            NOTES[(chord.root.value + i) % 12]
            for i in (0, *chord.kind.intervals)
            if (chord.root.value + i) % 12 in missing
        )
        complexity = len(chord.kind.intervals)
        suggestions.append(
            (
                complexity,
                chord.root.value,
                ChordSuggestion(
                    root=chord.root.spell(),
                    kind=chord.kind.key,
                    name=chord.name,
                    missing_notes=missing_notes,
                    complexity=complexity,
                ),
            )
        )

    suggestions.sort(key=lambda item: (item[0], item[1]))
    return [suggestion for _, _, suggestion in suggestions[:limit]]
