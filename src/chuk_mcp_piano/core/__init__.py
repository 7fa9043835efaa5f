"""
Core music-theory primitives.

These are the pure, synchronous building blocks every view consumes:
- text: Note/chord-symbol normalisation (Unicode clean-up, flats -> sharps)
- PitchClass / NOTES: The 12-note sharp-canonical alphabet
- ScaleType / Key: Scale registry and note sequences
- ChordType / Chord: Chord registry, note and MIDI realisation
- detection: Chord identification with inversions, partial-chord suggestions
- RomanNumeral: Scale-degree chord references resolved in a key
"""

from chuk_mcp_piano.core.chord import (
    CHORD_TYPES,
    Chord,
    ChordType,
    chord_names_match,
    chord_notes,
    chord_notes_as_midi,
    display_name,
    parse_chord_name,
    register_chord_type,
)
from chuk_mcp_piano.core.detection import (
    ChordMatch,
    ChordSuggestion,
    identify,
    identify_all,
    suggest_chords,
)
from chuk_mcp_piano.core.pitch import NOTES, PitchClass, canonical_note, note_index
from chuk_mcp_piano.core.roman import (
    RomanNumeral,
    chord_name_from_roman,
    is_roman_numeral,
    resolve_roman,
    roman_numeral_for,
)
from chuk_mcp_piano.core.scale import (
    CIRCLE_OF_FIFTHS,
    SCALE_TYPES,
    Key,
    ScaleType,
    fifth_above,
    get_scale_type,
    register_scale_type,
    scale_note_count,
    scale_notes,
)
from chuk_mcp_piano.core.text import clean_input_text, normalize_chord_text, normalize_token

__all__ = [
    # Text
    "clean_input_text",
    "normalize_chord_text",
    "normalize_token",
    # Pitch
    "NOTES",
    "PitchClass",
    "canonical_note",
    "note_index",
    # Scale
    "CIRCLE_OF_FIFTHS",
    "SCALE_TYPES",
    "Key",
    "ScaleType",
    "fifth_above",
    "get_scale_type",
    "register_scale_type",
    "scale_note_count",
    "scale_notes",
    # Chord
    "CHORD_TYPES",
    "Chord",
    "ChordType",
    "chord_names_match",
    "chord_notes",
    "chord_notes_as_midi",
    "display_name",
    "parse_chord_name",
    "register_chord_type",
    # Detection
    "ChordMatch",
    "ChordSuggestion",
    "identify",
    "identify_all",
    "suggest_chords",
    # Roman numerals
    "RomanNumeral",
    "chord_name_from_roman",
    "is_roman_numeral",
    "resolve_roman",
    "roman_numeral_for",
]
