"""
Roman numerals - key-independent chord references.

A numeral names a scale degree; case and suffix carry the quality:
I, ii, iii, IV, V, vi, vii° in major; V7 is dominant, ii7 minor 7.
Resolution needs the scale notes of the current key.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_piano.constants import ErrorMessages
from chuk_mcp_piano.core.chord import CHORD_TYPES, Chord
from chuk_mcp_piano.core.pitch import PitchClass, note_index
from chuk_mcp_piano.core.scale import scale_notes
from chuk_mcp_piano.core.text import ROMAN_PATTERN, normalize_token
from chuk_mcp_piano.errors import InvalidSymbol, MissingScaleContext

NUMERALS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII")

_ACCIDENTALS = {None: 0, "b": -1, "#": 1}


@dataclass(frozen=True)
class RomanNumeral:
    """
    A parsed Roman numeral token.

    degree is 0-6 (I-VII); accidental shifts the degree's note by a
    semitone (-1 = flat, +1 = sharp); upper tells major-family case.
    """

    degree: int
    accidental: int = 0
    upper: bool = True
    suffix: str = ""

    @property
    def kind(self) -> str:
        """The chord kind key selected by case and suffix."""
        suffix = self.suffix
        if suffix in ("°", "dim"):
            return "diminished"
        if suffix in ("+", "aug"):
            return "augmented"
        if suffix == "dim7":
            return "diminished7"
        if suffix in ("maj7", "M7"):
            # Explicit quality wins over case: 'ivmaj7' is a major 7
            return "major7"
        if suffix == "min7":
            return "minor7"
        if suffix == "7":
            return "dominant7" if self.upper else "minor7"
        return "major" if self.upper else "minor"

    def resolve(self, notes: Sequence[str]) -> Chord:
        """
        Resolve this numeral to a concrete chord.

        Args:
            notes: Scale notes of the key, tonic first

        Returns:
            The resolved Chord

        Raises:
            MissingScaleContext: If no scale notes are given
            InvalidSymbol: If the degree or a scale note is unusable
        """
        if not notes:
            raise MissingScaleContext(ErrorMessages.MISSING_SCALE_CONTEXT.format(symbol=self))
        if self.degree >= len(notes):
            raise InvalidSymbol(f"Degree {NUMERALS[self.degree]} is outside a {len(notes)}-note scale")

        base = note_index(notes[self.degree])
        if base is None:
            raise InvalidSymbol(f"Invalid scale note: {notes[self.degree]}")

        root = PitchClass((base + self.accidental) % 12)
        return Chord(root, CHORD_TYPES[self.kind])

    def __str__(self) -> str:
        accidental = {-1: "b", 0: "", 1: "#"}[self.accidental]
        numeral = NUMERALS[self.degree]
        return f"{accidental}{numeral if self.upper else numeral.lower()}{self.suffix}"

    @classmethod
    def parse(cls, token: str) -> RomanNumeral:
        """
        Parse a Roman numeral token like 'I', 'ii7', 'bVII', 'vii°', 'IVmaj7'.

        Raises:
            InvalidSymbol: If the token does not match the numeral grammar
        """
        symbol = normalize_token(token)
        match = ROMAN_PATTERN.match(symbol)
        if not match:
            raise InvalidSymbol(ErrorMessages.INVALID_SYMBOL.format(symbol=token))

        accidental, numeral, suffix = match.groups()
        return cls(
            degree=NUMERALS.index(numeral.upper()),
            accidental=_ACCIDENTALS[accidental],
            upper=numeral.isupper(),
            suffix=suffix or "",
        )


def is_roman_numeral(token: str) -> bool:
    """Check whether a token matches the Roman numeral grammar."""
    return bool(ROMAN_PATTERN.match(normalize_token(token)))


def resolve_roman(token: str, notes: Sequence[str]) -> Chord:
    """Parse and resolve a Roman numeral against scale notes."""
    return RomanNumeral.parse(token).resolve(notes)


def chord_name_from_roman(token: str, notes: Sequence[str]) -> str:
    """
    Get the display name of a Roman numeral in a key.

    Example:
        chord_name_from_roman('V7', scale_notes('C', 'major')) -> 'G Dominant 7'
    """
    return resolve_roman(token, notes).name


def roman_numeral_for(scale_root: str, scale_kind: str, chord_root: str, chord_kind: str) -> str:
    """
    Get the Roman numeral of a chord inside a key.

    Minor and diminished chords are lowercase, diminished adds '°' and
    augmented adds '+'. Returns '?' when the chord root is not in the scale.
    """
    notes = scale_notes(scale_root, scale_kind)
    root = note_index(chord_root)
    degrees = [note_index(n) for n in notes]
    if root is None or root not in degrees:
        return "?"

    numeral = NUMERALS[degrees.index(root)]
    if "minor" in chord_kind or "diminished" in chord_kind:
        numeral = numeral.lower()
    if "diminished" in chord_kind:
        numeral += "°"
    if "augmented" in chord_kind:
        numeral += "+"
    return numeral
