"""
Lead-sheet progression parser.

Turns free text like "C | Em⁷ | G/B | Am⁷" or "I vi IV V" into an ordered
list of chord steps. Roman numerals are resolved against the scale notes
of the current key; absolute chord symbols are kept verbatim (normalised).

The parser is pure and never raises: errors come back in ParseResult so
the progress made up to a bad token is visible to the caller.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from chuk_mcp_piano.constants import ErrorMessages, ProgressionKind
from chuk_mcp_piano.core.roman import RomanNumeral
from chuk_mcp_piano.core.text import INVISIBLE_RE, ROMAN_PATTERN, clean_input_text, normalize_token
from chuk_mcp_piano.errors import InvalidSymbol

_SEPARATORS_RE = re.compile(r"[|\-]")
_ABSOLUTE_RE = re.compile(r"^[A-Ga-g][b#]?")


@dataclass(frozen=True)
class ProgressionStep:
    """One chord of a parsed progression."""

    symbol: str  # token as typed
    name: str  # resolved display name (roman) or normalised symbol (absolute)
    kind: ProgressionKind


@dataclass(frozen=True)
class ParseResult:
    """Parsed chords, or an error naming the first bad token."""

    chords: list[ProgressionStep] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the whole input parsed."""
        return self.error is None

    @property
    def names(self) -> list[str]:
        """Chord names in order."""
        return [step.name for step in self.chords]


def tokenize(text: str) -> list[str]:
    """Split a lead-sheet string on whitespace, bars and hyphens."""
    cleaned = clean_input_text(text)
    return _SEPARATORS_RE.sub(" ", cleaned).split()


def parse_progression(text: str, scale_notes: Sequence[str] | None = None) -> ParseResult:
    """
    Parse a progression string into chord steps.

    Args:
        text: Lead-sheet text, e.g. "I IV V I" or "C Fm G7"
        scale_notes: Notes of the current key, needed for Roman numerals

    Returns:
        ParseResult with the chords, or with an error and no chords
    """
    if not text or not text.strip():
        return ParseResult()

    steps: list[ProgressionStep] = []
    for raw in tokenize(text):
        token = normalize_token(raw)

        # Numerals that cannot be resolved fall through to the absolute check
        if scale_notes and ROMAN_PATTERN.match(token):
            try:
                chord = RomanNumeral.parse(token).resolve(scale_notes)
            except InvalidSymbol:
                pass
            else:
                steps.append(ProgressionStep(raw, chord.name, ProgressionKind.ROMAN))
                continue

        if _ABSOLUTE_RE.match(token):
            steps.append(ProgressionStep(raw, token, ProgressionKind.ABSOLUTE))
            continue

        return ParseResult(error=ErrorMessages.INVALID_SYMBOL.format(symbol=raw))

    return ParseResult(chords=steps)


def suggest_fix(original: str, error: str | None) -> str | None:
    """
    Suggest a fix for a progression that failed to parse.

    Returns None when there is nothing useful to say.
    """
    if not error or not original:
        return None

    cleaned = clean_input_text(original)
    if cleaned != original.strip():
        return f'Try: "{cleaned}" (removed invisible characters)'

    match = re.match(r"Invalid symbol: (.*)", error)
    if match:
        symbol = match.group(1)
        if not symbol.strip():
            return "Empty token detected. Make sure chords are separated by spaces only."
        if ROMAN_PATTERN.match(normalize_token(symbol)):
            return "Roman numerals need a key whose scale has that degree. Pick a key and scale first."
        if INVISIBLE_RE.search(symbol):
            return "Invisible characters detected. Try copying the text again or typing it manually."

    return None


def sample_inputs() -> dict[str, list[str]]:
    """Example inputs for each supported progression style."""
    return {
        "roman_numerals": [
            "I IV V I",
            "I vi IV V",
            "i bVII bVI V",
            "ii7 V7 I vi",
            "I V vi iii IV I IV V",
        ],
        "absolute_chords": [
            "C F G C",
            "C Am F G",
            "A♭ E♭ Fm D♭ B♭m",
            "Ab Eb Fm Db Bbm",
            "Cm Bb Ab G",
            "C Fm G7 Am",
        ],
        "lead_sheet": [
            "C | Em⁷ | G/B | Am⁷ | D | G",
            "F - Bb - Gm - C",
        ],
        "mixed": [
            "I IV V C",
            "C F G I",
        ],
    }
