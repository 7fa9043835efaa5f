"""
Note and chord-symbol text normalisation.

Everything typed, pasted or copied from a chord chart passes through here
before any theory code sees it. The output alphabet is ASCII with
sharp-canonical roots: ``B♭ₘ⁷`` becomes ``A#m7``.
"""

from __future__ import annotations

import re

from chuk_mcp_piano.errors import InvalidNote

# Zero-width space/non-joiner/joiner, BOM and soft hyphen
INVISIBLE_RE = re.compile("[\u200b-\u200d\ufeff\u00ad]")

# En/em/thin/hair spaces and the line/paragraph separators
_UNICODE_SPACE_RE = re.compile("[\u2000-\u200a\u2028\u2029]")

_WHITESPACE_RE = re.compile(r"\s+")

# Chord-chart glyphs and their ASCII spelling
_GLYPHS = str.maketrans(
    {
        "♭": "b",
        "♯": "#",
        # Subscript letters
        "ₘ": "m",
        "ₐ": "a",
        # Superscript letters (commonly used to spell "maj")
        "ᵐ": "m",
        "ᵃ": "a",
        "ʲ": "j",
        # Superscript digits
        "⁰": "0",
        "¹": "1",
        "²": "2",
        "³": "3",
        "⁴": "4",
        "⁵": "5",
        "⁶": "6",
        "⁷": "7",
        "⁸": "8",
        "⁹": "9",
        "⁺": "+",
        "º": "°",
        "Δ": "maj",
    }
)

FLAT_TO_SHARP: dict[str, str] = {
    "Cb": "B",
    "Db": "C#",
    "Eb": "D#",
    "Fb": "E",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

# Roman numeral token grammar (applied to normalised tokens)
ROMAN_PATTERN = re.compile(
    r"^(b|#)?(VII|III|IV|VI|II|V|I|vii|iii|iv|vi|ii|v|i)(°|\+|dim7|dim|aug|maj7|min7|M7|7)?$"
)

_NOTE_LETTERS = "ABCDEFG"


def clean_input_text(text: object) -> str:
    """
    Strip invisible characters and normalise whitespace in free text.

    Zero-width characters are removed, Unicode spaces become ASCII spaces
    and runs of whitespace collapse to one space. Non-strings give "".
    """
    if not isinstance(text, str) or not text:
        return ""

    cleaned = INVISIBLE_RE.sub("", text)
    cleaned = _UNICODE_SPACE_RE.sub(" ", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip()


def normalize_chord_text(text: str) -> str:
    """Map chord-chart glyphs (♭, ♯, ₘ, ⁷, ᵐᵃʲ...) to ASCII and trim."""
    if not text:
        return ""
    cleaned = INVISIBLE_RE.sub("", str(text))
    cleaned = _UNICODE_SPACE_RE.sub(" ", cleaned)
    return cleaned.translate(_GLYPHS).strip()


def _canonical_root(symbol: str) -> str:
    """Uppercase a leading note letter and rewrite a flat root as its sharp."""
    if symbol and symbol[0].upper() in _NOTE_LETTERS:
        symbol = symbol[0].upper() + symbol[1:]

    if len(symbol) >= 2 and symbol[0] in _NOTE_LETTERS and symbol[1] == "b":
        symbol = FLAT_TO_SHARP[symbol[:2]] + symbol[2:]

    return symbol


def normalize_token(token: str, strict: bool = False) -> str:
    """
    Normalise a note name or chord symbol to sharp-canonical ASCII.

    Roman numerals are returned as-is (their case carries meaning). Other
    tokens get an uppercase root, a sharp instead of a flat root and the
    same treatment for a slash-chord bass.

    Args:
        token: Raw token, e.g. 'B♭ₘ⁷', 'db', 'G/B♭'
        strict: Raise InvalidNote when the result does not start with A-G

    Returns:
        The normalised token ('A#m7', 'C#', 'G/A#'). Idempotent.

    Raises:
        InvalidNote: strict mode only
    """
    symbol = normalize_chord_text(token)

    if symbol and not ROMAN_PATTERN.match(symbol):
        head, slash, bass = symbol.partition("/")
        symbol = _canonical_root(head)
        if slash:
            symbol = f"{symbol}/{_canonical_root(bass)}"

    if strict and (not symbol or symbol[0] not in _NOTE_LETTERS):
        raise InvalidNote(f"Invalid note: {token!r}")

    return symbol
