"""
Error kinds for the piano practice core.

Theory primitives report unknown input as empty results; these exceptions
are raised where a caller asked for something that cannot be honoured
(strict note parsing, Roman numerals, documents, state machines).
"""

from __future__ import annotations


class PianoError(Exception):
    """Base class for all piano practice errors."""


class InvalidNote(PianoError, ValueError):
    """A note token does not start with a letter A-G after clean-up."""


class InvalidSymbol(PianoError, ValueError):
    """A progression token is neither a Roman numeral nor a chord symbol."""


class MissingScaleContext(PianoError, ValueError):
    """A Roman numeral was resolved without scale notes."""


class InvalidRecording(PianoError, ValueError):
    """A recording document fails validation."""


class InvalidProgression(PianoError, ValueError):
    """A progression document fails validation."""


class InvalidState(PianoError, RuntimeError):
    """An operation is not permitted in the current state."""


class InvalidRate(PianoError, ValueError):
    """Playback rate must be greater than zero."""


class NotFound(PianoError, LookupError):
    """A stored document does not exist."""
