"""
Constants and enums for the piano practice core.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class EventType(str, Enum):
    """Recorded MIDI event types."""

    NOTE_ON = "noteOn"
    NOTE_OFF = "noteOff"


class RecorderState(str, Enum):
    """Recorder state machine: idle -> recording <-> paused -> idle."""

    IDLE = "idle"
    RECORDING = "recording"
    PAUSED = "paused"


class PlaybackState(str, Enum):
    """Playback state machine: idle -> playing <-> paused -> idle."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


class PlaybackChannel(str, Enum):
    """Notification channels a playback listener can subscribe to."""

    EVENT = "event"
    PROGRESS = "progress"
    STOP = "stop"
    COMPLETE = "complete"
    LOOP = "loop"


class ProgressionKind(str, Enum):
    """How a progression token was interpreted."""

    ROMAN = "roman"
    ABSOLUTE = "absolute"


# Inversion labels, indexed by the position of the bass tone in the chord
INVERSION_LABELS: tuple[str, ...] = (
    "Root Position",
    "1st Inversion",
    "2nd Inversion",
    "3rd Inversion",
)

# Document format versions
RECORDING_VERSION = "1.0"
PROGRESSION_VERSION = "1.0.0"

MAX_NAME_LENGTH = 100

DEFAULT_RECORDING_NAME = "Untitled Recording"

# Velocities applied when a recorded event does not carry one
DEFAULT_NOTE_ON_VELOCITY = 100
DEFAULT_NOTE_OFF_VELOCITY = 0

# Maximum number of partial-chord suggestions returned
MAX_SUGGESTIONS = 5

SortField = Literal["createdAt", "name"]
SortOrder = Literal["asc", "desc"]


class ErrorMessages:
    """Standardized error messages."""

    INVALID_SYMBOL = "Invalid symbol: {symbol}"
    MISSING_SCALE_CONTEXT = "Missing scale context for Roman numeral: {symbol}"
    NO_RECORDING = "No recording loaded"
    RECORDING_NOT_FOUND = "Recording with id {id} not found"
    PROGRESSION_NOT_FOUND = "Progression with id {id} not found"
    EXERCISE_NOT_FOUND = "Exercise '{exercise_id}' not found."
    INVALID_RATE = "Playback rate must be greater than 0, got {rate}"
    INVALID_FIELD = "Missing or invalid {field} field"


class SuccessMessages:
    """Standardized success messages."""

    RECORDING_SAVED = "Saved recording '{name}' ({id})."
    RECORDING_DELETED = "Deleted recording {id}."
    PROGRESSION_SAVED = "Saved progression '{name}' ({id})."
    PROGRESSION_DELETED = "Deleted progression {id}."
    MIDI_EXPORTED = "Exported recording '{name}' to {path}."
