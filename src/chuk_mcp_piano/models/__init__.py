"""
Pydantic models for the piano practice documents.

This module provides:
- Recording / RecordingEvent: captured MIDI performances
- ProgressionDocument: saved lead-sheet progressions with their key
- Exercise: practice routines over a Roman pattern
"""

from chuk_mcp_piano.models.exercise import Exercise
from chuk_mcp_piano.models.progression import ProgressionDocument, ProgressionMetadata
from chuk_mcp_piano.models.recording import Recording, RecordingEvent

__all__ = [
    "Exercise",
    "ProgressionDocument",
    "ProgressionMetadata",
    "Recording",
    "RecordingEvent",
]
