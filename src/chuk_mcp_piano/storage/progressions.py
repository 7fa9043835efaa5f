"""
Progression store.

Beyond schema validation, a progression is only accepted if its
lead-sheet string parses in its stored key.
"""

from __future__ import annotations

from typing import Any

from chuk_mcp_piano.constants import ErrorMessages
from chuk_mcp_piano.core.scale import scale_notes
from chuk_mcp_piano.errors import InvalidProgression
from chuk_mcp_piano.models.progression import ProgressionDocument
from chuk_mcp_piano.progression.parser import parse_progression
from chuk_mcp_piano.storage.base import JsonDocumentStore


def validate_progression_string(progression: str, key: str | None, scale_type: str | None) -> None:
    """
    Check a lead-sheet string parses in a key.

    Without a key only absolute chords are accepted.

    Raises:
        InvalidProgression: With the parser's error
    """
    if not progression or not progression.strip():
        raise InvalidProgression("Progression string cannot be empty")

    notes = scale_notes(key, scale_type) if key and scale_type else []
    result = parse_progression(progression.strip(), notes)
    if not result.ok:
        raise InvalidProgression(result.error)
    if not result.chords:
        raise InvalidProgression("Progression could not be parsed")


class ProgressionStore(JsonDocumentStore[ProgressionDocument]):
    """Stores progressions as {id}.json files."""

    document_class = ProgressionDocument
    invalid_error = InvalidProgression
    not_found_message = ErrorMessages.PROGRESSION_NOT_FOUND

    def validate(self, document: ProgressionDocument | dict[str, Any]) -> ProgressionDocument:
        doc = ProgressionDocument.from_document(document)
        metadata = doc.metadata
        validate_progression_string(
            doc.progression,
            metadata.key if metadata else None,
            metadata.scale_type if metadata else None,
        )
        return doc
