"""Recording store."""

from __future__ import annotations

from chuk_mcp_piano.constants import ErrorMessages
from chuk_mcp_piano.errors import InvalidRecording
from chuk_mcp_piano.models.recording import Recording
from chuk_mcp_piano.storage.base import JsonDocumentStore


class RecordingStore(JsonDocumentStore[Recording]):
    """Stores recordings as {id}.json files."""

    document_class = Recording
    invalid_error = InvalidRecording
    not_found_message = ErrorMessages.RECORDING_NOT_FOUND
