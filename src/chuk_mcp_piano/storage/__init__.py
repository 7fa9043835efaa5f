"""
File-backed document stores.

This module provides:
- RecordingStore: recordings as JSON documents
- ProgressionStore: saved progressions, validated against their key
"""

from chuk_mcp_piano.storage.base import JsonDocumentStore
from chuk_mcp_piano.storage.progressions import ProgressionStore, validate_progression_string
from chuk_mcp_piano.storage.recordings import RecordingStore

__all__ = [
    "JsonDocumentStore",
    "ProgressionStore",
    "RecordingStore",
    "validate_progression_string",
]
