"""
JSON document store - one file per document, named by id.

Provides async operations for saving, loading, deleting and listing
documents, plus pure import/export of the canonical JSON form.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, ClassVar, Generic, TypeVar

from chuk_mcp_piano.constants import SortField, SortOrder
from chuk_mcp_piano.errors import NotFound, PianoError
from chuk_mcp_piano.models.progression import ProgressionDocument
from chuk_mcp_piano.models.recording import UUID4_RE, Recording

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", Recording, ProgressionDocument)


class JsonDocumentStore(Generic[DocumentT]):
    """
    Base class for file-backed document stores.

    Subclasses set the document class, the error raised for bad
    documents, and the not-found message template.
    """

    document_class: ClassVar[type]
    invalid_error: ClassVar[type[PianoError]]
    not_found_message: ClassVar[str]

    def __init__(self, directory: Path):
        """
        Initialize the store.

        Args:
            directory: Directory holding one {id}.json file per document
        """
        self.directory = directory

    def _get_path(self, doc_id: str) -> Path:
        if not UUID4_RE.match(doc_id):
            raise NotFound(self.not_found_message.format(id=doc_id))
        return self.directory / f"{doc_id}.json"

    def validate(self, document: DocumentT | dict[str, Any]) -> DocumentT:
        """Validate a document; subclasses add content checks."""
        return self.document_class.from_document(document)

    async def save(self, document: DocumentT | dict[str, Any]) -> str:
        """
        Validate and write a document, replacing any with the same id.

        Returns:
            The document id
        """
        doc = self.validate(document)

        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._get_path(doc.id)
        path.write_text(self.export_json(doc))

        logger.debug(f"Saved {path}")
        return doc.id

    async def load(self, doc_id: str) -> DocumentT:
        """
        Load a document by id.

        Raises:
            NotFound: If no document has this id
        """
        path = self._get_path(doc_id)
        if not path.exists():
            raise NotFound(self.not_found_message.format(id=doc_id))
        return self.import_json(path.read_text())

    async def delete(self, doc_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        try:
            path = self._get_path(doc_id)
        except NotFound:
            return False
        if not path.exists():
            return False
        path.unlink()
        return True

    async def list(self, sort_by: SortField = "createdAt", order: SortOrder = "desc") -> list[DocumentT]:
        """
        List all stored documents.

        Unreadable files are skipped with a warning.

        Args:
            sort_by: "createdAt" or "name"
            order: "asc" or "desc"
        """
        if sort_by not in ("createdAt", "name"):
            raise ValueError(f"Cannot sort by {sort_by!r}")
        if not self.directory.exists():
            return []

        documents: list[DocumentT] = []
        for path in self.directory.glob("*.json"):
            try:
                documents.append(self.import_json(path.read_text()))
            except (OSError, PianoError) as e:
                logger.warning(f"Skipping {path}: {e}")

        if sort_by == "name":
            documents.sort(key=lambda d: d.name.lower(), reverse=order == "desc")
        else:
            documents.sort(key=lambda d: d.created_at, reverse=order == "desc")
        return documents

    def export_json(self, document: DocumentT | dict[str, Any]) -> str:
        """Serialize a document to its canonical JSON form."""
        doc = self.validate(document)
        return json.dumps(doc.to_document(), indent=2)

    def import_json(self, text: str) -> DocumentT:
        """
        Parse and validate a JSON document.

        Raises:
            InvalidRecording / InvalidProgression: For bad JSON or documents
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise self.invalid_error(f"Invalid JSON: {e}") from e
        return self.validate(data)
