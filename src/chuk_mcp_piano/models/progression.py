"""
Progression document - a saved lead-sheet string with its key.

The progression text is kept as typed; it is parsed on demand against
the key stored in the metadata.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from chuk_mcp_piano.constants import MAX_NAME_LENGTH, PROGRESSION_VERSION
from chuk_mcp_piano.core.pitch import canonical_note
from chuk_mcp_piano.core.scale import get_scale_type
from chuk_mcp_piano.errors import InvalidProgression
from chuk_mcp_piano.models._errors import describe_validation_error
from chuk_mcp_piano.models.recording import UUID4_RE, EpochMs, epoch_ms, new_id


class ProgressionMetadata(BaseModel):
    """Key context of a progression."""

    scale_type: str = Field(..., strict=True, alias="scaleType", description="Scale kind key")
    key: str | None = Field(None, description="Root note of the key")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator("scale_type")
    @classmethod
    def validate_scale_type(cls, v: str) -> str:
        """Scale type must be a registered scale kind (or an alias)."""
        if get_scale_type(v) is None:
            raise ValueError(f"Unknown scale type: {v}")
        return v

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str | None) -> str | None:
        """Key must be a note name; stored sharp-canonical."""
        if v is None:
            return v
        note = canonical_note(v)
        if note is None:
            raise ValueError(f"Invalid key: {v}")
        return note


class ProgressionDocument(BaseModel):
    """A saved progression."""

    version: str = Field(PROGRESSION_VERSION, strict=True, description="Document format version")
    id: str = Field(default_factory=new_id, strict=True, description="UUIDv4 identifier")
    name: str = Field(..., strict=True, min_length=1, max_length=MAX_NAME_LENGTH, description="Progression name")
    progression: str = Field(..., strict=True, description="Lead-sheet string")
    created_at: EpochMs = Field(default_factory=epoch_ms, alias="createdAt", description="Creation time (epoch ms)")
    metadata: ProgressionMetadata | None = Field(None, description="Key context")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not UUID4_RE.match(v):
            raise ValueError(f"Invalid UUID format for id: {v}")
        return v

    @field_validator("progression")
    @classmethod
    def validate_progression(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Progression string cannot be empty")
        return v

    def to_document(self) -> dict[str, Any]:
        """Convert to the canonical JSON-ready dict."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, data: Any) -> ProgressionDocument:
        """
        Validate a JSON-parsed document.

        Raises:
            InvalidProgression: With a message naming the offending field
        """
        if isinstance(data, ProgressionDocument):
            return data
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidProgression(describe_validation_error(e, "Progression")) from e
