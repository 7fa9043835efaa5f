"""
Exercise model - a practice routine that walks a Roman pattern through keys.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_piano.core.pitch import canonical_note
from chuk_mcp_piano.core.scale import CIRCLE_OF_FIFTHS, get_scale_type


class Exercise(BaseModel):
    """A practice exercise definition."""

    id: str = Field(..., description="Exercise identifier (file stem)")
    name: str = Field(..., description="Human-readable name")
    description: str = Field("", description="What the exercise practises")
    mode: str = Field("chord", description="Practice mode")
    pattern: str = Field(..., description="Roman numeral pattern, e.g. 'I IV V I'")
    scale_type: str = Field("major", description="Scale kind of every key")
    keys: list[str] = Field(
        default_factory=lambda: list(CIRCLE_OF_FIFTHS),
        description="Key roots in practice order",
    )

    model_config = {"frozen": True}

    @field_validator("scale_type")
    @classmethod
    def validate_scale_type(cls, v: str) -> str:
        if get_scale_type(v) is None:
            raise ValueError(f"Unknown scale type: {v}")
        return v

    @field_validator("keys")
    @classmethod
    def validate_keys(cls, v: list[str]) -> list[str]:
        """Keys are stored sharp-canonical."""
        notes = []
        for key in v:
            note = canonical_note(key)
            if note is None:
                raise ValueError(f"Invalid key: {key}")
            notes.append(note)
        if not notes:
            raise ValueError("Exercise needs at least one key")
        return notes

    def key_order(self, start_key: str | None = None, max_keys: int | None = None) -> list[str]:
        """
        Keys to practise, optionally rotated to a start key and truncated.

        An unknown start key is ignored, as is a max_keys outside 1..len(keys).
        """
        keys = list(self.keys)
        start = canonical_note(start_key) if start_key else None
        if start in keys:
            index = keys.index(start)
            keys = keys[index:] + keys[:index]
        if max_keys is not None and 0 < max_keys <= len(keys):
            keys = keys[:max_keys]
        return keys
