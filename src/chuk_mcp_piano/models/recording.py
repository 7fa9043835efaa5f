"""
Recording model - the portable MIDI performance document.

A Recording is produced by the Recorder on stop and consumed by the
PlaybackEngine and the stores. The canonical JSON form uses camelCase keys
(createdAt); unknown top-level keys survive a load/dump round trip.
"""

from __future__ import annotations

import math
import re
import time
import uuid
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, StrictFloat, StrictInt, ValidationError, field_validator, model_validator

from chuk_mcp_piano.constants import MAX_NAME_LENGTH, RECORDING_VERSION
from chuk_mcp_piano.errors import InvalidRecording
from chuk_mcp_piano.models._errors import describe_validation_error

UUID4_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.I)

# Epoch milliseconds; integers stay integers through a round trip
EpochMs = Annotated[StrictInt, Field(gt=0)] | Annotated[StrictFloat, Field(gt=0)]


def new_id() -> str:
    """Generate a UUIDv4 document id."""
    return str(uuid.uuid4())


def epoch_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class RecordingEvent(BaseModel):
    """
    A single captured note event.

    Timestamps are milliseconds from the first event of the recording.
    """

    event_type: Literal["noteOn", "noteOff"] = Field(..., alias="type", description="Event type")
    note: int = Field(..., strict=True, ge=0, le=127, description="MIDI note number")
    velocity: int = Field(..., strict=True, ge=0, le=127, description="MIDI velocity")
    timestamp: float = Field(..., strict=True, ge=0, description="Milliseconds from recording start")
    channel: int = Field(0, strict=True, ge=0, le=15, description="MIDI channel")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def is_note_on(self) -> bool:
        return self.event_type == "noteOn"


class Recording(BaseModel):
    """
    A complete recording document.

    Invariants: events are ordered by timestamp, the first is at 0 and the
    duration equals the last timestamp (0 when there are no events).
    """

    version: str = Field(RECORDING_VERSION, strict=True, description="Document format version")
    id: str = Field(default_factory=new_id, strict=True, description="UUIDv4 identifier")
    name: str = Field(..., strict=True, min_length=1, max_length=MAX_NAME_LENGTH, description="Recording name")
    created_at: EpochMs = Field(default_factory=epoch_ms, alias="createdAt", description="Creation time (epoch ms)")
    duration: float = Field(0, strict=True, ge=0, description="Duration in milliseconds")
    metadata: dict[str, Any] | None = Field(None, description="Free-form metadata")
    events: list[RecordingEvent] = Field(default_factory=list, description="Ordered note events")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Ids must be UUIDv4 strings."""
        if not UUID4_RE.match(v):
            raise ValueError(f"Invalid UUID format for id: {v}")
        return v

    @model_validator(mode="after")
    def validate_timeline(self) -> Recording:
        """Events must start at 0, never go backwards, and end at the duration."""
        previous = 0.0
        for index, event in enumerate(self.events):
            if event.timestamp < previous:
                raise ValueError(f"events.{index}.timestamp goes backwards ({event.timestamp} < {previous})")
            previous = event.timestamp

        if self.events and self.events[0].timestamp != 0:
            raise ValueError(f"events.0.timestamp must be 0, got {self.events[0].timestamp}")

        if not math.isclose(self.duration, previous, abs_tol=1e-6):
            raise ValueError(f"duration {self.duration} does not match last event timestamp {previous}")

        return self

    @property
    def total_events(self) -> int:
        return len(self.events)

    def to_document(self) -> dict[str, Any]:
        """Convert to the canonical JSON-ready dict."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, data: Any) -> Recording:
        """
        Validate a JSON-parsed document.

        Raises:
            InvalidRecording: With a message naming the offending field
        """
        if isinstance(data, Recording):
            return data
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidRecording(describe_validation_error(e, "Recording")) from e
