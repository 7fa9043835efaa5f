"""
Tests for the recording and progression document models.
"""

import uuid
from typing import Any

import pytest

from chuk_mcp_piano.errors import InvalidProgression, InvalidRecording
from chuk_mcp_piano.models import Exercise, ProgressionDocument, Recording, RecordingEvent


def recording_doc(**overrides: Any) -> dict[str, Any]:
    """A valid recording document."""
    doc: dict[str, Any] = {
        "version": "1.0",
        "id": str(uuid.uuid4()),
        "name": "Take 1",
        "createdAt": 1_700_000_000_000,
        "duration": 500,
        "metadata": {"tempo": 90},
        "events": [
            {"type": "noteOn", "note": 60, "velocity": 100, "timestamp": 0, "channel": 0},
            {"type": "noteOff", "note": 60, "velocity": 0, "timestamp": 500, "channel": 0},
        ],
    }
    doc.update(overrides)
    return doc


def progression_doc(**overrides: Any) -> dict[str, Any]:
    """A valid progression document."""
    doc: dict[str, Any] = {
        "version": "1.0.0",
        "id": str(uuid.uuid4()),
        "name": "Pop",
        "progression": "I V vi IV",
        "createdAt": 1_700_000_000_000,
        "metadata": {"scaleType": "major", "key": "G"},
    }
    doc.update(overrides)
    return doc


class TestRecording:
    """Tests for the Recording model."""

    def test_valid_document(self) -> None:
        """A well-formed document validates."""
        recording = Recording.from_document(recording_doc())
        assert recording.name == "Take 1"
        assert recording.total_events == 2
        assert recording.events[0].event_type == "noteOn"
        assert recording.events[0].is_note_on
        assert not recording.events[1].is_note_on

    def test_canonical_form(self) -> None:
        """Dumping uses camelCase keys and the event 'type' key."""
        doc = Recording.from_document(recording_doc()).to_document()
        assert "createdAt" in doc
        assert "created_at" not in doc
        assert doc["events"][0]["type"] == "noteOn"

    def test_unknown_keys_preserved(self) -> None:
        """Unknown top-level keys survive a round trip."""
        doc = recording_doc(instrument="Grand Piano")
        assert Recording.from_document(doc).to_document()["instrument"] == "Grand Piano"

    def test_round_trip(self) -> None:
        """Load then dump reproduces the document."""
        doc = recording_doc()
        assert Recording.from_document(doc).to_document() == doc

    def test_empty_recording(self) -> None:
        """No events means zero duration."""
        recording = Recording.from_document(recording_doc(events=[], duration=0))
        assert recording.total_events == 0

    def test_defaults(self) -> None:
        """Id, version and createdAt are generated when building directly."""
        recording = Recording(name="New")
        assert recording.version == "1.0"
        assert uuid.UUID(recording.id).version == 4
        assert recording.created_at > 0
        assert recording.duration == 0

    def test_event_channel_default(self) -> None:
        """Channel defaults to 0."""
        event = RecordingEvent.model_validate({"type": "noteOn", "note": 60, "velocity": 90, "timestamp": 0})
        assert event.channel == 0


class TestRecordingValidation:
    """Tests for recording validation messages."""

    def test_missing_name(self) -> None:
        """Missing fields are named."""
        doc = recording_doc()
        del doc["name"]
        with pytest.raises(InvalidRecording, match="Missing or invalid name field"):
            Recording.from_document(doc)

    def test_name_too_long(self) -> None:
        """Names are limited to 100 characters."""
        with pytest.raises(InvalidRecording, match="name"):
            Recording.from_document(recording_doc(name="x" * 101))

    def test_bad_uuid(self) -> None:
        """Ids must be UUIDv4."""
        with pytest.raises(InvalidRecording, match="Invalid UUID format"):
            Recording.from_document(recording_doc(id="not-a-uuid"))

    def test_event_note_out_of_range(self) -> None:
        """The offending event field path is quoted."""
        doc = recording_doc()
        doc["events"][1]["note"] = 200
        with pytest.raises(InvalidRecording, match=r"events\.1\.note"):
            Recording.from_document(doc)

    def test_strict_types(self) -> None:
        """Strings are not coerced to numbers."""
        doc = recording_doc()
        doc["events"][0]["velocity"] = "100"
        with pytest.raises(InvalidRecording, match=r"events\.0\.velocity"):
            Recording.from_document(doc)

    def test_bad_event_type(self) -> None:
        """Only noteOn and noteOff are events."""
        doc = recording_doc()
        doc["events"][0]["type"] = "pitchBend"
        with pytest.raises(InvalidRecording, match=r"events\.0"):
            Recording.from_document(doc)

    def test_created_at_positive(self) -> None:
        """createdAt must be positive."""
        with pytest.raises(InvalidRecording, match="createdAt"):
            Recording.from_document(recording_doc(createdAt=0))

    def test_timestamps_go_backwards(self) -> None:
        """Events must be ordered by timestamp."""
        doc = recording_doc(duration=500)
        doc["events"] = [
            {"type": "noteOn", "note": 60, "velocity": 100, "timestamp": 0, "channel": 0},
            {"type": "noteOn", "note": 64, "velocity": 100, "timestamp": 500, "channel": 0},
            {"type": "noteOff", "note": 60, "velocity": 0, "timestamp": 300, "channel": 0},
        ]
        with pytest.raises(InvalidRecording, match="goes backwards"):
            Recording.from_document(doc)

    def test_first_event_at_zero(self) -> None:
        """The first event is at 0."""
        doc = recording_doc()
        doc["events"][0]["timestamp"] = 10
        with pytest.raises(InvalidRecording, match="must be 0"):
            Recording.from_document(doc)

    def test_duration_matches_last_event(self) -> None:
        """Duration equals the last event timestamp."""
        with pytest.raises(InvalidRecording, match="duration"):
            Recording.from_document(recording_doc(duration=600))

    def test_not_an_object(self) -> None:
        """Non-objects are rejected."""
        with pytest.raises(InvalidRecording, match="must be an object"):
            Recording.from_document("recording")

    def test_is_value_error(self) -> None:
        """Validation errors are ValueErrors too."""
        with pytest.raises(ValueError):
            Recording.from_document({})


class TestProgressionDocument:
    """Tests for the progression document model."""

    def test_valid_document(self) -> None:
        """A well-formed document validates and round-trips."""
        doc = progression_doc()
        progression = ProgressionDocument.from_document(doc)
        assert progression.metadata.key == "G"
        assert progression.metadata.scale_type == "major"
        assert progression.to_document() == doc

    def test_key_canonicalised(self) -> None:
        """Flat keys are stored sharp-canonical."""
        progression = ProgressionDocument.from_document(progression_doc(metadata={"scaleType": "major", "key": "Bb"}))
        assert progression.metadata.key == "A#"

    def test_minor_alias(self) -> None:
        """'minor' is accepted as a scale type."""
        progression = ProgressionDocument.from_document(progression_doc(metadata={"scaleType": "minor"}))
        assert progression.metadata.key is None

    def test_metadata_optional(self) -> None:
        """Metadata may be omitted."""
        doc = progression_doc(progression="C F G")
        del doc["metadata"]
        assert ProgressionDocument.from_document(doc).metadata is None

    def test_empty_progression(self) -> None:
        """Blank progression strings are rejected."""
        with pytest.raises(InvalidProgression, match="progression"):
            ProgressionDocument.from_document(progression_doc(progression="   "))

    def test_missing_scale_type(self) -> None:
        """Nested fields are named by path."""
        with pytest.raises(InvalidProgression, match=r"metadata\.scaleType"):
            ProgressionDocument.from_document(progression_doc(metadata={"key": "C"}))

    def test_unknown_scale_type(self) -> None:
        """Scale types must be registered."""
        with pytest.raises(InvalidProgression, match="Unknown scale type"):
            ProgressionDocument.from_document(progression_doc(metadata={"scaleType": "bebop"}))

    def test_invalid_key(self) -> None:
        """Keys must be note names."""
        with pytest.raises(InvalidProgression, match="Invalid key"):
            ProgressionDocument.from_document(progression_doc(metadata={"scaleType": "major", "key": "H"}))


class TestModelSchemas:
    """Tests that every model builds a schema and handles timestamps."""

    @pytest.mark.parametrize("model", [Recording, RecordingEvent, ProgressionDocument, Exercise])
    def test_json_schema(self, model: Any) -> None:
        """Each model produces a JSON schema."""
        schema = model.model_json_schema()
        assert schema["type"] == "object"
        assert schema["properties"]

    def test_created_at_schema(self) -> None:
        """createdAt accepts integers and floats."""
        schema = Recording.model_json_schema()
        types = {option["type"] for option in schema["properties"]["createdAt"]["anyOf"]}
        assert types == {"integer", "number"}

    def test_integer_created_at_round_trip(self) -> None:
        """An integer createdAt stays an integer."""
        doc = Recording.from_document(recording_doc()).to_document()
        assert doc["createdAt"] == 1_700_000_000_000
        assert isinstance(doc["createdAt"], int)

        doc = ProgressionDocument.from_document(progression_doc()).to_document()
        assert isinstance(doc["createdAt"], int)

    def test_float_created_at(self) -> None:
        """A float createdAt is accepted."""
        recording = Recording.from_document(recording_doc(createdAt=1_700_000_000_000.5))
        assert recording.created_at == 1_700_000_000_000.5

    def test_default_created_at(self) -> None:
        """A missing createdAt is filled in with the current time."""
        doc = recording_doc()
        del doc["createdAt"]
        assert Recording.from_document(doc).created_at > 0

    @pytest.mark.parametrize("value", ["1700000000000", 0, -5])
    def test_bad_created_at(self, value: Any) -> None:
        """Strings and non-positive times are rejected."""
        with pytest.raises(InvalidRecording, match="createdAt"):
            Recording.from_document(recording_doc(createdAt=value))
        with pytest.raises(InvalidProgression, match="createdAt"):
            ProgressionDocument.from_document(progression_doc(createdAt=value))
