"""
Tests for MCP tools.

Tests the MCP tool implementations for theory, progressions, exercises
and recordings.
"""

import json
import uuid
from pathlib import Path

import pytest

from chuk_mcp_piano.progression import ExerciseLoader
from chuk_mcp_piano.storage import ProgressionStore, RecordingStore
from chuk_mcp_piano.tools import register_progression_tools, register_recording_tools, register_theory_tools


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def theory_tools() -> dict:
    mcp = MockMCPServer("test")
    register_theory_tools(mcp)
    return mcp.tools


@pytest.fixture
def progression_tools(temp_dir: Path) -> dict:
    mcp = MockMCPServer("test")
    register_progression_tools(mcp, ProgressionStore(temp_dir / "progressions"), ExerciseLoader())
    return mcp.tools


@pytest.fixture
def recording_tools(temp_dir: Path) -> dict:
    mcp = MockMCPServer("test")
    register_recording_tools(mcp, RecordingStore(temp_dir / "recordings"), temp_dir / "output")
    return mcp.tools


def recording_json(name: str = "Take") -> str:
    return json.dumps(
        {
            "version": "1.0",
            "id": str(uuid.uuid4()),
            "name": name,
            "createdAt": 1_700_000_000_000,
            "duration": 500,
            "events": [
                {"type": "noteOn", "note": 60, "velocity": 100, "timestamp": 0, "channel": 0},
                {"type": "noteOff", "note": 60, "velocity": 0, "timestamp": 500, "channel": 0},
            ],
        }
    )


class TestRegistration:
    """Tests for tool registration."""

    def test_registered_names(self, temp_dir: Path) -> None:
        """Register functions return what they registered."""
        mcp = MockMCPServer("test")
        theory = register_theory_tools(mcp)
        progressions = register_progression_tools(mcp, ProgressionStore(temp_dir), ExerciseLoader())
        recordings = register_recording_tools(mcp, RecordingStore(temp_dir), temp_dir)

        assert set(mcp.tools) == set(theory) | set(progressions) | set(recordings)
        assert "piano_identify_chord" in theory
        assert "piano_parse_progression" in progressions
        assert "piano_export_midi" in recordings


class TestTheoryTools:
    """Tests for theory tools."""

    @pytest.mark.asyncio
    async def test_identify_chord(self, theory_tools: dict) -> None:
        """A C major triad is identified in root position."""
        result = json.loads(await theory_tools["piano_identify_chord"](notes=[60, 64, 67]))
        assert result["status"] == "success"
        assert result["chord"]["name"] == "C Major"
        assert result["chord"]["inversion"] == "Root Position"
        assert result["suggestions"] == []

    @pytest.mark.asyncio
    async def test_identify_ambiguous(self, theory_tools: dict) -> None:
        """Every equivalent reading is returned."""
        result = json.loads(await theory_tools["piano_identify_chord"](notes=[57, 60, 64, 67]))
        assert [m["name"] for m in result["matches"]] == ["C Major 6", "A Minor 7"]

    @pytest.mark.asyncio
    async def test_identify_partial(self, theory_tools: dict) -> None:
        """Two notes give suggestions instead of a chord."""
        result = json.loads(await theory_tools["piano_identify_chord"](notes=[60, 64]))
        assert result["chord"] is None
        assert result["suggestions"][0]["name"] == "C Major"
        assert result["suggestions"][0]["missing_notes"] == ["G"]

    @pytest.mark.asyncio
    async def test_suggest_chords_limit(self, theory_tools: dict) -> None:
        """The suggestion count honours the limit."""
        result = json.loads(await theory_tools["piano_suggest_chords"](notes=[60, 64], limit=2))
        assert result["count"] == 2

    @pytest.mark.asyncio
    async def test_scale_notes(self, theory_tools: dict) -> None:
        """Scales are spelled sharp-canonical."""
        result = json.loads(await theory_tools["piano_scale_notes"](root="G"))
        assert result["notes"] == ["G", "A", "B", "C", "D", "E", "F#"]

        result = json.loads(await theory_tools["piano_scale_notes"](root="Bb", scale_type="minor"))
        assert result["root"] == "A#"

    @pytest.mark.asyncio
    async def test_scale_notes_errors(self, theory_tools: dict) -> None:
        """Unknown scale kinds and roots are errors."""
        result = json.loads(await theory_tools["piano_scale_notes"](root="C", scale_type="bebop"))
        assert result["status"] == "error"
        assert "dorian" in result["available"]

        result = json.loads(await theory_tools["piano_scale_notes"](root="H"))
        assert result["status"] == "error"
        assert "Invalid root" in result["message"]

    @pytest.mark.asyncio
    async def test_chord_notes(self, theory_tools: dict) -> None:
        """Chords are spelled and voiced."""
        result = json.loads(
            await theory_tools["piano_chord_notes"](root="F", chord_type="major", inversion=1, octave=5)
        )
        assert result["name"] == "F Major"
        assert result["notes"] == ["F", "A", "C"]
        assert result["midi"] == [69, 72, 77]

    @pytest.mark.asyncio
    async def test_chord_notes_unknown_type(self, theory_tools: dict) -> None:
        """Unknown chord kinds list the available ones."""
        result = json.loads(await theory_tools["piano_chord_notes"](root="C", chord_type="power"))
        assert result["status"] == "error"
        assert "sus4" in result["available"]

    @pytest.mark.asyncio
    async def test_resolve_roman(self, theory_tools: dict) -> None:
        """V7 in G is D dominant 7."""
        result = json.loads(await theory_tools["piano_resolve_roman"](numeral="V7", key="G"))
        assert result["name"] == "D Dominant 7"
        assert result["kind"] == "dominant7"
        assert result["notes"] == ["D", "F#", "A", "C"]

    @pytest.mark.asyncio
    async def test_resolve_roman_errors(self, theory_tools: dict) -> None:
        """Bad keys and symbols are reported."""
        result = json.loads(await theory_tools["piano_resolve_roman"](numeral="V7", key="H"))
        assert result["status"] == "error"
        assert "Missing scale context" in result["message"]

        result = json.loads(await theory_tools["piano_resolve_roman"](numeral="Q", key="C"))
        assert result["message"] == "Invalid symbol: Q"

    @pytest.mark.asyncio
    async def test_analyze_chord(self, theory_tools: dict) -> None:
        """Chords are named by function in a key."""
        result = json.loads(await theory_tools["piano_analyze_chord"](chord="Am", key="C"))
        assert result["chord"] == "A Minor"
        assert result["numeral"] == "vi"
        assert result["diatonic_root"] is True

        result = json.loads(await theory_tools["piano_analyze_chord"](chord="F#", key="C"))
        assert result["numeral"] == "?"
        assert result["diatonic_root"] is False

    @pytest.mark.asyncio
    async def test_list_types(self, theory_tools: dict) -> None:
        """Registries are listed."""
        result = json.loads(await theory_tools["piano_list_types"]())
        assert {"key": "major", "name": "Major", "intervals": [4, 7]} in result["chord_types"]
        assert any(s["key"] == "blues" for s in result["scale_types"])


class TestProgressionTools:
    """Tests for progression tools."""

    @pytest.mark.asyncio
    async def test_parse_roman(self, progression_tools: dict) -> None:
        """Roman numerals resolve in the given key."""
        result = json.loads(await progression_tools["piano_parse_progression"](progression="I IV V I", key="C"))
        assert result["names"] == ["C Major", "F Major", "G Major", "C Major"]
        assert result["chords"][0] == {"symbol": "I", "name": "C Major", "kind": "roman"}

    @pytest.mark.asyncio
    async def test_parse_absolute(self, progression_tools: dict) -> None:
        """Absolute chords need no key."""
        result = json.loads(await progression_tools["piano_parse_progression"](progression="C | Am | F | G"))
        assert result["names"] == ["C", "Am", "F", "G"]
        assert result["count"] == 4

    @pytest.mark.asyncio
    async def test_parse_error(self, progression_tools: dict) -> None:
        """Errors come with a suggestion and examples."""
        result = json.loads(await progression_tools["piano_parse_progression"](progression="I IV V"))
        assert result["status"] == "error"
        assert result["message"] == "Invalid symbol: I"
        assert "key" in result["suggestion"]
        assert "roman_numerals" in result["examples"]

    @pytest.mark.asyncio
    async def test_save_get_list_delete(self, progression_tools: dict) -> None:
        """Progressions can be saved, fetched, listed and deleted."""
        saved = json.loads(
            await progression_tools["piano_save_progression"](name="Pop", progression="I V vi IV", key="G")
        )
        assert saved["status"] == "success"
        progression_id = saved["id"]

        fetched = json.loads(await progression_tools["piano_get_progression"](progression_id=progression_id))
        assert fetched["progression"]["metadata"] == {"scaleType": "major", "key": "G"}
        assert [c["name"] for c in fetched["chords"]] == ["G Major", "D Major", "E Minor", "C Major"]

        listed = json.loads(await progression_tools["piano_list_progressions"]())
        assert listed["count"] == 1
        assert listed["progressions"][0]["key"] == "G"

        deleted = json.loads(await progression_tools["piano_delete_progression"](progression_id=progression_id))
        assert deleted["status"] == "success"

        deleted = json.loads(await progression_tools["piano_delete_progression"](progression_id=progression_id))
        assert deleted["status"] == "error"

    @pytest.mark.asyncio
    async def test_save_invalid(self, progression_tools: dict) -> None:
        """Unparsable progressions are not saved."""
        result = json.loads(await progression_tools["piano_save_progression"](name="Bad", progression="I IV V"))
        assert result["status"] == "error"
        assert result["message"] == "Invalid symbol: I"

        result = json.loads(
            await progression_tools["piano_save_progression"](name="Bad", progression="C", scale_type="bebop")
        )
        assert result["status"] == "error"
        assert "scaleType" in result["message"]

    @pytest.mark.asyncio
    async def test_get_missing(self, progression_tools: dict) -> None:
        """Unknown ids are errors."""
        result = json.loads(await progression_tools["piano_get_progression"](progression_id=str(uuid.uuid4())))
        assert result["status"] == "error"
        assert "not found" in result["message"]

    @pytest.mark.asyncio
    async def test_list_exercises(self, progression_tools: dict) -> None:
        """The built-in exercises are listed."""
        result = json.loads(await progression_tools["piano_list_exercises"]())
        ids = [e["id"] for e in result["exercises"]]
        assert "ii-v-i-circle" in ids
        assert result["count"] == len(ids)

    @pytest.mark.asyncio
    async def test_get_exercise(self, progression_tools: dict) -> None:
        """Exercises expand to one progression per key."""
        result = json.loads(
            await progression_tools["piano_get_exercise"](exercise_id="i-iv-v-i-circle", start_key="G", max_keys=2)
        )
        assert result["exercise"]["id"] == "i-iv-v-i-circle"
        assert [k["key"] for k in result["keys"]] == ["G", "D"]
        assert [c["name"] for c in result["keys"][0]["chords"]] == ["G Major", "C Major", "D Major", "G Major"]
        assert result["keys"][0]["chords"][1]["roman"] == "IV"

    @pytest.mark.asyncio
    async def test_get_exercise_missing(self, progression_tools: dict) -> None:
        """Unknown exercises are errors."""
        result = json.loads(await progression_tools["piano_get_exercise"](exercise_id="nope"))
        assert result["status"] == "error"
        assert "nope" in result["message"]

    @pytest.mark.asyncio
    async def test_circle_of_fifths(self, progression_tools: dict) -> None:
        """The circle starts at C."""
        result = json.loads(await progression_tools["piano_circle_of_fifths"]())
        assert result["keys"][:3] == ["C", "G", "D"]
        assert len(result["keys"]) == 12


class TestRecordingTools:
    """Tests for recording tools."""

    @pytest.mark.asyncio
    async def test_save_get_list_delete(self, recording_tools: dict) -> None:
        """Recordings can be saved, fetched, listed and deleted."""
        saved = json.loads(await recording_tools["piano_save_recording"](recording_json=recording_json()))
        assert saved["status"] == "success"
        recording_id = saved["id"]

        fetched = json.loads(await recording_tools["piano_get_recording"](recording_id=recording_id))
        assert fetched["recording"]["name"] == "Take"
        assert len(fetched["recording"]["events"]) == 2

        listed = json.loads(await recording_tools["piano_list_recordings"]())
        assert listed["recordings"][0]["events"] == 2
        assert listed["recordings"][0]["duration"] == 500

        deleted = json.loads(await recording_tools["piano_delete_recording"](recording_id=recording_id))
        assert deleted["status"] == "success"
        missing = json.loads(await recording_tools["piano_get_recording"](recording_id=recording_id))
        assert missing["status"] == "error"

    @pytest.mark.asyncio
    async def test_save_invalid(self, recording_tools: dict) -> None:
        """Invalid JSON and documents are reported."""
        result = json.loads(await recording_tools["piano_save_recording"](recording_json="{oops"))
        assert result["status"] == "error"
        assert "Invalid JSON" in result["message"]

        bad = json.loads(recording_json())
        bad["events"][0]["note"] = 200
        result = json.loads(await recording_tools["piano_save_recording"](recording_json=json.dumps(bad)))
        assert "events.0.note" in result["message"]

    @pytest.mark.asyncio
    async def test_export_and_import_midi(self, recording_tools: dict, temp_dir: Path) -> None:
        """Recordings export to MIDI and import back."""
        saved = json.loads(await recording_tools["piano_save_recording"](recording_json=recording_json("Export me")))

        exported = json.loads(
            await recording_tools["piano_export_midi"](recording_id=saved["id"], filename="take.mid")
        )
        assert exported["status"] == "success"
        path = Path(exported["path"])
        assert path == temp_dir / "output" / "take.mid"
        assert path.exists()

        imported = json.loads(await recording_tools["piano_import_midi"](path=str(path), name="Imported"))
        assert imported["status"] == "success"
        assert imported["name"] == "Imported"
        assert imported["duration"] == 500
        assert imported["events"] == 2

        listed = json.loads(await recording_tools["piano_list_recordings"](sort_by="name", order="asc"))
        assert [r["name"] for r in listed["recordings"]] == ["Export me", "Imported"]

    @pytest.mark.asyncio
    async def test_export_missing(self, recording_tools: dict) -> None:
        """Exporting an unknown recording is an error."""
        result = json.loads(await recording_tools["piano_export_midi"](recording_id=str(uuid.uuid4())))
        assert result["status"] == "error"

    @pytest.mark.asyncio
    async def test_import_missing_file(self, recording_tools: dict, temp_dir: Path) -> None:
        """Missing MIDI files are reported."""
        result = json.loads(await recording_tools["piano_import_midi"](path=str(temp_dir / "missing.mid")))
        assert result["status"] == "error"
        assert "File not found" in result["message"]
