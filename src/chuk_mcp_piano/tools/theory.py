"""
Theory tools - MCP tools for chord identification and construction.

Tools for identifying the chord under the player's hands, suggesting
chords to complete, and spelling scales, chords and Roman numerals.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from chuk_mcp_piano.core import (
    CHORD_TYPES,
    SCALE_TYPES,
    chord_notes,
    chord_notes_as_midi,
    get_scale_type,
    identify_all,
    parse_chord_name,
    resolve_roman,
    roman_numeral_for,
    scale_notes,
    suggest_chords,
)
from chuk_mcp_piano.errors import PianoError

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_theory_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register music-theory tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def piano_identify_chord(notes: list[int]) -> str:
        """
        Identify the chord formed by sounding MIDI notes.

        Every equivalent reading is returned (e.g. A Minor 7 and C Major 6
        share notes); the first is the preferred one. When fewer than three
        pitch classes sound, or nothing matches, suggestions for chords the
        notes could grow into are included.

        Args:
            notes: MIDI note numbers currently held (e.g. [57, 60, 64, 67])

        Returns:
            JSON string with matches and suggestions

        Example:
            piano_identify_chord(notes=[41, 45, 48])
        """
        try:
            matches = identify_all(notes)
            suggestions = [] if matches else suggest_chords(notes)

            return json.dumps(
                {
                    "status": "success",
                    "chord": asdict(matches[0]) if matches else None,
                    "matches": [asdict(m) for m in matches],
                    "suggestions": [asdict(s) for s in suggestions],
                }
            )
        except Exception as e:
            logger.exception("Failed to identify chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_identify_chord"] = piano_identify_chord

    @mcp.tool  # type: ignore[arg-type]
    async def piano_suggest_chords(notes: list[int], limit: int = 5) -> str:
        """
        Suggest chords that the held notes are part of.

        Candidates need one or two more notes; simpler chords come first.

        Args:
            notes: MIDI note numbers currently held
            limit: Maximum suggestions (default: 5)

        Returns:
            JSON string with suggestions and their missing notes

        Example:
            piano_suggest_chords(notes=[60, 64])
        """
        try:
            suggestions = suggest_chords(notes, limit=limit)
            return json.dumps(
                {
                    "status": "success",
                    "suggestions": [asdict(s) for s in suggestions],
                    "count": len(suggestions),
                }
            )
        except Exception as e:
            logger.exception("Failed to suggest chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_suggest_chords"] = piano_suggest_chords

    @mcp.tool  # type: ignore[arg-type]
    async def piano_scale_notes(root: str, scale_type: str = "major") -> str:
        """
        Spell a scale.

        Args:
            root: Root note (e.g. 'C', 'F#', 'Bb')
            scale_type: Scale kind (major, natural_minor, blues, dorian, ...)

        Returns:
            JSON string with the scale's notes

        Example:
            piano_scale_notes(root="D", scale_type="dorian")
        """
        try:
            if get_scale_type(scale_type) is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": f"Unknown scale type: {scale_type}",
                        "available": list(SCALE_TYPES),
                    }
                )
            notes = scale_notes(root, scale_type)
            if not notes:
                return json.dumps({"status": "error", "message": f"Invalid root note: {root}"})

            return json.dumps({"status": "success", "root": notes[0], "scale_type": scale_type, "notes": notes})
        except Exception as e:
            logger.exception("Failed to build scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_scale_notes"] = piano_scale_notes

    @mcp.tool  # type: ignore[arg-type]
    async def piano_chord_notes(
        root: str,
        chord_type: str = "major",
        inversion: int = 0,
        octave: int = 4,
    ) -> str:
        """
        Spell a chord and voice it on the keyboard.

        Args:
            root: Root note (e.g. 'A')
            chord_type: Chord kind (major, minor7, sus2, add9, ...)
            inversion: 0 = root position, 1 = first inversion, ...
            octave: Octave of the lowest voice (MIDI note = octave * 12 + pitch class)

        Returns:
            JSON string with note names and ascending MIDI notes

        Example:
            piano_chord_notes(root="F", chord_type="major", inversion=1)
        """
        try:
            if chord_type not in CHORD_TYPES:
                return json.dumps(
                    {
                        "status": "error",
                        "message": f"Unknown chord type: {chord_type}",
                        "available": list(CHORD_TYPES),
                    }
                )
            notes = chord_notes(root, chord_type)
            if not notes:
                return json.dumps({"status": "error", "message": f"Invalid root note: {root}"})

            return json.dumps(
                {
                    "status": "success",
                    "name": f"{notes[0]} {CHORD_TYPES[chord_type].name}",
                    "notes": notes,
                    "midi": chord_notes_as_midi(root, chord_type, inversion, octave),
                }
            )
        except Exception as e:
            logger.exception("Failed to build chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_chord_notes"] = piano_chord_notes

    @mcp.tool  # type: ignore[arg-type]
    async def piano_resolve_roman(numeral: str, key: str, scale_type: str = "major") -> str:
        """
        Resolve a Roman numeral to a chord in a key.

        Args:
            numeral: Roman numeral (I, vi, V7, bVII, vii°, ...)
            key: Key root note
            scale_type: Scale kind of the key

        Returns:
            JSON string with the chord name and notes

        Example:
            piano_resolve_roman(numeral="V7", key="G")
        """
        try:
            chord = resolve_roman(numeral, scale_notes(key, scale_type))
            return json.dumps(
                {
                    "status": "success",
                    "numeral": numeral,
                    "name": chord.name,
                    "root": chord.root.spell(),
                    "kind": chord.kind.key,
                    "notes": chord.notes(),
                }
            )
        except PianoError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to resolve Roman numeral")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_resolve_roman"] = piano_resolve_roman

    @mcp.tool  # type: ignore[arg-type]
    async def piano_analyze_chord(chord: str, key: str, scale_type: str = "major") -> str:
        """
        Name a chord's function in a key.

        Args:
            chord: Chord symbol or display name ('Dm7', 'D Minor 7')
            key: Key root note
            scale_type: Scale kind of the key

        Returns:
            JSON string with the Roman numeral ('?' if not diatonic)

        Example:
            piano_analyze_chord(chord="Am", key="C")
        """
        try:
            parsed = parse_chord_name(chord)
            if parsed is None:
                return json.dumps({"status": "error", "message": f"Unknown chord: {chord}"})

            numeral = roman_numeral_for(key, scale_type, parsed.root.spell(), parsed.kind.key)
            return json.dumps(
                {
                    "status": "success",
                    "chord": parsed.name,
                    "numeral": numeral,
                    "diatonic_root": numeral != "?",
                }
            )
        except Exception as e:
            logger.exception("Failed to analyze chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_analyze_chord"] = piano_analyze_chord

    @mcp.tool  # type: ignore[arg-type]
    async def piano_list_types() -> str:
        """
        List the registered scale and chord kinds.

        Returns:
            JSON string with scale kinds (with steps) and chord kinds (with intervals)

        Example:
            piano_list_types()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "scale_types": [
                        {"key": s.key, "name": s.name, "steps": list(s.steps)} for s in SCALE_TYPES.values()
                    ],
                    "chord_types": [
                        {"key": c.key, "name": c.name, "intervals": list(c.intervals)}
                        for c in CHORD_TYPES.values()
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to list types")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_list_types"] = piano_list_types

    return tools
