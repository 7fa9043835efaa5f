#!/usr/bin/env python3
"""
Async Piano MCP Server using chuk-mcp-server

This server provides MCP tools for piano practice: naming the chord under
the player's hands, spelling scales and chords, parsing lead-sheet
progressions, and keeping recordings.

The server provides tools for:
- Chord identification with inversions and partial-chord suggestions
- Scale, chord and Roman numeral construction
- Progression parsing, storage and Circle of Fifths exercises
- Recording storage and MIDI file import/export
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_piano.progression import ExerciseLoader
from chuk_mcp_piano.storage import ProgressionStore, RecordingStore
from chuk_mcp_piano.tools import (
    register_progression_tools,
    register_recording_tools,
    register_theory_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-piano")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
RECORDINGS_DIR = BASE_PATH / "recordings"
PROGRESSIONS_DIR = BASE_PATH / "progressions"
EXERCISES_DIR = BASE_PATH / "exercises"
OUTPUT_DIR = BASE_PATH / "output"
EXERCISES_LIBRARY_PATH = Path(__file__).parent / "progression" / "library"

# Create stores
recording_store = RecordingStore(RECORDINGS_DIR)
progression_store = ProgressionStore(PROGRESSIONS_DIR)
exercise_loader = ExerciseLoader(
    library_path=EXERCISES_LIBRARY_PATH,
    project_path=EXERCISES_DIR,
)

# Register all tools
theory_tools = register_theory_tools(mcp)
progression_tools = register_progression_tools(mcp, progression_store, exercise_loader)
recording_tools = register_recording_tools(mcp, recording_store, OUTPUT_DIR)

# Export tool functions for direct access
piano_identify_chord = theory_tools["piano_identify_chord"]
piano_suggest_chords = theory_tools["piano_suggest_chords"]
piano_scale_notes = theory_tools["piano_scale_notes"]
piano_chord_notes = theory_tools["piano_chord_notes"]
piano_resolve_roman = theory_tools["piano_resolve_roman"]
piano_analyze_chord = theory_tools["piano_analyze_chord"]
piano_list_types = theory_tools["piano_list_types"]

piano_parse_progression = progression_tools["piano_parse_progression"]
piano_save_progression = progression_tools["piano_save_progression"]
piano_get_progression = progression_tools["piano_get_progression"]
piano_list_progressions = progression_tools["piano_list_progressions"]
piano_delete_progression = progression_tools["piano_delete_progression"]
piano_list_exercises = progression_tools["piano_list_exercises"]
piano_get_exercise = progression_tools["piano_get_exercise"]
piano_circle_of_fifths = progression_tools["piano_circle_of_fifths"]

piano_save_recording = recording_tools["piano_save_recording"]
piano_get_recording = recording_tools["piano_get_recording"]
piano_list_recordings = recording_tools["piano_list_recordings"]
piano_delete_recording = recording_tools["piano_delete_recording"]
piano_export_midi = recording_tools["piano_export_midi"]
piano_import_midi = recording_tools["piano_import_midi"]

logger.info("CHUK Piano MCP Server initialized")
logger.info(f"  Exercise library: {EXERCISES_LIBRARY_PATH}")
logger.info(f"  Recordings dir: {RECORDINGS_DIR}")
logger.info(f"  Progressions dir: {PROGRESSIONS_DIR}")
