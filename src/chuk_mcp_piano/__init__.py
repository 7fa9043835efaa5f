"""
CHUK Piano - piano practice toolkit and MCP server.

Names the chord under your hands (with its inversion), suggests chords to
complete, spells scales, chords and Roman numerals, parses lead-sheet
progressions, and records and replays what you play.
"""

__version__ = "0.1.0"
