"""
MCP tool implementations.

Tools are organized by domain:
- theory - Chord identification, scales, chords, Roman numerals
- progressions - Progression parsing, storage and exercises
- recordings - Recording storage and MIDI interchange
"""

from chuk_mcp_piano.tools.progressions import register_progression_tools
from chuk_mcp_piano.tools.recordings import register_recording_tools
from chuk_mcp_piano.tools.theory import register_theory_tools

__all__ = [
    "register_progression_tools",
    "register_recording_tools",
    "register_theory_tools",
]
