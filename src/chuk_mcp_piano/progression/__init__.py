"""
Progression parsing and practice exercises.

This module provides:
- parse_progression: lead-sheet text to ordered chord steps
- ExerciseLoader: YAML exercise registry (library + project)
"""

from chuk_mcp_piano.progression.exercises import (
    ExerciseLoader,
    circle_of_fifths,
    generate_progression,
)
from chuk_mcp_piano.progression.parser import (
    ParseResult,
    ProgressionStep,
    parse_progression,
    sample_inputs,
    suggest_fix,
    tokenize,
)

__all__ = [
    "ExerciseLoader",
    "ParseResult",
    "ProgressionStep",
    "circle_of_fifths",
    "generate_progression",
    "parse_progression",
    "sample_inputs",
    "suggest_fix",
    "tokenize",
]
