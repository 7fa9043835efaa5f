"""
Exercise loader - discovers and loads practice exercises.

Exercises can come from:
1. Built-in library (shipped with package)
2. Project exercises (user's project/exercises directory)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_piano.core.scale import CIRCLE_OF_FIFTHS, scale_notes
from chuk_mcp_piano.models.exercise import Exercise
from chuk_mcp_piano.progression.parser import ProgressionStep, parse_progression

logger = logging.getLogger(__name__)


def circle_of_fifths() -> list[str]:
    """The twelve key roots in Circle of Fifths order."""
    return list(CIRCLE_OF_FIFTHS)


def generate_progression(pattern: str, root: str, scale_kind: str = "major") -> list[ProgressionStep]:
    """
    Resolve a Roman pattern in one key.

    Returns an empty list when the key is unknown or the pattern does not parse.
    """
    if not pattern or not root:
        return []

    notes = scale_notes(root, scale_kind)
    if not notes:
        return []

    result = parse_progression(pattern, notes)
    if not result.ok:
        logger.warning(f"Pattern {pattern!r} failed in {root} {scale_kind}: {result.error}")
        return []
    return result.chords


class ExerciseLoader:
    """
    Discovers and loads exercise definitions.

    Exercises are loaded from YAML files in the library and project directories.
    Project exercises override library exercises with the same id.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the exercise loader.

        Args:
            library_path: Path to built-in exercise library
            project_path: Path to project exercises directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, Exercise] = {}

    def list_exercises(self) -> list[Exercise]:
        """List all available exercises, project definitions taking precedence."""
        exercises: dict[str, Exercise] = {}

        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                exercise = self._load_exercise_file(path)
                if exercise:
                    exercises[exercise.id] = exercise

        return sorted(exercises.values(), key=lambda e: e.id)

    def get_exercise(self, exercise_id: str) -> Exercise | None:
        """
        Get an exercise by id.

        Args:
            exercise_id: Exercise id (YAML file stem)

        Returns:
            Exercise if found, None otherwise
        """
        if exercise_id in self._cache:
            return self._cache[exercise_id]

        for directory in (self.project_path, self.library_path):
            if directory is None:
                continue
            path = directory / f"{exercise_id}.yaml"
            if path.exists():
                exercise = self._load_exercise_file(path)
                if exercise:
                    self._cache[exercise_id] = exercise
                    return exercise

        return None

    def progression_for(self, exercise: Exercise, root: str) -> list[ProgressionStep]:
        """Resolve an exercise's pattern in one of its keys."""
        return generate_progression(exercise.pattern, root, exercise.scale_type)

    def _load_exercise_file(self, path: Path) -> Exercise | None:
        """Load an exercise from a YAML file, or None if it is malformed."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            return self._parse_exercise(data, path.stem)
        except (OSError, yaml.YAMLError, ValidationError, KeyError, AttributeError) as e:
            logger.warning(f"Skipping exercise file {path}: {e}")
            return None

    def _parse_exercise(self, data: dict[str, Any], default_id: str) -> Exercise:
        """Parse an exercise from YAML data."""
        fields: dict[str, Any] = {
            "id": data.get("id", default_id),
            "name": data.get("name", default_id),
            "description": data.get("description", ""),
            "mode": data.get("mode", "chord"),
            "pattern": data["pattern"],
            "scale_type": data.get("scale_type", "major"),
        }
        if "keys" in data:
            fields["keys"] = data["keys"]
        return Exercise(**fields)

    def clear_cache(self) -> None:
        """Clear the exercise cache."""
        self._cache.clear()
