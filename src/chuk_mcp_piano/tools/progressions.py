"""
Progression tools - MCP tools for lead-sheet progressions and exercises.

Tools for parsing progressions, saving them with their key, and
walking practice exercises through the Circle of Fifths.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_piano.constants import ErrorMessages, SortField, SortOrder, SuccessMessages
from chuk_mcp_piano.core import scale_notes
from chuk_mcp_piano.errors import PianoError
from chuk_mcp_piano.models.progression import ProgressionDocument
from chuk_mcp_piano.progression import (
    ExerciseLoader,
    ParseResult,
    circle_of_fifths,
    parse_progression,
    sample_inputs,
    suggest_fix,
)
from chuk_mcp_piano.storage import ProgressionStore

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _steps_json(result: ParseResult) -> list[dict[str, str]]:
    return [{"symbol": s.symbol, "name": s.name, "kind": s.kind.value} for s in result.chords]


def register_progression_tools(
    mcp: ChukMCPServer,
    store: ProgressionStore,
    exercise_loader: ExerciseLoader,
) -> dict[str, Any]:
    """
    Register progression and exercise tools with the MCP server.

    Args:
        mcp: The MCP server instance
        store: The progression store
        exercise_loader: The exercise loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def piano_parse_progression(
        progression: str,
        key: str | None = None,
        scale_type: str = "major",
    ) -> str:
        """
        Parse a lead-sheet progression.

        Roman numerals need a key; absolute chord symbols do not. Bars (|)
        and hyphens separate chords like spaces do. On failure a fix
        suggestion and sample inputs are included.

        Args:
            progression: e.g. "I vi IV V" or "C | Em7 | G/B | Am7"
            key: Key root for Roman numerals (e.g. 'C')
            scale_type: Scale kind of the key

        Returns:
            JSON string with the parsed chords

        Example:
            piano_parse_progression(progression="ii7 V7 Imaj7", key="Bb")
        """
        try:
            notes = scale_notes(key, scale_type) if key else []
            result = parse_progression(progression, notes)

            if not result.ok:
                return json.dumps(
                    {
                        "status": "error",
                        "message": result.error,
                        "suggestion": suggest_fix(progression, result.error),
                        "examples": sample_inputs(),
                    }
                )

            return json.dumps(
                {
                    "status": "success",
                    "chords": _steps_json(result),
                    "names": result.names,
                    "count": len(result.chords),
                }
            )
        except Exception as e:
            logger.exception("Failed to parse progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_parse_progression"] = piano_parse_progression

    @mcp.tool  # type: ignore[arg-type]
    async def piano_save_progression(
        name: str,
        progression: str,
        key: str | None = None,
        scale_type: str = "major",
    ) -> str:
        """
        Save a progression with its key.

        The progression must parse in the key before it is stored.

        Args:
            name: Progression name (max 100 characters)
            progression: Lead-sheet string
            key: Key root (optional for absolute-only progressions)
            scale_type: Scale kind of the key

        Returns:
            JSON string with the new progression id

        Example:
            piano_save_progression(name="Pop", progression="I V vi IV", key="G")
        """
        try:
            metadata: dict[str, Any] = {"scaleType": scale_type}
            if key:
                metadata["key"] = key
            document = ProgressionDocument.from_document(
                {"name": name, "progression": progression, "metadata": metadata}
            )
            progression_id = await store.save(document)

            return json.dumps(
                {
                    "status": "success",
                    "id": progression_id,
                    "message": SuccessMessages.PROGRESSION_SAVED.format(name=name, id=progression_id),
                }
            )
        except PianoError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to save progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_save_progression"] = piano_save_progression

    @mcp.tool  # type: ignore[arg-type]
    async def piano_get_progression(progression_id: str) -> str:
        """
        Get a saved progression, resolved in its key.

        Args:
            progression_id: Progression id

        Returns:
            JSON string with the document and its chords

        Example:
            piano_get_progression(progression_id="...")
        """
        try:
            document = await store.load(progression_id)
            metadata = document.metadata
            notes = scale_notes(metadata.key, metadata.scale_type) if metadata and metadata.key else []
            result = parse_progression(document.progression, notes)

            return json.dumps(
                {
                    "status": "success",
                    "progression": document.to_document(),
                    "chords": _steps_json(result),
                }
            )
        except PianoError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to get progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_get_progression"] = piano_get_progression

    @mcp.tool  # type: ignore[arg-type]
    async def piano_list_progressions(sort_by: SortField = "createdAt", order: SortOrder = "desc") -> str:
        """
        List saved progressions.

        Args:
            sort_by: "createdAt" or "name"
            order: "asc" or "desc"

        Returns:
            JSON string with progression summaries

        Example:
            piano_list_progressions(sort_by="name", order="asc")
        """
        try:
            documents = await store.list(sort_by=sort_by, order=order)
            return json.dumps(
                {
                    "status": "success",
                    "progressions": [
                        {
                            "id": d.id,
                            "name": d.name,
                            "progression": d.progression,
                            "createdAt": d.created_at,
                            "key": d.metadata.key if d.metadata else None,
                            "scaleType": d.metadata.scale_type if d.metadata else None,
                        }
                        for d in documents
                    ],
                    "count": len(documents),
                }
            )
        except Exception as e:
            logger.exception("Failed to list progressions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_list_progressions"] = piano_list_progressions

    @mcp.tool  # type: ignore[arg-type]
    async def piano_delete_progression(progression_id: str) -> str:
        """
        Delete a saved progression.

        Args:
            progression_id: Progression id

        Returns:
            JSON string with status

        Example:
            piano_delete_progression(progression_id="...")
        """
        try:
            if not await store.delete(progression_id):
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.PROGRESSION_NOT_FOUND.format(id=progression_id)}
                )
            return json.dumps(
                {"status": "success", "message": SuccessMessages.PROGRESSION_DELETED.format(id=progression_id)}
            )
        except Exception as e:
            logger.exception("Failed to delete progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_delete_progression"] = piano_delete_progression

    @mcp.tool  # type: ignore[arg-type]
    async def piano_list_exercises() -> str:
        """
        List practice exercises.

        Returns:
            JSON string with exercise summaries

        Example:
            piano_list_exercises()
        """
        try:
            exercises = exercise_loader.list_exercises()
            return json.dumps(
                {
                    "status": "success",
                    "exercises": [
                        {
                            "id": e.id,
                            "name": e.name,
                            "description": e.description,
                            "pattern": e.pattern,
                            "scale_type": e.scale_type,
                        }
                        for e in exercises
                    ],
                    "count": len(exercises),
                }
            )
        except Exception as e:
            logger.exception("Failed to list exercises")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_list_exercises"] = piano_list_exercises

    @mcp.tool  # type: ignore[arg-type]
    async def piano_get_exercise(
        exercise_id: str,
        start_key: str | None = None,
        max_keys: int | None = None,
    ) -> str:
        """
        Get an exercise with its chords resolved in every key.

        Args:
            exercise_id: Exercise id (e.g. 'i-v-i-circle')
            start_key: Rotate the key order to start here
            max_keys: Only practise this many keys

        Returns:
            JSON string with one entry per key

        Example:
            piano_get_exercise(exercise_id="ii-v-i-circle", start_key="F", max_keys=4)
        """
        try:
            exercise = exercise_loader.get_exercise(exercise_id)
            if exercise is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.EXERCISE_NOT_FOUND.format(exercise_id=exercise_id)}
                )

            keys = exercise.key_order(start_key, max_keys)
            return json.dumps(
                {
                    "status": "success",
                    "exercise": exercise.model_dump(),
                    "keys": [
                        {
                            "key": root,
                            "chords": [
                                {"name": step.name, "roman": step.symbol}
                                for step in exercise_loader.progression_for(exercise, root)
                            ],
                        }
                        for root in keys
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to get exercise")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_get_exercise"] = piano_get_exercise

    @mcp.tool  # type: ignore[arg-type]
    async def piano_circle_of_fifths() -> str:
        """
        Get the twelve keys in Circle of Fifths order.

        Returns:
            JSON string with the key roots

        Example:
            piano_circle_of_fifths()
        """
        return json.dumps({"status": "success", "keys": circle_of_fifths()})

    tools["piano_circle_of_fifths"] = piano_circle_of_fifths

    return tools
