"""
Recording tools - MCP tools for stored recordings and MIDI files.

Recordings are captured by a client (the recorder runs next to the
keyboard) and handed over as JSON documents; these tools store them,
list them and convert them to and from Standard MIDI Files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_piano.constants import ErrorMessages, SortField, SortOrder, SuccessMessages
from chuk_mcp_piano.errors import PianoError
from chuk_mcp_piano.recording import midi_to_recording, recording_to_midi
from chuk_mcp_piano.storage import RecordingStore

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_recording_tools(
    mcp: ChukMCPServer,
    store: RecordingStore,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register recording tools with the MCP server.

    Args:
        mcp: The MCP server instance
        store: The recording store
        output_dir: Directory for exported MIDI files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def piano_save_recording(recording_json: str) -> str:
        """
        Store a recording document.

        Args:
            recording_json: Recording in its JSON form (version, id, name,
                createdAt, duration, events)

        Returns:
            JSON string with the recording id

        Example:
            piano_save_recording(recording_json='{"version": "1.0", ...}')
        """
        try:
            recording = store.import_json(recording_json)
            recording_id = await store.save(recording)
            return json.dumps(
                {
                    "status": "success",
                    "id": recording_id,
                    "message": SuccessMessages.RECORDING_SAVED.format(name=recording.name, id=recording_id),
                }
            )
        except PianoError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to save recording")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_save_recording"] = piano_save_recording

    @mcp.tool  # type: ignore[arg-type]
    async def piano_get_recording(recording_id: str) -> str:
        """
        Get a stored recording.

        Args:
            recording_id: Recording id

        Returns:
            JSON string with the full recording document

        Example:
            piano_get_recording(recording_id="...")
        """
        try:
            recording = await store.load(recording_id)
            return json.dumps({"status": "success", "recording": recording.to_document()})
        except PianoError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to get recording")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_get_recording"] = piano_get_recording

    @mcp.tool  # type: ignore[arg-type]
    async def piano_list_recordings(sort_by: SortField = "createdAt", order: SortOrder = "desc") -> str:
        """
        List stored recordings.

        Args:
            sort_by: "createdAt" or "name"
            order: "asc" or "desc"

        Returns:
            JSON string with recording summaries

        Example:
            piano_list_recordings()
        """
        try:
            recordings = await store.list(sort_by=sort_by, order=order)
            return json.dumps(
                {
                    "status": "success",
                    "recordings": [
                        {
                            "id": r.id,
                            "name": r.name,
                            "createdAt": r.created_at,
                            "duration": r.duration,
                            "events": r.total_events,
                        }
                        for r in recordings
                    ],
                    "count": len(recordings),
                }
            )
        except Exception as e:
            logger.exception("Failed to list recordings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_list_recordings"] = piano_list_recordings

    @mcp.tool  # type: ignore[arg-type]
    async def piano_delete_recording(recording_id: str) -> str:
        """
        Delete a stored recording.

        Args:
            recording_id: Recording id

        Returns:
            JSON string with status

        Example:
            piano_delete_recording(recording_id="...")
        """
        try:
            if not await store.delete(recording_id):
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.RECORDING_NOT_FOUND.format(id=recording_id)}
                )
            return json.dumps(
                {"status": "success", "message": SuccessMessages.RECORDING_DELETED.format(id=recording_id)}
            )
        except Exception as e:
            logger.exception("Failed to delete recording")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_delete_recording"] = piano_delete_recording

    @mcp.tool  # type: ignore[arg-type]
    async def piano_export_midi(recording_id: str, filename: str | None = None, tempo_bpm: int = 120) -> str:
        """
        Export a stored recording to a MIDI file.

        Args:
            recording_id: Recording id
            filename: Output filename (default: {recording_id}.mid)
            tempo_bpm: Tempo written to the file

        Returns:
            JSON string with the output path

        Example:
            piano_export_midi(recording_id="...", filename="take1.mid")
        """
        try:
            recording = await store.load(recording_id)
            midi_file = recording_to_midi(recording, tempo_bpm=tempo_bpm)

            filename = filename or f"{recording_id}.mid"
            output_path = output_dir / filename
            output_dir.mkdir(parents=True, exist_ok=True)
            midi_file.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "events": recording.total_events,
                    "message": SuccessMessages.MIDI_EXPORTED.format(name=recording.name, path=output_path),
                }
            )
        except PianoError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to export MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_export_midi"] = piano_export_midi

    @mcp.tool  # type: ignore[arg-type]
    async def piano_import_midi(path: str, name: str | None = None) -> str:
        """
        Import a MIDI file as a stored recording.

        Args:
            path: Path to a .mid file
            name: Recording name (default: track name or file name)

        Returns:
            JSON string with the new recording id

        Example:
            piano_import_midi(path="output/take1.mid", name="Take 1")
        """
        try:
            midi_path = Path(path)
            if not midi_path.exists():
                return json.dumps({"status": "error", "message": f"File not found: {path}"})

            recording = midi_to_recording(midi_path, name=name)
            recording_id = await store.save(recording)
            return json.dumps(
                {
                    "status": "success",
                    "id": recording_id,
                    "name": recording.name,
                    "duration": recording.duration,
                    "events": recording.total_events,
                }
            )
        except PianoError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to import MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_import_midi"] = piano_import_midi

    return tools
