# src/notes_api/store.py

"""
Note store collaborators.

A store exposes a single read operation, `snapshot()`, returning every known
note keyed by its identifier. The handlers receive the store as an explicit
argument, so tests and alternative deployments can swap in their own.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Protocol

from .config import AppConfig
from .exceptions import NoteStoreError
from .schemas import Note

logger = logging.getLogger(__name__)


class NoteStore(Protocol):
    def snapshot(self) -> dict[str, Note]: ...


def default_notes() -> dict[str, Note]:
    """The fixture data served when no notes file is configured."""
    return {
        "id1": {
            "noteId": "id1",
            "userId": "user1",
            "createdAt": "1609459200",
            "content": "Hello World!",
        },
        "id2": {
            "noteId": "id2",
            "userId": "user2",
            "createdAt": "1609545600",
            "content": "Hello Old World! Old note.",
        },
    }


def find_note(snapshot: dict[str, Note], note_id: str | None) -> Note | None:
    """Returns the note stored under *note_id*, or None when there is none."""
    if not note_id:
        return None
    return snapshot.get(note_id)


class InMemoryNoteStore:
    """Serves a fixed set of notes. Each snapshot is an independent copy."""

    def __init__(self, notes: dict[str, Note] | None = None):
        self._notes = default_notes() if notes is None else dict(notes)

    def snapshot(self) -> dict[str, Note]:
        return copy.deepcopy(self._notes)


class JsonFileNoteStore:
    """
    Reads notes from a JSON file holding an object of note objects.

    The file is re-read on every call, so edits show up on the next
    invocation without a cold start.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def snapshot(self) -> dict[str, Note]:
        source = str(self._path)
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise NoteStoreError(source=source, reason=str(e)) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise NoteStoreError(source=source, reason=f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise NoteStoreError(source=source, reason="top-level value must be an object")

        bad_keys = [key for key, value in data.items() if not isinstance(value, dict)]
        if bad_keys:
            raise NoteStoreError(
                source=source,
                reason=f"notes must be objects, offending ids: {sorted(bad_keys)}",
            )

        logger.debug("Loaded note snapshot.", extra={"source": source, "count": len(data)})
        return data


def build_note_store(config: AppConfig) -> NoteStore:
    """Picks the store implementation for the running configuration."""
    if config.uses_notes_file:
        logger.info("Using JSON file note store.", extra={"notes_file": config.notes_file})
        return JsonFileNoteStore(config.notes_file)
    logger.info("Using built-in fixture note store.")
    return InMemoryNoteStore()
