# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Note repository — saved lesson plans, question papers and
explanations, newest first, written through to storage on every change.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from studypilot.core.config import settings
from studypilot.core.errors import StorageWriteFailure
from studypilot.core.logging import get_logger
from studypilot.metrics.prometheus import NOTES_STORED, STATE_RECOVERIES, STORAGE_WRITE_FAILURES
from studypilot.models.domain import Note, NoteType
from studypilot.repositories.storage import KeyValueStorage

logger = get_logger(__name__)

_NOTE_LIST = TypeAdapter(list[Note])


class NotesService:
    """Business logic for saved notes."""

    def __init__(self, storage: KeyValueStorage, key: str = settings.NOTES_KEY) -> None:
        self._storage = storage
        self._key = key
        self._notes: tuple[Note, ...] = self._load()
        NOTES_STORED.set(len(self._notes))

    def _load(self) -> tuple[Note, ...]:
        raw = self._storage.get(self._key)
        if raw is None:
            return ()
        try:
            return tuple(_NOTE_LIST.validate_json(raw))
        except ValidationError:
            STATE_RECOVERIES.labels(key=self._key).inc()
            return ()

    # ── Commands ──

    def add_note(
        self, grade_id: int, topic: str, content: str, note_type: NoteType
    ) -> Note:
        note = Note(
            id=f"note-{uuid.uuid4().hex}",
            grade_id=grade_id,
            topic=topic,
            content=content,
            type=note_type,
            timestamp=datetime.now(timezone.utc),
        )
        self._replace((note,) + self._notes)
        logger.info("Note saved: grade=%d, type=%s", grade_id, note_type, extra={"note_id": note.id})
        return note

    def delete_note(self, note_id: str) -> Note:
        """Remove a note. Raises KeyError if it does not exist."""
        for note in self._notes:
            if note.id == note_id:
                self._replace(tuple(n for n in self._notes if n.id != note_id))
                logger.info("Note deleted", extra={"note_id": note_id})
                return note
        raise KeyError(f"No note found with id '{note_id}'")

    # ── Queries ──

    def list_notes(self, grade_id: Optional[int] = None) -> list[Note]:
        if grade_id is None:
            return list(self._notes)
        return [n for n in self._notes if n.grade_id == grade_id]

    def count(self) -> int:
        return len(self._notes)

    # ── Internal ──

    def _replace(self, notes: tuple[Note, ...]) -> None:
        self._notes = notes
        payload = json.dumps(
            [n.model_dump(mode="json", by_alias=True) for n in notes]
        )
        try:
            self._storage.set(self._key, payload)
        except StorageWriteFailure:
            STORAGE_WRITE_FAILURES.labels(key=self._key).inc()
        NOTES_STORED.set(len(notes))
