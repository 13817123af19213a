# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Saved notes endpoints.
Thin HTTP layer — delegates ALL logic to NotesService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studypilot.core.dependencies import get_notes_service, require_owner
from studypilot.models.domain import MAX_GRADE, MIN_GRADE, Note
from studypilot.schemas.planner import NoteCreateRequest
from studypilot.services.notes_service import NotesService

router = APIRouter(
    prefix="/api/v1",
    tags=["Notes"],
    dependencies=[Depends(require_owner)],
)


@router.get("/notes", response_model=list[Note])
def list_notes(
    grade_id: Optional[int] = Query(default=None, ge=MIN_GRADE, le=MAX_GRADE),
    service: NotesService = Depends(get_notes_service),
):
    """List notes, newest first, optionally for one grade."""
    return service.list_notes(grade_id)


@router.post("/notes", status_code=201, response_model=Note)
def create_note(
    payload: NoteCreateRequest,
    service: NotesService = Depends(get_notes_service),
):
    return service.add_note(
        grade_id=payload.grade_id,
        topic=payload.topic,
        content=payload.content,
        note_type=payload.type,
    )


@router.delete("/notes/{note_id}")
def delete_note(
    note_id: str,
    service: NotesService = Depends(get_notes_service),
):
    try:
        service.delete_note(note_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))
    return {"status": "deleted", "id": note_id}
