# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — services are built per application in
``main.create_app`` and held on ``app.state``; these functions hand them out.
"""

from fastapi import Depends, HTTPException, Request

from studypilot.models.domain import TeacherProfile
from studypilot.repositories.storage import KeyValueStorage
from studypilot.services.auth_service import AuthService
from studypilot.services.notes_service import NotesService
from studypilot.services.schedule_store import ScheduleStore


def get_storage(request: Request) -> KeyValueStorage:
    return request.app.state.storage


def get_schedule_store(request: Request) -> ScheduleStore:
    return request.app.state.schedule_store


def get_notes_service(request: Request) -> NotesService:
    return request.app.state.notes_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def require_owner(auth: AuthService = Depends(get_auth_service)) -> TeacherProfile:
    """Gate for schedule and note routes: a teacher must be signed in."""
    if not auth.is_owner_present():
        raise HTTPException(status_code=401, detail="Sign in to manage schedules and notes")
    return auth.current_user()
