# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
Business ranges (grade 1..12, text lengths) are checked here, not in the store.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from studypilot.models.domain import (
    MAX_GRADE,
    MIN_GRADE,
    NoteType,
    SchedulePeriod,
    ScheduleStats,
    TeacherProfile,
)


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Schedule Schemas ──

class PeriodUpdateRequest(_Request):
    """Partial update for PATCH .../periods/{id}. Omitted fields are left alone."""
    grade_id: Optional[int] = Field(
        default=None, ge=MIN_GRADE, le=MAX_GRADE, description="Grade 1-12, null to unassign"
    )
    subject: Optional[str] = Field(default=None, max_length=255)
    topic: Optional[str] = Field(default=None, max_length=500)

    def changes(self) -> dict:
        """Only the fields the client sent; explicit null is kept for grade_id."""
        sent = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in sent.items()
            if value is not None or name == "grade_id"
        }


class TodayResponse(BaseModel):
    weekday: Optional[str] = None
    periods: Optional[list[SchedulePeriod]] = None
    stats: Optional[ScheduleStats] = None


# ── Note Schemas ──

class NoteCreateRequest(_Request):
    grade_id: int = Field(..., ge=MIN_GRADE, le=MAX_GRADE)
    topic: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1, max_length=50000)
    type: NoteType


# ── Auth Schemas ──

class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class LoginResponse(BaseModel):
    user: TeacherProfile
    message: str = "Login successful"
