# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.

Every model is frozen: the store hands out snapshots and builds a new value
on each mutation instead of editing an old one in place. Field names are
snake_case in Python and camelCase on the wire / in storage.
"""

from datetime import date, datetime
from enum import Enum
from typing import Iterator, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from studypilot.core.errors import InvalidArgument

PERIODS_PER_DAY = 8
MIN_GRADE = 1
MAX_GRADE = 12

NoteType = Literal["lesson-plan", "question-paper", "explanation"]


class Weekday(str, Enum):
    """The six teaching days of the weekly grid."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @classmethod
    def parse(cls, value: "Weekday | str") -> "Weekday":
        """Resolve a weekday key, raising InvalidArgument for anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(d.value for d in cls)
            raise InvalidArgument(
                f"'{value}' is not a schedule weekday (expected one of: {valid})"
            ) from None

    @classmethod
    def for_date(cls, day: date) -> Optional["Weekday"]:
        """Weekday for a calendar date; Sunday has no teaching day and yields None."""
        index = day.weekday()
        return WEEKDAYS[index] if index < len(WEEKDAYS) else None


WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SchedulePeriod(_CamelModel):
    """One teaching slot. ``id`` and ``period_number`` never change."""

    id: str
    period_number: int
    grade_id: Optional[int] = None
    subject: str = ""
    topic: str = ""


DailySchedule = tuple[SchedulePeriod, ...]


class WeeklySchedule(BaseModel):
    """Six independent daily schedules keyed by weekday."""

    model_config = ConfigDict(frozen=True)

    monday: DailySchedule
    tuesday: DailySchedule
    wednesday: DailySchedule
    thursday: DailySchedule
    friday: DailySchedule
    saturday: DailySchedule

    def day(self, weekday: Weekday | str) -> DailySchedule:
        return getattr(self, Weekday.parse(weekday).value)

    def days(self) -> Iterator[tuple[Weekday, DailySchedule]]:
        for weekday in WEEKDAYS:
            yield weekday, getattr(self, weekday.value)

    def with_day(self, weekday: Weekday, periods: DailySchedule) -> "WeeklySchedule":
        """Copy with one day replaced; the other five tuples are shared."""
        return self.model_copy(update={weekday.value: periods})


class ScheduleStats(_CamelModel):
    """Aggregate counts for one day of periods. Derived, never persisted."""

    classes_scheduled: int
    unique_grades: int
    subjects: int
    free_periods: int


class TeacherProfile(_CamelModel):
    id: str
    name: str
    email: str


class Note(_CamelModel):
    """A saved lesson plan, question paper or explanation for one grade."""

    id: str
    grade_id: int = Field(..., ge=MIN_GRADE, le=MAX_GRADE)
    topic: str
    content: str
    type: NoteType
    timestamp: datetime
