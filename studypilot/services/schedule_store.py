# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Schedule store — the single owner of the daily and weekly schedules.
Every mutation builds a new value, writes it through to storage, then tells
subscribers. Values handed out earlier are never modified.
"""

import uuid
from typing import Any, Callable, Mapping, Optional, TypeVar

from pydantic import ValidationError

from studypilot.core.config import settings
from studypilot.core.errors import CorruptPersistedState, InvalidArgument, StorageWriteFailure
from studypilot.core.logging import get_logger
from studypilot.metrics.prometheus import (
    SCHEDULE_RESETS,
    SCHEDULE_UPDATES,
    STATE_RECOVERIES,
    STORAGE_WRITE_FAILURES,
)
from studypilot.models.domain import DailySchedule, SchedulePeriod, Weekday, WeeklySchedule
from studypilot.repositories.storage import KeyValueStorage
from studypilot.services.schedule_codec import dump_daily, dump_weekly, load_daily, load_weekly
from studypilot.services.schedule_defaults import make_daily_schedule, make_weekly_schedule

logger = get_logger(__name__)

T = TypeVar("T")
Listener = Callable[[str, Any], None]

DAILY = "daily"
WEEKLY = "weekly"

# Accepted update keys (field name or wire alias) -> model field.
# id and period_number are deliberately absent: they never change.
UPDATABLE_FIELDS: dict[str, str] = {
    "grade_id": "grade_id",
    "gradeId": "grade_id",
    "subject": "subject",
    "topic": "topic",
}


def _merge_period(period: SchedulePeriod, updates: Mapping[str, Any]) -> SchedulePeriod:
    changes = {
        UPDATABLE_FIELDS[name]: value
        for name, value in updates.items()
        if name in UPDATABLE_FIELDS
    }
    if not changes:
        return period
    # Types only; grade ranges belong to the HTTP schema.
    try:
        return SchedulePeriod.model_validate({**period.model_dump(), **changes}, strict=True)
    except ValidationError as exc:
        raise InvalidArgument(
            f"Invalid update for period '{period.id}': {exc.errors()[0]['msg']}"
        ) from exc


def apply_period_update(
    periods: DailySchedule, period_id: str, updates: Mapping[str, Any]
) -> Optional[DailySchedule]:
    """New tuple with one period merged, or None when no period has ``period_id``."""
    for index, period in enumerate(periods):
        if period.id == period_id:
            return periods[:index] + (_merge_period(period, updates),) + periods[index + 1:]
    return None


class ScheduleStore:
    """Holds current schedule state and is the only path for changing it."""

    def __init__(
        self,
        storage: KeyValueStorage,
        daily_key: str = settings.DAILY_SCHEDULE_KEY,
        weekly_key: str = settings.WEEKLY_SCHEDULE_KEY,
    ) -> None:
        self._storage = storage
        self._daily_key = daily_key
        self._weekly_key = weekly_key
        self._listeners: list[Listener] = []
        self.recovered_keys: list[str] = []
        self._daily, self._weekly = self.initialize()

    # ── Lifecycle ──

    def initialize(self) -> tuple[DailySchedule, WeeklySchedule]:
        """
        Load both schedules from storage. A missing or malformed value falls
        back to the default for that schedule alone; nothing is raised.
        """
        self.recovered_keys = []
        self._daily = self._load(
            self._daily_key, load_daily, lambda: make_daily_schedule(DAILY)
        )
        self._weekly = self._load(self._weekly_key, load_weekly, make_weekly_schedule)
        return self._daily, self._weekly

    def _load(
        self,
        key: str,
        decode: Callable[[str, str], T],
        default: Callable[[], T],
    ) -> T:
        raw = self._storage.get(key)
        if raw is None:
            return default()
        try:
            return decode(raw, key)
        except CorruptPersistedState:
            self.recovered_keys.append(key)
            STATE_RECOVERIES.labels(key=key).inc()
            return default()

    # ── Queries ──

    @property
    def daily(self) -> DailySchedule:
        return self._daily

    @property
    def weekly(self) -> WeeklySchedule:
        return self._weekly

    # ── Commands ──

    def update_daily_period(
        self, period_id: str, updates: Mapping[str, Any]
    ) -> DailySchedule:
        """Merge ``updates`` into one daily period. Unknown ids change nothing."""
        updated = apply_period_update(self._daily, period_id, updates)
        if updated is None:
            return self._daily

        self._daily = updated
        self._persist(self._daily_key, dump_daily(updated))
        SCHEDULE_UPDATES.labels(schedule=DAILY).inc()
        logger.debug(
            "Daily period updated: fields=%s", sorted(updates),
            extra={"schedule": DAILY, "period_id": period_id},
        )
        self._notify(DAILY, updated)
        return updated

    def update_weekly_period(
        self, day: Weekday | str, period_id: str, updates: Mapping[str, Any]
    ) -> WeeklySchedule:
        """Merge ``updates`` into one period of one day. Raises InvalidArgument."""
        weekday = Weekday.parse(day)
        periods = apply_period_update(self._weekly.day(weekday), period_id, updates)
        if periods is None:
            return self._weekly

        updated = self._weekly.with_day(weekday, periods)
        self._weekly = updated
        self._persist(self._weekly_key, dump_weekly(updated))
        SCHEDULE_UPDATES.labels(schedule=WEEKLY).inc()
        logger.debug(
            "Weekly period updated: fields=%s", sorted(updates),
            extra={"schedule": WEEKLY, "day": weekday.value, "period_id": period_id},
        )
        self._notify(WEEKLY, updated)
        return updated

    def reset_daily(self) -> DailySchedule:
        schedule = make_daily_schedule(f"{DAILY}-{_generation()}")
        self._daily = schedule
        self._persist(self._daily_key, dump_daily(schedule))
        SCHEDULE_RESETS.labels(schedule=DAILY).inc()
        logger.info("Daily schedule reset", extra={"schedule": DAILY})
        self._notify(DAILY, schedule)
        return schedule

    def reset_weekly(self) -> WeeklySchedule:
        schedule = make_weekly_schedule(_generation())
        self._weekly = schedule
        self._persist(self._weekly_key, dump_weekly(schedule))
        SCHEDULE_RESETS.labels(schedule=WEEKLY).inc()
        logger.info("Weekly schedule reset", extra={"schedule": WEEKLY})
        self._notify(WEEKLY, schedule)
        return schedule

    # ── Observers ──

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(kind, value)`` after each persisted change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Internal ──

    def _persist(self, key: str, payload: str) -> None:
        try:
            self._storage.set(key, payload)
        except StorageWriteFailure:
            # Best effort: the in-memory value stays authoritative.
            STORAGE_WRITE_FAILURES.labels(key=key).inc()

    def _notify(self, kind: str, value: Any) -> None:
        for listener in list(self._listeners):
            listener(kind, value)


def _generation() -> str:
    return uuid.uuid4().hex[:8]
