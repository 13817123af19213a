# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Schedule serialization and structural validation.
Stored values are JSON with camelCase period fields. Loading checks shape
only (length, key set, ordering, id uniqueness, field types); business
ranges such as grade 1..12 are not enforced here.
"""

import json
from typing import Any

from pydantic import ValidationError

from studypilot.core.errors import CorruptPersistedState
from studypilot.models.domain import (
    PERIODS_PER_DAY,
    WEEKDAYS,
    DailySchedule,
    SchedulePeriod,
    WeeklySchedule,
)

PERIOD_FIELDS = frozenset({"id", "periodNumber", "gradeId", "subject", "topic"})


# ── Encode ──

def _periods_to_json(periods: DailySchedule) -> list[dict[str, Any]]:
    return [p.model_dump(by_alias=True) for p in periods]


def dump_daily(schedule: DailySchedule) -> str:
    return json.dumps(_periods_to_json(schedule))


def dump_weekly(schedule: WeeklySchedule) -> str:
    return json.dumps(
        {weekday.value: _periods_to_json(periods) for weekday, periods in schedule.days()}
    )


# ── Decode ──

def _parse_json(raw: str, key: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise CorruptPersistedState(key, f"not valid JSON ({exc})") from exc


def _validate_periods(data: Any, key: str) -> DailySchedule:
    if not isinstance(data, list):
        raise CorruptPersistedState(key, "expected a list of periods")
    if len(data) != PERIODS_PER_DAY:
        raise CorruptPersistedState(
            key, f"expected {PERIODS_PER_DAY} periods, found {len(data)}"
        )

    periods: list[SchedulePeriod] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise CorruptPersistedState(key, f"period {index + 1} is not an object")
        missing = PERIOD_FIELDS - entry.keys()
        if missing:
            raise CorruptPersistedState(
                key, f"period {index + 1} is missing {sorted(missing)}"
            )
        try:
            period = SchedulePeriod.model_validate(entry, strict=True)
        except ValidationError as exc:
            raise CorruptPersistedState(
                key, f"period {index + 1} has {exc.error_count()} invalid field(s)"
            ) from exc
        if period.period_number != index + 1:
            raise CorruptPersistedState(
                key,
                f"period at position {index + 1} is numbered {period.period_number}",
            )
        periods.append(period)

    ids = [p.id for p in periods]
    if len(set(ids)) != len(ids):
        raise CorruptPersistedState(key, "period ids are not unique")
    return tuple(periods)


def load_daily(raw: str, key: str = "daily") -> DailySchedule:
    """Decode a stored daily schedule. Raises CorruptPersistedState."""
    return _validate_periods(_parse_json(raw, key), key)


def load_weekly(raw: str, key: str = "weekly") -> WeeklySchedule:
    """Decode a stored weekly schedule. Raises CorruptPersistedState."""
    data = _parse_json(raw, key)
    if not isinstance(data, dict):
        raise CorruptPersistedState(key, "expected an object keyed by weekday")
    expected = {weekday.value for weekday in WEEKDAYS}
    if set(data) != expected:
        raise CorruptPersistedState(
            key, f"weekday keys {sorted(data)} do not match {sorted(expected)}"
        )
    return WeeklySchedule(
        **{
            weekday.value: _validate_periods(data[weekday.value], f"{key}.{weekday.value}")
            for weekday in WEEKDAYS
        }
    )
