# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Default schedule factory — pure computation, no side effects.
"""

from typing import Optional

from studypilot.models.domain import (
    PERIODS_PER_DAY,
    WEEKDAYS,
    DailySchedule,
    SchedulePeriod,
    WeeklySchedule,
)


def make_daily_schedule(prefix: str = "daily") -> DailySchedule:
    """Eight empty periods with ids ``<prefix>-period-<n>``."""
    return tuple(
        SchedulePeriod(
            id=f"{prefix}-period-{n}",
            period_number=n,
            grade_id=None,
            subject="",
            topic="",
        )
        for n in range(1, PERIODS_PER_DAY + 1)
    )


def make_weekly_schedule(generation: Optional[str] = None) -> WeeklySchedule:
    """
    One empty daily schedule per weekday, prefixed by the day key.
    ``generation`` is appended to every prefix so a reset mints new ids.
    """
    days = {}
    for weekday in WEEKDAYS:
        prefix = weekday.value if generation is None else f"{weekday.value}-{generation}"
        days[weekday.value] = make_daily_schedule(prefix)
    return WeeklySchedule(**days)
