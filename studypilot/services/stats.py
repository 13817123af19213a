# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Schedule statistics — pure computation, no side effects.
"""

from typing import Iterable

from studypilot.models.domain import PERIODS_PER_DAY, SchedulePeriod, ScheduleStats


def compute_stats(periods: Iterable[SchedulePeriod]) -> ScheduleStats:
    """
    Aggregate counts for one day of periods.
    A period counts as scheduled only when it has a grade; the subject text
    plays no part in that decision. Distinct subjects are counted over every
    period, graded or not.
    Pure function — no I/O, no metrics, no logging.
    """
    periods = list(periods)
    scheduled = [p for p in periods if p.grade_id is not None]
    grades = {p.grade_id for p in scheduled}
    subjects = {p.subject for p in periods if p.subject}
    return ScheduleStats(
        classes_scheduled=len(scheduled),
        unique_grades=len(grades),
        subjects=len(subjects),
        free_periods=PERIODS_PER_DAY - len(scheduled),
    )
