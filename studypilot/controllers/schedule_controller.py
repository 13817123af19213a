# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Daily and weekly schedule endpoints.
Thin HTTP layer — delegates state changes to ScheduleStore and figures to
compute_stats.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from studypilot.core.dependencies import get_schedule_store, require_owner
from studypilot.core.errors import InvalidArgument
from studypilot.models.domain import Weekday
from studypilot.schemas.planner import PeriodUpdateRequest, TodayResponse
from studypilot.services.schedule_store import ScheduleStore
from studypilot.services.stats import compute_stats

router = APIRouter(
    prefix="/api/v1/schedule",
    tags=["Schedule"],
    dependencies=[Depends(require_owner)],
)


# ── Daily ──

@router.get("/daily")
def get_daily_schedule(store: ScheduleStore = Depends(get_schedule_store)):
    """The day-agnostic eight-period template."""
    return store.daily


@router.patch("/daily/periods/{period_id}")
def update_daily_period(
    period_id: str,
    payload: PeriodUpdateRequest,
    store: ScheduleStore = Depends(get_schedule_store),
):
    """Change grade, subject or topic of one period. Unknown ids are a no-op."""
    try:
        return store.update_daily_period(period_id, payload.changes())
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/daily/reset")
def reset_daily_schedule(store: ScheduleStore = Depends(get_schedule_store)):
    return store.reset_daily()


@router.get("/daily/stats")
def get_daily_stats(store: ScheduleStore = Depends(get_schedule_store)):
    return compute_stats(store.daily)


# ── Weekly ──

@router.get("/weekly")
def get_weekly_schedule(store: ScheduleStore = Depends(get_schedule_store)):
    return store.weekly


@router.get("/weekly/stats")
def get_weekly_stats(store: ScheduleStore = Depends(get_schedule_store)):
    """Stats for every weekday, keyed by day."""
    return {weekday.value: compute_stats(periods) for weekday, periods in store.weekly.days()}


@router.post("/weekly/reset")
def reset_weekly_schedule(store: ScheduleStore = Depends(get_schedule_store)):
    return store.reset_weekly()


@router.patch("/weekly/{day}/periods/{period_id}")
def update_weekly_period(
    day: str,
    period_id: str,
    payload: PeriodUpdateRequest,
    store: ScheduleStore = Depends(get_schedule_store),
):
    try:
        return store.update_weekly_period(day, period_id, payload.changes())
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/weekly/{day}/stats")
def get_day_stats(day: str, store: ScheduleStore = Depends(get_schedule_store)):
    try:
        return compute_stats(store.weekly.day(day))
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


# ── Today ──

@router.get("/today", response_model=TodayResponse)
def get_today(store: ScheduleStore = Depends(get_schedule_store)):
    """Today's weekly periods. On Sunday there is no teaching day: all fields are null."""
    weekday = Weekday.for_date(date.today())
    if weekday is None:
        return TodayResponse()
    periods = store.weekly.day(weekday)
    return TodayResponse(weekday=weekday.value, periods=list(periods), stats=compute_stats(periods))
