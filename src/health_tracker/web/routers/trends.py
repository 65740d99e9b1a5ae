"""Trend and statistics routes."""

from fastapi import APIRouter, HTTPException, Query

from ...config import get_settings
from ...db import JournalRepository
from ...services.metrics import BODY, DAILY
from ...services.stats import calculate_stats
from ...services.trends import (
    chart_series,
    chart_summary,
    exercise_load_series,
    exercises_in_period,
    linear_trend,
)
from ...validation import validate_date

router = APIRouter(prefix="/trends", tags=["trends"])


def series_response(series) -> dict:
    trend = linear_trend(series)
    summary = chart_summary(series)
    return {
        "points": [p.to_dict() for p in series],
        "trend": [trend.at(i) for i in range(len(series))] if trend else None,
        "summary": summary.to_dict() if summary else None,
    }


def window(days: int | None, all_days: bool) -> int | None:
    if all_days:
        return None
    return days if days is not None else get_settings().chart_days


@router.get("/series")
async def series(
    field: str,
    category: str = DAILY,
    days: int | None = None,
    all_days: bool = Query(False, alias="all"),
    end: str | None = None,
):
    """Recorded values of a metric over a window, with trend line and summary."""
    validate_date(end, "end date")
    if category not in (BODY, DAILY):
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")
    journals = await JournalRepository().list_all()
    return series_response(chart_series(journals, field, category, window(days, all_days), end))


@router.get("/exercise")
async def exercise(
    exercise: str,
    days: int | None = None,
    all_days: bool = Query(False, alias="all"),
    end: str | None = None,
):
    """Average weight per rep for an exercise (id or name)."""
    validate_date(end, "end date")
    journals = await JournalRepository().list_all()
    return series_response(exercise_load_series(journals, exercise, window(days, all_days), end))


@router.get("/exercises")
async def exercises(days: int = 30, end: str | None = None):
    validate_date(end, "end date")
    journals = await JournalRepository().list_all()
    return exercises_in_period(journals, days, end)


@router.get("/stats")
async def stats():
    return calculate_stats(await JournalRepository().list_all()).to_dict()
