"""Time-windowed series for trend charts."""

from collections.abc import Iterable
from dataclasses import dataclass

from ..models.journal import Journal
from ..utils.dates import subtract_days, today_iso
from .metrics import resolve

DEFAULT_DAYS = 28


@dataclass(frozen=True)
class SeriesPoint:
    """One dated value in a series."""

    date: str
    value: float

    def to_dict(self) -> dict:
        return {"date": self.date, "value": self.value}


@dataclass(frozen=True)
class ChartSummary:
    """First-to-last change over a series."""

    start: float
    end: float
    change: float
    change_percent: float

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "change": self.change,
            "changePercent": self.change_percent,
        }


@dataclass(frozen=True)
class Trend:
    """Least-squares line ``value = slope * index + intercept``."""

    slope: float
    intercept: float

    def at(self, index: int) -> float:
        return self.slope * index + self.intercept


def in_window(
    journals: Iterable[Journal], days: int | None, end: str | None = None
) -> list[Journal]:
    """Journals dated within ``[end - days, end]``; all up to ``end`` if days is None."""
    end = end or today_iso()
    if days is None:
        return [j for j in journals if j.date <= end]
    start = subtract_days(end, days)
    return [j for j in journals if start <= j.date <= end]


def chart_series(
    journals: Iterable[Journal],
    field: str,
    category: str,
    days: int | None = DEFAULT_DAYS,
    end: str | None = None,
) -> list[SeriesPoint]:
    """Recorded values of a metric over a window, oldest first."""
    points = []
    for journal in in_window(journals, days, end):
        value = resolve(journal, category, field)
        if value is not None:
            points.append(SeriesPoint(journal.date, value))
    return sorted(points, key=lambda p: p.date)


def exercise_load(journal: Journal, exercise: str) -> float | None:
    """Average weight per rep for an exercise on one day.

    Returns None when the exercise wasn't logged or had no reps.
    """
    if not journal.has_exercises:
        return None
    entry = next((ex for ex in journal.workout.exercises if ex.matches(exercise)), None)
    if entry is None:
        return None

    total_weight = 0.0
    total_reps = 0
    for logged in entry.sets:
        reps = logged.reps or 0
        if reps <= 0:
            continue
        total_weight += reps * (logged.weight or 0)
        total_reps += reps

    if total_reps == 0:
        return None
    return total_weight / total_reps


def exercise_load_series(
    journals: Iterable[Journal],
    exercise: str,
    days: int | None = DEFAULT_DAYS,
    end: str | None = None,
) -> list[SeriesPoint]:
    """Per-day average load per rep for an exercise (id or name), oldest first."""
    points = []
    for journal in in_window(journals, days, end):
        value = exercise_load(journal, exercise)
        if value is not None:
            points.append(SeriesPoint(journal.date, value))
    return sorted(points, key=lambda p: p.date)


def exercises_in_period(
    journals: Iterable[Journal], days: int = 30, end: str | None = None
) -> list[dict]:
    """Distinct exercises logged in a window, sorted by name."""
    found: dict[str, dict] = {}
    for journal in in_window(journals, days, end):
        if not journal.has_exercises:
            continue
        for ex in journal.workout.exercises:
            if ex.id and ex.id not in found:
                found[ex.id] = {"id": ex.id, "name": ex.name or ex.id}
    return sorted(found.values(), key=lambda ex: ex["name"])


def chart_summary(series: list[SeriesPoint]) -> ChartSummary | None:
    """Change from the first to the last point; None below two points."""
    if len(series) < 2:
        return None
    start = series[0].value
    end = series[-1].value
    change = end - start
    change_percent = (change / start) * 100 if start != 0 else 0.0
    return ChartSummary(start=start, end=end, change=change, change_percent=change_percent)


def linear_trend(series: list[SeriesPoint]) -> Trend | None:
    """Fit a trend line over point index; None below two points."""
    n = len(series)
    if n < 2:
        return None

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for i, point in enumerate(series):
        sum_x += i
        sum_y += point.value
        sum_xy += i * point.value
        sum_x2 += i * i

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return Trend(slope=slope, intercept=intercept)
