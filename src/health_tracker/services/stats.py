"""Summary statistics over the whole journal history."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import date, timedelta

from ..models.journal import Journal
from ..utils.dates import subtract_days, today_iso
from .metrics import DAILY, rolling_average


@dataclass
class JournalStats:
    days_tracked: int = 0
    total_workouts: int = 0
    current_streak: int = 0
    avg_calories: float | None = None
    avg_protein: float | None = None
    avg_sleep: float | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def current_streak(dates: set[str], today: str) -> int:
    """Count consecutive dated entries ending today (or yesterday)."""
    check = date.fromisoformat(today)
    if today not in dates:
        check -= timedelta(days=1)
    streak = 0
    while check.isoformat() in dates:
        streak += 1
        check -= timedelta(days=1)
    return streak


def calculate_stats(journals: Sequence[Journal], today: str | None = None) -> JournalStats:
    """Compute tracking totals, the current streak and 30-day averages."""
    today = today or today_iso()
    since = subtract_days(today, 30)
    recent = [j for j in journals if j.date >= since]

    return JournalStats(
        days_tracked=sum(1 for j in journals if j.has_data),
        total_workouts=sum(1 for j in journals if j.has_exercises),
        current_streak=current_streak({j.date for j in journals}, today),
        avg_calories=rolling_average(recent, "calories", DAILY),
        avg_protein=rolling_average(recent, "protein", DAILY),
        avg_sleep=rolling_average(recent, "sleep", DAILY),
    )
