"""Metric resolution and aggregation.

``resolve`` is the single place that knows where a metric lives inside a
journal. Everything else reads values through it.
"""

from collections.abc import Iterable

from ..models.journal import Journal
from ..models.user_profile import UserProfile
from ..utils.units import CIRCUMFERENCE_FIELDS

BODY = "body"
DAILY = "daily"

# Fields that moved from body to daily; old journals still hold them in body
MIGRATED_TO_DAILY = ("weight", "restingHR")

# The nine daily tracking fields
DAILY_FIELDS = (
    "weight",
    "restingHR",
    "calories",
    "protein",
    "fibre",
    "water",
    "steps",
    "sleep",
    "recovery",
)


def resolve(journal: Journal, category: str, field: str) -> float | None:
    """Get the value of ``field`` from a journal's ``category`` sub-document.

    Body circumference fields are read from ``body.circumferences``.
    Daily weight and resting heart rate fall back to their legacy body
    location when the daily value is missing.
    """
    if category == BODY:
        if journal.body is None:
            return None
        if field in CIRCUMFERENCE_FIELDS:
            return journal.body.circumferences.get(field)
        return journal.body.get(field)

    if category == DAILY:
        value = journal.daily.get(field) if journal.daily else None
        if value is None and field in MIGRATED_TO_DAILY and journal.body is not None:
            return journal.body.get(field)
        return value

    return None


def resolved_values(
    journals: Iterable[Journal], field: str, category: str = DAILY
) -> list[float]:
    """Resolve ``field`` on each journal, keeping only recorded values."""
    values = (resolve(j, category, field) for j in journals)
    return [v for v in values if v is not None]


def rolling_average(
    journals: Iterable[Journal], field: str, category: str = DAILY
) -> float | None:
    """Mean of the recorded values, or None when nothing was recorded.

    ``journals`` should already be limited to the window of interest.
    Zero is a recorded value.
    """
    values = resolved_values(journals, field, category)
    if not values:
        return None
    return sum(values) / len(values)


def latest_value(
    journals: Iterable[Journal], field: str, category: str = DAILY
) -> float | None:
    """First recorded value in the given (newest-first) order."""
    for journal in journals:
        value = resolve(journal, category, field)
        if value is not None:
            return value
    return None


def waist_to_height(
    journals: Iterable[Journal], profile: UserProfile | None
) -> float | None:
    """Waist-to-height ratio from the latest waist and the profile height."""
    if profile is None or not profile.height:
        return None
    waist = latest_value(journals, "waist", BODY)
    if waist is None:
        return None
    return waist / profile.height


def daily_completion(journal: Journal | None) -> int:
    """Percentage of the daily fields recorded in a journal (0-100)."""
    if journal is None or journal.daily is None:
        return 0
    filled = sum(1 for name in DAILY_FIELDS if journal.daily.get(name) is not None)
    return round(filled / len(DAILY_FIELDS) * 100)
