"""Date and timestamp helpers."""

from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    """Current time as an aware UTC timestamp."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO timestamp, treating naive values as UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def today_iso() -> str:
    """Today's date as ``YYYY-MM-DD``."""
    return date.today().isoformat()


def subtract_days(date_str: str, days: int) -> str:
    """Subtract ``days`` from a ``YYYY-MM-DD`` date string."""
    return (parse_date(date_str) - timedelta(days=days)).isoformat()


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` date, rejecting every other ISO spelling.

    Raises:
        ValueError: If ``value`` is not a canonical calendar date.
    """
    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")
    parsed = date.fromisoformat(value)
    if parsed.isoformat() != value:
        raise ValueError(f"Not a YYYY-MM-DD date: {value}")
    return parsed
