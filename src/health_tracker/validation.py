"""Input validation for programs, measurements and dates."""

import math
from collections.abc import Iterable, Mapping

from .errors import ValidationError
from .models.program import MAX_EXERCISES_PER_DAY, MIN_EXERCISES_PER_DAY, ProgramDay
from .utils.dates import parse_date


def validate_program(name: str | None, days: list[ProgramDay] | None) -> None:
    """Validate a program before it is created or updated.

    Raises:
        ValidationError: If the name is blank, there are no days, or any day
            falls outside the allowed exercise count.
    """
    if not name or not name.strip():
        raise ValidationError("Please enter a program name")

    if not days:
        raise ValidationError("Please add at least one day")

    for day in days:
        if not MIN_EXERCISES_PER_DAY <= len(day.exercises) <= MAX_EXERCISES_PER_DAY:
            raise ValidationError(
                f"Each day must have {MIN_EXERCISES_PER_DAY}-{MAX_EXERCISES_PER_DAY} exercises"
            )


def validate_measurements(data: Mapping, fields: Iterable[str]) -> dict[str, float]:
    """Parse the given measurement fields out of raw input.

    Blank and missing values are skipped. Zero is a valid value.

    Returns:
        Mapping of field name to parsed number.

    Raises:
        ValidationError: If a value is not a number or is negative.
    """
    parsed = {}
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid value for {name}") from None
        if math.isnan(number) or number < 0:
            raise ValidationError(f"Invalid value for {name}")
        parsed[name] = number
    return parsed


def validate_date(value: str | None, label: str = "date") -> str | None:
    """Check that ``value`` is a ``YYYY-MM-DD`` date. ``None`` passes through.

    Raises:
        ValidationError: If the value is not a canonical ISO date.
    """
    if value is None:
        return None
    try:
        parse_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}: {value} (expected YYYY-MM-DD)") from None
    return value
