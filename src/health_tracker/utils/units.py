"""Metric/imperial unit conversion.

Values are always stored in metric units. These helpers convert them for
display and convert user input back to canonical metric values.
"""

import math
from collections.abc import Mapping
from typing import NamedTuple

KG_TO_LB = 2.20462
CM_TO_IN = 0.393701
L_TO_FLOZ = 33.814

# Body girth measurements, nested under ``body.circumferences``
CIRCUMFERENCE_FIELDS = (
    "neck",
    "chest",
    "waist",
    "hips",
    "leftBiceps",
    "rightBiceps",
    "leftQuadriceps",
    "rightQuadriceps",
    "leftCalf",
    "rightCalf",
)

# Fields whose stored value changes with the unit preference
CONVERTIBLE_FIELDS = ("weight", "water", "height", *CIRCUMFERENCE_FIELDS)

METRIC = "metric"
IMPERIAL = "imperial"

METRIC_UNITS = {
    "weight": "kg",
    "water": "L",
    "height": "cm",
    "bodyFat": "%",
    "restingHR": "bpm",
    "calories": "kcal",
    "protein": "g",
    "fibre": "g",
    "steps": "",
    "sleep": "hrs",
    "recovery": "/10",
    **{f: "cm" for f in CIRCUMFERENCE_FIELDS},
}

IMPERIAL_UNITS = {
    "weight": "lbs",
    "water": "fl oz",
    "height": "ft/in",
    **{f: "in" for f in CIRCUMFERENCE_FIELDS},
}

WHOLE_NUMBER_FIELDS = frozenset({"steps", "calories", "restingHR"})


class ImperialHeight(NamedTuple):
    """Height split into whole feet and remaining inches."""

    feet: int
    inches: float

    @property
    def total_inches(self) -> float:
        return self.feet * 12 + self.inches


def _factor(field: str) -> float | None:
    if field == "weight":
        return KG_TO_LB
    if field == "water":
        return L_TO_FLOZ
    if field == "height" or field in CIRCUMFERENCE_FIELDS:
        return CM_TO_IN
    return None


def to_imperial(value: float | None, field: str) -> float | ImperialHeight | None:
    """Convert a stored metric value to its imperial form.

    Height returns an :class:`ImperialHeight`; fields without an imperial
    form are returned unchanged.
    """
    if value is None:
        return None

    if field == "height":
        total_inches = value * CM_TO_IN
        feet = math.floor(total_inches / 12)
        return ImperialHeight(feet=feet, inches=total_inches - feet * 12)

    factor = _factor(field)
    if factor is None:
        return value
    return value * factor


def to_metric(value, field: str) -> float | None:
    """Convert an imperial value back to the canonical metric value.

    For height, ``value`` may be an :class:`ImperialHeight`, a mapping with
    ``feet``/``inches`` keys, or a scalar number of total inches.
    """
    if value is None:
        return None

    if field == "height":
        if isinstance(value, ImperialHeight):
            total_inches = value.total_inches
        elif isinstance(value, Mapping) and value.get("feet") is not None:
            total_inches = value["feet"] * 12 + (value.get("inches") or 0)
        else:
            total_inches = value
        return total_inches / CM_TO_IN

    factor = _factor(field)
    if factor is None:
        return value
    return value / factor


def display_unit(field: str, preference: str = METRIC) -> str:
    """Get the unit label for a field under a unit preference."""
    if preference == IMPERIAL and field in IMPERIAL_UNITS:
        return IMPERIAL_UNITS[field]
    return METRIC_UNITS.get(field, "")


def to_display(value: float | None, field: str, preference: str = METRIC):
    """Convert a stored value for display under a unit preference."""
    if preference == IMPERIAL:
        return to_imperial(value, field)
    return value


def from_input(value, field: str, preference: str = METRIC) -> float | None:
    """Convert a value entered under a unit preference to metric."""
    if preference == IMPERIAL:
        return to_metric(value, field)
    return value


def format_height(cm: float | None, preference: str = METRIC) -> str:
    """Format a height for display, e.g. ``5'11"`` or ``180 cm``."""
    if cm is None:
        return "--"
    if preference == IMPERIAL:
        height = to_imperial(cm, "height")
        inches = round(height.inches)
        feet = height.feet
        if inches == 12:
            feet, inches = feet + 1, 0
        return f"{feet}'{inches}\""
    return f"{cm:g} cm"


def format_value(
    value: float | None,
    field: str,
    preference: str = METRIC,
    places: int | None = None,
) -> str:
    """Format a stored value with its unit, e.g. waist 86 cm -> ``33.9in``.

    Counts such as steps and calories default to whole numbers, everything
    else to one decimal place. Rounding happens here only; conversion itself
    is lossless.
    """
    if places is None:
        places = 0 if field in WHOLE_NUMBER_FIELDS else 1
    if value is None:
        return "--"
    if field == "height":
        return format_height(value, preference)
    shown = to_display(value, field, preference)
    return f"{shown:.{places}f}{display_unit(field, preference)}"
