"""User profile data models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from ..utils.dates import format_timestamp, parse_date, parse_timestamp

PROFILE_KEY = "user"


class UnitPreference(str, Enum):
    """Units used for display and input. Storage is always metric."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass
class UserProfile:
    """The single user profile.

    ``height`` is the canonical source for derived metrics such as
    waist-to-height ratio.
    """

    name: str | None = None
    height: float | None = None  # cm
    birth_date: str | None = None  # YYYY-MM-DD
    sex: Sex | None = None
    unit_preference: UnitPreference = UnitPreference.METRIC
    updated_at: datetime | None = None

    @property
    def is_saved(self) -> bool:
        return self.updated_at is not None

    def age(self, today: date | None = None) -> int | None:
        """Calculate age in whole years from the birth date."""
        if not self.birth_date:
            return None
        today = today or date.today()
        birth = parse_date(self.birth_date)
        age = today.year - birth.year
        if (today.month, today.day) < (birth.month, birth.day):
            age -= 1
        return age

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": PROFILE_KEY,
            "name": self.name,
            "height": self.height,
            "birthDate": self.birth_date,
            "sex": self.sex.value if self.sex else None,
            "unitPreference": self.unit_preference.value,
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """Create from dictionary."""
        height = data.get("height")
        return cls(
            name=(data.get("name") or "").strip() or None,
            height=float(height) if height else None,
            birth_date=data.get("birthDate") or None,
            sex=Sex(data["sex"]) if data.get("sex") else None,
            unit_preference=UnitPreference(data.get("unitPreference") or "metric"),
            updated_at=parse_timestamp(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class VolumeRange:
    min: int | None
    max: int
    description: str


@dataclass(frozen=True)
class VolumeRecommendations:
    """Weekly training volume guidance for an age group."""

    maintenance: VolumeRange
    growth: VolumeRange
    frequency: VolumeRange
    per_session: VolumeRange
    age_group: str


def volume_recommendations(age: int | None) -> VolumeRecommendations:
    """Get volume recommendations for an age.

    Adults 60 and over need more weekly volume to maintain muscle.
    """
    if age is not None and age >= 60:
        return VolumeRecommendations(
            maintenance=VolumeRange(6, 10, "6-10 sets per muscle per week"),
            growth=VolumeRange(12, 20, "12-20 sets per muscle per week"),
            frequency=VolumeRange(2, 3, "2-3 sessions per muscle per week"),
            per_session=VolumeRange(None, 10, "Up to ~10 sets per muscle per session"),
            age_group="older-adult",
        )
    return VolumeRecommendations(
        maintenance=VolumeRange(3, 6, "3-6 sets per muscle per week"),
        growth=VolumeRange(10, 20, "10-20 sets per muscle per week"),
        frequency=VolumeRange(1, 2, "1-2 sessions per muscle per week"),
        per_session=VolumeRange(None, 11, "Up to ~11 sets per muscle per session"),
        age_group="adult",
    )
