"""Training program data models."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from ..utils.dates import format_timestamp, parse_timestamp

MIN_EXERCISES_PER_DAY = 3
MAX_EXERCISES_PER_DAY = 6


@dataclass
class ProgramDay:
    """One day of a program: an ordered list of exercise identifiers."""

    exercises: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"exercises": list(self.exercises)}

    @classmethod
    def from_dict(cls, data) -> "ProgramDay":
        # Accept both {"exercises": [...]} and a bare list of ids
        if isinstance(data, dict):
            return cls(exercises=list(data.get("exercises") or []))
        return cls(exercises=list(data))


@dataclass
class Program:
    """A user-defined training program.

    Days are 1-indexed by position: ``day_number`` N refers to ``days[N - 1]``.
    """

    name: str
    days: list[ProgramDay] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime | None = None
    # Early programs stored only a day count, no exercises
    legacy_day_count: int | None = None

    @property
    def day_count(self) -> int:
        return len(self.days) or self.legacy_day_count or 0

    def get_day(self, day_number: int) -> ProgramDay | None:
        """Get a day by its 1-based number."""
        if 1 <= day_number <= len(self.days):
            return self.days[day_number - 1]
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        data = {
            "id": self.id,
            "name": self.name,
            "days": [day.to_dict() for day in self.days],
            "createdAt": format_timestamp(self.created_at),
        }
        if self.legacy_day_count is not None:
            data["dayCount"] = self.legacy_day_count
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Program":
        """Create from dictionary."""
        if not data.get("id"):
            raise ValueError("Program record has no id")
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            days=[ProgramDay.from_dict(day) for day in data.get("days") or []],
            created_at=parse_timestamp(data.get("createdAt")),
            legacy_day_count=data.get("dayCount"),
        )

    def get_summary(self) -> str:
        """Generate a readable day-by-day summary."""
        summary = f"{self.name} ({self.day_count} day{'s' if self.day_count != 1 else ''})\n"
        for number, day in enumerate(self.days, start=1):
            summary += f"  Day {number}: {', '.join(day.exercises)}\n"
        return summary
