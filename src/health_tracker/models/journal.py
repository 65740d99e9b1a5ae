"""Daily journal data models."""

from dataclasses import dataclass, field
from datetime import datetime

from ..utils.dates import format_timestamp, parse_date, parse_timestamp, utcnow
from ..utils.units import CIRCUMFERENCE_FIELDS


@dataclass
class BodyMeasurements:
    """Body composition and girth measurements for one day.

    ``weight`` and ``resting_hr`` are legacy locations; current entries
    record them under :class:`DailyLog`.
    """

    body_fat: float | None = None
    weight: float | None = None  # legacy, kg
    resting_hr: float | None = None  # legacy, bpm
    circumferences: dict[str, float] = field(default_factory=dict)  # cm

    FIELDS = {"bodyFat": "body_fat", "weight": "weight", "restingHR": "resting_hr"}

    def get(self, name: str) -> float | None:
        """Get a top-level body value by its metric identifier."""
        attr = self.FIELDS.get(name)
        return getattr(self, attr) if attr else None

    def to_dict(self) -> dict:
        data = {key: getattr(self, attr) for key, attr in self.FIELDS.items()}
        data = {k: v for k, v in data.items() if v is not None}
        if self.circumferences:
            data["circumferences"] = dict(self.circumferences)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "BodyMeasurements":
        """Create from dictionary.

        Circumferences recorded at the top level by early versions are
        moved under ``circumferences`` unless a nested value already exists.
        """
        circumferences = dict(data.get("circumferences") or {})
        for name in CIRCUMFERENCE_FIELDS:
            if data.get(name) is not None and circumferences.get(name) is None:
                circumferences[name] = data[name]
        return cls(
            body_fat=data.get("bodyFat"),
            weight=data.get("weight"),
            resting_hr=data.get("restingHR"),
            circumferences={
                k: v for k, v in circumferences.items() if k in CIRCUMFERENCE_FIELDS
            },
        )


@dataclass
class DailyLog:
    """Nutrition, activity and recovery numbers for one day."""

    weight: float | None = None  # kg
    resting_hr: float | None = None  # bpm
    calories: float | None = None  # kcal
    protein: float | None = None  # g
    fibre: float | None = None  # g
    water: float | None = None  # L
    steps: int | None = None
    sleep: float | None = None  # hours
    recovery: float | None = None  # 1-10

    FIELDS = {
        "weight": "weight",
        "restingHR": "resting_hr",
        "calories": "calories",
        "protein": "protein",
        "fibre": "fibre",
        "water": "water",
        "steps": "steps",
        "sleep": "sleep",
        "recovery": "recovery",
    }

    def get(self, name: str) -> float | None:
        """Get a daily value by its metric identifier."""
        attr = self.FIELDS.get(name)
        return getattr(self, attr) if attr else None

    def to_dict(self) -> dict:
        data = {key: getattr(self, attr) for key, attr in self.FIELDS.items()}
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict) -> "DailyLog":
        return cls(**{attr: data.get(key) for key, attr in cls.FIELDS.items()})


@dataclass
class WorkoutSet:
    """A single logged set."""

    reps: int | None = None
    weight: float | None = None  # kg
    rir: int | None = None  # reps in reserve
    notes: str | None = None

    def to_dict(self) -> dict:
        return {
            "reps": self.reps,
            "weight": self.weight,
            "rir": self.rir,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSet":
        return cls(
            reps=data.get("reps"),
            weight=data.get("weight"),
            rir=data.get("rir"),
            notes=data.get("notes"),
        )


@dataclass
class WorkoutExercise:
    """An exercise performed during a workout."""

    id: str | None
    name: str = ""
    sets: list[WorkoutSet] = field(default_factory=list)

    def matches(self, exercise: str) -> bool:
        """Check whether this entry is the given exercise id or name."""
        return exercise == self.id or exercise == self.name

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sets": [s.to_dict() for s in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutExercise":
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            sets=[WorkoutSet.from_dict(s) for s in data.get("sets") or []],
        )


@dataclass
class Workout:
    """A workout session, optionally tied to a program day."""

    program_id: str | None = None
    day_number: int | None = None
    exercises: list[WorkoutExercise] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "programId": self.program_id,
            "dayNumber": self.day_number,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        return cls(
            program_id=data.get("programId"),
            day_number=data.get("dayNumber"),
            exercises=[WorkoutExercise.from_dict(ex) for ex in data.get("exercises") or []],
        )


@dataclass
class Journal:
    """Everything recorded for one calendar date.

    A ``None`` sub-object means nothing of that kind was recorded that day,
    which is different from a recorded value of zero.
    """

    date: str  # YYYY-MM-DD
    body: BodyMeasurements | None = None
    daily: DailyLog | None = None
    workout: Workout | None = None
    notes: str | None = None
    last_modified: datetime | None = None

    @property
    def has_exercises(self) -> bool:
        return bool(self.workout and self.workout.exercises)

    @property
    def has_data(self) -> bool:
        """True when any body, daily or workout data was recorded."""
        return self.body is not None or self.daily is not None or self.has_exercises

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "date": self.date,
            "lastModified": format_timestamp(self.last_modified),
            "body": self.body.to_dict() if self.body else None,
            "daily": self.daily.to_dict() if self.daily else None,
            "workout": self.workout.to_dict() if self.workout else None,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Journal":
        """Create from dictionary."""
        if not data.get("date"):
            raise ValueError("Journal record has no date")
        parse_date(data["date"])
        return cls(
            date=data["date"],
            body=BodyMeasurements.from_dict(data["body"]) if data.get("body") else None,
            daily=DailyLog.from_dict(data["daily"]) if data.get("daily") else None,
            workout=Workout.from_dict(data["workout"]) if data.get("workout") else None,
            notes=data.get("notes"),
            last_modified=parse_timestamp(data.get("lastModified")),
        )

    @classmethod
    def empty(cls, date: str) -> "Journal":
        """Synthesize the shell returned for a date with no record."""
        return cls(date=date, last_modified=utcnow())
