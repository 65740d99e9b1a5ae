"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from pathlib import Path

import pytest

from health_tracker.db import init_db
from health_tracker.models.journal import (
    BodyMeasurements,
    DailyLog,
    Journal,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)
from health_tracker.models.program import Program, ProgramDay
from health_tracker.models.user_profile import Sex, UnitPreference, UserProfile


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point the settings at a throwaway data directory."""
    path = tmp_path / "data"
    monkeypatch.setenv("HEALTH_TRACKER_DATA_DIR", str(path))
    return path


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the full schema applied."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def sample_program():
    """A three-day program."""
    return Program(
        id="prog-1",
        name="Full Body",
        days=[
            ProgramDay(exercises=["squat", "bench", "row"]),
            ProgramDay(exercises=["deadlift", "ohp", "pullup"]),
            ProgramDay(exercises=["lunge", "dip", "chinup"]),
        ],
    )


@pytest.fixture
def sample_profile():
    """A saved metric profile."""
    return UserProfile(
        name="Test User",
        height=180.0,
        birth_date="1990-06-15",
        sex=Sex.OTHER,
        unit_preference=UnitPreference.METRIC,
    )


@pytest.fixture
def sample_journals():
    """A week of journals, oldest first."""
    return [
        Journal(
            date="2024-03-01",
            body=BodyMeasurements(body_fat=20.0, weight=82.0, circumferences={"waist": 90.0}),
        ),
        Journal(date="2024-03-02", daily=DailyLog(weight=81.5, calories=2400, protein=150)),
        Journal(
            date="2024-03-03",
            daily=DailyLog(weight=81.0, calories=2200, protein=170, sleep=7.5),
            workout=Workout(
                program_id="prog-1",
                day_number=1,
                exercises=[
                    WorkoutExercise(
                        id="squat",
                        name="Squat",
                        sets=[WorkoutSet(reps=5, weight=100), WorkoutSet(reps=5, weight=80)],
                    )
                ],
            ),
        ),
        Journal(date="2024-03-05", body=BodyMeasurements(circumferences={"waist": 88.0})),
        Journal(date="2024-03-07", daily=DailyLog(protein=0), notes="Rest day"),
    ]
