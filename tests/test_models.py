"""Tests for data models."""

from datetime import date, datetime, timezone

import pytest

from health_tracker.models.goal import (
    Goal,
    GoalDirection,
    GoalType,
    MetricSource,
    TrackingMode,
    get_goal_metric,
)
from health_tracker.models.journal import (
    BodyMeasurements,
    DailyLog,
    Journal,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)
from health_tracker.models.program import Program, ProgramDay
from health_tracker.models.user_profile import (
    Sex,
    UnitPreference,
    UserProfile,
    volume_recommendations,
)


class TestJournal:
    """Tests for Journal model."""

    def test_round_trip(self):
        """Test a full journal survives serialization."""
        journal = Journal(
            date="2024-03-03",
            body=BodyMeasurements(body_fat=18.0, circumferences={"waist": 86.0, "neck": 38.0}),
            daily=DailyLog(weight=80.0, steps=9000, recovery=7),
            workout=Workout(
                program_id="p1",
                day_number=2,
                exercises=[
                    WorkoutExercise(id="bench", name="Bench", sets=[WorkoutSet(reps=5, weight=70, rir=2)])
                ],
            ),
            notes="Felt good",
            last_modified=datetime(2024, 3, 3, 20, 0, tzinfo=timezone.utc),
        )

        assert Journal.from_dict(journal.to_dict()) == journal

    def test_to_dict_uses_wire_names(self):
        """Test serialized keys are camelCase."""
        data = Journal(
            date="2024-03-03",
            daily=DailyLog(resting_hr=55),
            workout=Workout(program_id="p1", day_number=1),
        ).to_dict()

        assert data["daily"] == {"restingHR": 55}
        assert data["workout"]["programId"] == "p1"
        assert data["workout"]["dayNumber"] == 1
        assert "lastModified" in data

    def test_zero_is_recorded(self):
        """Test a zero value is kept, unlike a missing one."""
        assert DailyLog(calories=0).to_dict() == {"calories": 0}
        assert DailyLog.from_dict({"calories": 0}).calories == 0

    def test_flat_circumferences_are_nested(self):
        """Test early top-level circumferences move under circumferences."""
        body = BodyMeasurements.from_dict({"bodyFat": 20, "waist": 86, "hips": 100})

        assert body.circumferences == {"waist": 86, "hips": 100}
        assert body.body_fat == 20

    def test_nested_circumference_wins(self):
        """Test an existing nested value is not overwritten by a flat one."""
        body = BodyMeasurements.from_dict({"waist": 90, "circumferences": {"waist": 86}})
        assert body.circumferences == {"waist": 86}

    def test_unknown_keys_dropped(self):
        """Test fields outside the schema are ignored."""
        body = BodyMeasurements.from_dict({"circumferences": {"waist": 86, "tail": 3}})
        assert body.circumferences == {"waist": 86}

    def test_missing_date_rejected(self):
        """Test a record without a date cannot be loaded."""
        with pytest.raises(ValueError):
            Journal.from_dict({"daily": {"weight": 80}})

    def test_non_canonical_date_rejected(self):
        """Test journal keys must be YYYY-MM-DD."""
        with pytest.raises(ValueError):
            Journal.from_dict({"date": "2024-3-9", "notes": "x"})

    def test_has_data(self):
        """Test presence checks for recorded data."""
        assert not Journal(date="2024-03-03").has_data
        assert not Journal(date="2024-03-03", workout=Workout()).has_data
        assert Journal(date="2024-03-03", daily=DailyLog()).has_data
        assert Journal(
            date="2024-03-03", workout=Workout(exercises=[WorkoutExercise(id="squat")])
        ).has_exercises

    def test_empty_shell(self):
        """Test the shell returned for dates without a record."""
        shell = Journal.empty("2024-03-03")

        assert shell.date == "2024-03-03"
        assert shell.body is None and shell.daily is None and shell.workout is None
        assert shell.last_modified is not None

    def test_exercise_matches_id_or_name(self):
        """Test exercises can be found by id or display name."""
        exercise = WorkoutExercise(id="bench", name="Bench Press")

        assert exercise.matches("bench")
        assert exercise.matches("Bench Press")
        assert not exercise.matches("squat")


class TestProgram:
    """Tests for Program model."""

    def test_round_trip(self, sample_program):
        """Test program serialization."""
        data = sample_program.to_dict()

        assert data["days"][0] == {"exercises": ["squat", "bench", "row"]}
        assert Program.from_dict(data) == sample_program

    def test_bare_list_days(self):
        """Test days stored as bare lists of ids."""
        program = Program.from_dict({"id": "p1", "name": "Old", "days": [["a", "b", "c"]]})
        assert program.days == [ProgramDay(exercises=["a", "b", "c"])]

    def test_legacy_day_count(self):
        """Test programs that only stored a day count."""
        program = Program.from_dict({"id": "p1", "name": "Old", "dayCount": 4})

        assert program.days == []
        assert program.day_count == 4
        assert program.to_dict()["dayCount"] == 4

    def test_get_day(self, sample_program):
        """Test 1-based day lookup."""
        assert sample_program.get_day(1).exercises[0] == "squat"
        assert sample_program.get_day(3).exercises[0] == "lunge"
        assert sample_program.get_day(0) is None
        assert sample_program.get_day(4) is None

    def test_missing_id_rejected(self):
        """Test a program record needs an id."""
        with pytest.raises(ValueError):
            Program.from_dict({"name": "No id"})

    def test_summary(self, sample_program):
        """Test the readable summary lists every day."""
        summary = sample_program.get_summary()

        assert "Full Body (3 days)" in summary
        assert "Day 2: deadlift, ohp, pullup" in summary


class TestGoal:
    """Tests for Goal model and metric table."""

    def test_metric_config(self):
        """Test tracking configuration comes from the metric."""
        goal = Goal(metric="protein", target=150, direction=GoalDirection.INCREASE)

        assert goal.source == MetricSource.DAILY
        assert goal.tracking_mode == TrackingMode.ROLLING_AVERAGE
        assert goal.type == GoalType.HABIT

    def test_derived_metric(self):
        """Test waist-to-height is derived."""
        assert get_goal_metric("waistToHeight").tracking_mode == TrackingMode.DERIVED
        assert get_goal_metric("weight").tracking_mode == TrackingMode.POINT_IN_TIME

    def test_unknown_metric_rejected(self):
        """Test goals can only track known metrics."""
        with pytest.raises(ValueError):
            Goal(metric="happiness", target=10, direction=GoalDirection.INCREASE)

    def test_stored_tracking_mode_ignored(self):
        """Test stored derived fields don't override the metric table."""
        goal = Goal.from_dict({
            "id": "g1",
            "metric": "protein",
            "target": 150,
            "direction": "increase",
            "trackingMode": "point-in-time",
            "source": "body",
        })

        assert goal.tracking_mode == TrackingMode.ROLLING_AVERAGE
        assert goal.source == MetricSource.DAILY

    def test_round_trip(self):
        """Test goal serialization."""
        goal = Goal(
            metric="waist",
            target=80,
            direction=GoalDirection.DECREASE,
            deadline="2024-12-31",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        data = goal.to_dict()

        assert data["type"] == "body"
        assert data["trackingMode"] == "point-in-time"
        assert data["completedAt"] is None
        assert Goal.from_dict(data) == goal
        assert not goal.is_completed

    def test_direction_symbols(self):
        """Test each direction has a display symbol."""
        assert {d.symbol for d in GoalDirection} == {"↑", "↓", "↔"}


class TestUserProfile:
    """Tests for UserProfile model."""

    def test_round_trip(self, sample_profile):
        """Test profile serialization."""
        data = sample_profile.to_dict()

        assert data["id"] == "user"
        assert data["birthDate"] == "1990-06-15"
        assert data["unitPreference"] == "metric"
        assert UserProfile.from_dict(data) == sample_profile

    def test_defaults(self):
        """Test the default profile."""
        profile = UserProfile.from_dict({"id": "user"})

        assert profile.unit_preference == UnitPreference.METRIC
        assert profile.height is None
        assert not profile.is_saved

    def test_age(self, sample_profile):
        """Test age in whole years."""
        assert sample_profile.age(date(2024, 6, 14)) == 33
        assert sample_profile.age(date(2024, 6, 15)) == 34
        assert UserProfile().age() is None

    def test_sex_enum(self):
        """Test sex is parsed into the enum."""
        assert UserProfile.from_dict({"sex": "female"}).sex == Sex.FEMALE


class TestVolumeRecommendations:
    """Tests for age-based volume guidance."""

    def test_adult(self):
        """Test guidance under 60."""
        volume = volume_recommendations(30)

        assert volume.age_group == "adult"
        assert (volume.maintenance.min, volume.maintenance.max) == (3, 6)

    def test_older_adult(self):
        """Test guidance from 60 needs more maintenance volume."""
        volume = volume_recommendations(60)

        assert volume.age_group == "older-adult"
        assert (volume.maintenance.min, volume.maintenance.max) == (6, 10)

    def test_unknown_age(self):
        """Test guidance without an age."""
        assert volume_recommendations(None).age_group == "adult"
