"""Data models for health-tracker."""

from .goal import GOAL_METRICS, Goal, GoalDirection, MetricSource, TrackingMode
from .journal import BodyMeasurements, DailyLog, Journal, Workout, WorkoutExercise, WorkoutSet
from .program import Program, ProgramDay
from .user_profile import UnitPreference, UserProfile

__all__ = [
    "BodyMeasurements",
    "DailyLog",
    "GOAL_METRICS",
    "Goal",
    "GoalDirection",
    "Journal",
    "MetricSource",
    "Program",
    "ProgramDay",
    "TrackingMode",
    "UnitPreference",
    "UserProfile",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
]
