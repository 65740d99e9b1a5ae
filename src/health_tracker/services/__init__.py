"""Engine services: resolution, aggregation, scheduling, goals and backups."""

from .backup import BackupService
from .goals import GoalTracker
from .scheduler import ProgramScheduler

__all__ = ["BackupService", "GoalTracker", "ProgramScheduler"]
