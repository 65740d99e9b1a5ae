"""Database layer for health-tracker."""

from .engine import MIGRATIONS, SCHEMA_VERSION, get_db_path, init_db, run_migrations
from .repositories import (
    GoalRepository,
    JournalRepository,
    ProfileRepository,
    ProgramRepository,
)
from .settings_store import ActiveProgramSetting
from .store import RecordKind, RecordStore

__all__ = [
    "ActiveProgramSetting",
    "get_db_path",
    "GoalRepository",
    "init_db",
    "JournalRepository",
    "MIGRATIONS",
    "ProfileRepository",
    "ProgramRepository",
    "RecordKind",
    "RecordStore",
    "run_migrations",
    "SCHEMA_VERSION",
]
