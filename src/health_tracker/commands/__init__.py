"""CLI commands for health-tracker."""

from .backup import backup
from .goals import goals
from .init import init
from .journal import journal
from .profile import profile
from .programs import programs
from .serve import serve
from .trends import trends

__all__ = [
    "backup",
    "goals",
    "init",
    "journal",
    "profile",
    "programs",
    "serve",
    "trends",
]
