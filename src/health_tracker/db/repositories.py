"""Data access layer for health-tracker.

Repositories turn store documents into models. Reads that hit a storage
error log it and return a safe default; writes log and re-raise.
"""

import calendar
from pathlib import Path

import structlog

from ..errors import StorageError
from ..models.goal import Goal, GoalDirection
from ..models.journal import Journal
from ..models.program import Program, ProgramDay
from ..models.user_profile import PROFILE_KEY, UserProfile
from ..utils.dates import today_iso, utcnow
from ..validation import validate_date, validate_program
from .settings_store import ActiveProgramSetting
from .store import RecordKind, RecordStore

logger = structlog.get_logger()


class JournalRepository:
    """Repository for daily journals."""

    def __init__(self, db_path: Path | None = None, store: RecordStore | None = None):
        self.store = store or RecordStore(db_path)

    async def get_for_date(self, date: str) -> Journal:
        """Get the journal for a date, or an empty shell if none is stored."""
        try:
            record = await self.store.get_by_key(RecordKind.JOURNALS, date)
        except StorageError as e:
            logger.error("Failed to get journal", date=date, error=str(e))
            record = None
        if record:
            return Journal.from_dict(record)
        return Journal.empty(date)

    async def save(self, journal: Journal) -> Journal:
        """Create or replace the journal for its date."""
        validate_date(journal.date)
        journal.last_modified = utcnow()
        try:
            await self.store.put(RecordKind.JOURNALS, journal.to_dict())
        except StorageError as e:
            logger.error("Failed to save journal", date=journal.date, error=str(e))
            raise
        return journal

    async def delete(self, date: str) -> None:
        try:
            await self.store.delete(RecordKind.JOURNALS, date)
        except StorageError as e:
            logger.error("Failed to delete journal", date=date, error=str(e))
            raise

    async def list_all(self) -> list[Journal]:
        """List every journal, oldest first."""
        try:
            records = await self.store.get_all(RecordKind.JOURNALS)
        except StorageError as e:
            logger.error("Failed to get journals", error=str(e))
            return []
        return [Journal.from_dict(r) for r in records]

    async def list_recent(
        self, include_today: bool = False, today: str | None = None
    ) -> list[Journal]:
        """List journals up to today, newest first.

        Args:
            include_today: Include today's entry; by default only strictly
                earlier dates are returned
            today: Override for today's date (YYYY-MM-DD)
        """
        today = today or today_iso()
        journals = await self.list_all()
        if include_today:
            journals = [j for j in journals if j.date <= today]
        else:
            journals = [j for j in journals if j.date < today]
        return sorted(journals, key=lambda j: j.date, reverse=True)

    async def dates_in_month(self, year: int, month: int) -> list[str]:
        """Get the dates in a month that have a journal."""
        last_day = calendar.monthrange(year, month)[1]
        start = f"{year:04d}-{month:02d}-01"
        end = f"{year:04d}-{month:02d}-{last_day:02d}"
        journals = await self.list_all()
        return [j.date for j in journals if start <= j.date <= end]


class ProgramRepository:
    """Repository for training programs."""

    def __init__(
        self,
        db_path: Path | None = None,
        store: RecordStore | None = None,
        active: ActiveProgramSetting | None = None,
    ):
        self.store = store or RecordStore(db_path)
        self.active = active or ActiveProgramSetting()

    async def create(self, name: str, days: list[ProgramDay]) -> Program:
        """Validate and create a new program."""
        validate_program(name, days)
        program = Program(name=name.strip(), days=days, created_at=utcnow())
        try:
            await self.store.add(RecordKind.PROGRAMS, program.to_dict())
        except StorageError as e:
            logger.error("Failed to create program", name=program.name, error=str(e))
            raise
        return program

    async def get(self, program_id: str) -> Program | None:
        """Get a program by ID."""
        try:
            record = await self.store.get_by_key(RecordKind.PROGRAMS, program_id)
        except StorageError as e:
            logger.error("Failed to get program", program_id=program_id, error=str(e))
            return None
        return Program.from_dict(record) if record else None

    async def list_all(self) -> list[Program]:
        """List all programs, newest first."""
        try:
            records = await self.store.get_all(RecordKind.PROGRAMS)
        except StorageError as e:
            logger.error("Failed to get programs", error=str(e))
            return []
        programs = [Program.from_dict(r) for r in records]
        return sorted(programs, key=lambda p: p.created_at or utcnow(), reverse=True)

    async def update(self, program_id: str, name: str, days: list[ProgramDay]) -> None:
        """Replace a program's name and days."""
        validate_program(name, days)
        try:
            await self.store.update(
                RecordKind.PROGRAMS,
                program_id,
                {"name": name.strip(), "days": [day.to_dict() for day in days]},
            )
        except StorageError as e:
            logger.error("Failed to update program", program_id=program_id, error=str(e))
            raise

    async def delete(self, program_id: str) -> None:
        """Delete a program, clearing the active pointer if it referenced it."""
        try:
            await self.store.delete(RecordKind.PROGRAMS, program_id)
        except StorageError as e:
            logger.error("Failed to delete program", program_id=program_id, error=str(e))
            raise
        if self.active.get() == program_id:
            self.active.clear()

    async def get_active(self) -> Program | None:
        program_id = self.active.get()
        if not program_id:
            return None
        return await self.get(program_id)

    def set_active(self, program_id: str | None) -> None:
        self.active.set(program_id)


class GoalRepository:
    """Repository for goals."""

    def __init__(self, db_path: Path | None = None, store: RecordStore | None = None):
        self.store = store or RecordStore(db_path)

    async def create(
        self,
        metric: str,
        target: float,
        direction: GoalDirection,
        deadline: str | None = None,
    ) -> Goal:
        """Create a new goal. Its source and tracking mode follow the metric."""
        validate_date(deadline, "deadline")
        goal = Goal(
            metric=metric,
            target=float(target),
            direction=GoalDirection(direction),
            deadline=deadline or None,
            created_at=utcnow(),
        )
        try:
            await self.store.add(RecordKind.GOALS, goal.to_dict())
        except StorageError as e:
            logger.error("Failed to create goal", metric=metric, error=str(e))
            raise
        return goal

    async def get(self, goal_id: str) -> Goal | None:
        try:
            record = await self.store.get_by_key(RecordKind.GOALS, goal_id)
        except StorageError as e:
            logger.error("Failed to get goal", goal_id=goal_id, error=str(e))
            return None
        return Goal.from_dict(record) if record else None

    async def list_all(self) -> list[Goal]:
        try:
            records = await self.store.get_all(RecordKind.GOALS)
        except StorageError as e:
            logger.error("Failed to get goals", error=str(e))
            return []
        return [Goal.from_dict(r) for r in records]

    async def list_active(self) -> list[Goal]:
        return [g for g in await self.list_all() if not g.is_completed]

    async def list_completed(self) -> list[Goal]:
        return [g for g in await self.list_all() if g.is_completed]

    async def complete(self, goal_id: str) -> None:
        await self._set_completed_at(goal_id, utcnow().isoformat())

    async def reopen(self, goal_id: str) -> None:
        await self._set_completed_at(goal_id, None)

    async def _set_completed_at(self, goal_id: str, value: str | None) -> None:
        try:
            await self.store.update(RecordKind.GOALS, goal_id, {"completedAt": value})
        except StorageError as e:
            logger.error("Failed to update goal", goal_id=goal_id, error=str(e))
            raise

    async def delete(self, goal_id: str) -> None:
        try:
            await self.store.delete(RecordKind.GOALS, goal_id)
        except StorageError as e:
            logger.error("Failed to delete goal", goal_id=goal_id, error=str(e))
            raise


class ProfileRepository:
    """Repository for the single user profile."""

    def __init__(self, db_path: Path | None = None, store: RecordStore | None = None):
        self.store = store or RecordStore(db_path)

    async def get(self) -> UserProfile:
        """Get the profile, or the default profile if none is saved."""
        try:
            record = await self.store.get_by_key(RecordKind.PROFILE, PROFILE_KEY)
        except StorageError as e:
            logger.error("Failed to get profile", error=str(e))
            return UserProfile()
        return UserProfile.from_dict(record) if record else UserProfile()

    async def save(self, profile: UserProfile) -> UserProfile:
        """Create or replace the profile."""
        validate_date(profile.birth_date, "birth date")
        profile.updated_at = utcnow()
        try:
            await self.store.put(RecordKind.PROFILE, profile.to_dict())
        except StorageError as e:
            logger.error("Failed to save profile", error=str(e))
            raise
        return profile
