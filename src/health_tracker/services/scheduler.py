"""Program day rotation.

The next day of a program is always recomputed from the workout history;
there is no stored cursor. Overriding today's suggested day therefore never
changes how later suggestions are derived.
"""

from collections.abc import Iterable
from pathlib import Path

from ..db.repositories import JournalRepository, ProgramRepository
from ..models.journal import Journal
from ..models.program import Program
from ..utils.dates import today_iso


def next_day_number(
    program: Program, journals: Iterable[Journal], today: str | None = None
) -> int:
    """Suggest the next day number (1-based) for a program.

    Args:
        program: The program being followed
        journals: Workout history in any order
        today: Entries on or after this date are ignored (defaults to today)

    Returns:
        The day after the most recently logged day for this program,
        wrapping to 1; 1 when there is no history.
    """
    day_count = program.day_count
    if day_count == 0:
        return 1

    today = today or today_iso()
    history = sorted(
        (j for j in journals if j.date < today), key=lambda j: j.date, reverse=True
    )
    for journal in history:
        workout = journal.workout
        if workout and workout.program_id == program.id and workout.day_number is not None:
            return (workout.day_number % day_count) + 1

    return 1


def most_recent_workout(
    journals: Iterable[Journal],
    program_id: str | None = None,
    day_number: int | None = None,
) -> Journal | None:
    """Find the latest logged workout to prefill a session from.

    Prefers the same program and day, then the same program, then any
    workout. ``journals`` must be ordered newest first.
    """
    workouts = [j for j in journals if j.has_exercises]

    if program_id and day_number:
        for journal in workouts:
            if (
                journal.workout.program_id == program_id
                and journal.workout.day_number == day_number
            ):
                return journal

    if program_id:
        for journal in workouts:
            if journal.workout.program_id == program_id:
                return journal

    return workouts[0] if workouts else None


class ProgramScheduler:
    """Day rotation backed by the record store."""

    def __init__(
        self,
        db_path: Path | None = None,
        journals: JournalRepository | None = None,
        programs: ProgramRepository | None = None,
    ):
        self.journals = journals or JournalRepository(db_path)
        self.programs = programs or ProgramRepository(db_path)

    async def next_day(self, program_id: str | None, today: str | None = None) -> int | None:
        """Suggest the next day for a stored program.

        Returns None without a program id and 1 for an unknown program.
        """
        if not program_id:
            return None
        program = await self.programs.get(program_id)
        if program is None:
            return 1
        history = await self.journals.list_recent(today=today)
        return next_day_number(program, history, today)

    async def previous_session(
        self, program_id: str | None = None, day_number: int | None = None
    ) -> Journal | None:
        history = await self.journals.list_recent()
        return most_recent_workout(history, program_id, day_number)
