"""Goal progress evaluation and auto-completion."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

from ..config import get_settings
from ..db.repositories import GoalRepository, JournalRepository, ProfileRepository
from ..models.goal import Goal, GoalDirection, TrackingMode
from ..models.journal import Journal
from ..models.user_profile import UserProfile
from ..utils.dates import today_iso, utcnow
from ..utils.units import format_value
from .metrics import latest_value, rolling_average, waist_to_height

logger = structlog.get_logger()

GOAL_WINDOW = 30
MAINTAIN_TOLERANCE = 0.02
COMPLETE = 100.0


@dataclass
class GoalProgress:
    """A goal together with its current value and score."""

    goal: Goal
    current: float | None
    progress: float | None

    @property
    def has_data(self) -> bool:
        return self.current is not None

    @property
    def is_complete(self) -> bool:
        return self.progress == COMPLETE

    def to_dict(self, unit_preference: str = "metric") -> dict:
        return {
            **self.goal.to_dict(),
            "label": self.goal.label,
            "current": self.current,
            "progress": self.progress,
            "displayCurrent": self._format(self.current, unit_preference),
            "displayTarget": self._format(self.goal.target, unit_preference),
        }

    def _format(self, value: float | None, unit_preference: str) -> str:
        if self.goal.metric == "waistToHeight":
            return "--" if value is None else f"{value:.2f}"
        return format_value(value, self.goal.metric, unit_preference)


def current_value(
    goal: Goal, journals: Sequence[Journal], profile: UserProfile | None = None
) -> float | None:
    """Compute a goal metric's current value.

    ``journals`` must be the most recent window, newest first.
    """
    mode = goal.tracking_mode
    if mode == TrackingMode.DERIVED:
        return waist_to_height(journals, profile)
    if mode == TrackingMode.ROLLING_AVERAGE:
        return rolling_average(journals, goal.metric, goal.source.value)
    return latest_value(journals, goal.metric, goal.source.value)


def calculate_progress(
    current: float | None, target: float, direction: GoalDirection | str
) -> float | None:
    """Score progress toward a target.

    Maintain goals get a continuous closeness score (100 within 2% of the
    target). Increase and decrease goals are 100 once the target is reached
    and None otherwise, so callers show the raw current value instead.
    """
    if current is None:
        return None

    direction = GoalDirection(direction)

    if direction == GoalDirection.MAINTAIN:
        diff = abs(current - target)
        if target == 0:
            return COMPLETE if diff == 0 else 0.0
        tolerance = abs(target) * MAINTAIN_TOLERANCE
        if diff <= tolerance:
            return COMPLETE
        return max(0.0, 100 - diff / abs(target) * 100)

    if direction == GoalDirection.DECREASE:
        return COMPLETE if current <= target else None

    return COMPLETE if current >= target else None


def evaluate_goal(
    goal: Goal, journals: Sequence[Journal], profile: UserProfile | None = None
) -> GoalProgress:
    """Evaluate one goal against a snapshot of recent journals."""
    current = current_value(goal, journals, profile)
    return GoalProgress(
        goal=goal,
        current=current,
        progress=calculate_progress(current, goal.target, goal.direction),
    )


class GoalTracker:
    """Evaluates stored goals and completes those that reach their target."""

    def __init__(
        self,
        db_path: Path | None = None,
        goals: GoalRepository | None = None,
        journals: JournalRepository | None = None,
        profiles: ProfileRepository | None = None,
        window: int | None = None,
    ):
        self.goals = goals or GoalRepository(db_path)
        self.journals = journals or JournalRepository(db_path)
        self.profiles = profiles or ProfileRepository(db_path)
        self.window = window or get_settings().goal_window or GOAL_WINDOW

    async def recent_journals(self, today: str | None = None) -> list[Journal]:
        """The most recent journals (today included), newest first."""
        journals = await self.journals.list_recent(include_today=True, today=today)
        return journals[: self.window]

    async def evaluate_all(self, today: str | None = None) -> list[GoalProgress]:
        """Evaluate every active goal.

        Goals scoring exactly 100 are marked completed as part of the
        evaluation.
        """
        goals = await self.goals.list_active()
        if not goals:
            return []

        journals = await self.recent_journals(today)
        profile = await self.profiles.get()

        results = []
        for goal in goals:
            result = evaluate_goal(goal, journals, profile)
            if result.is_complete:
                await self.goals.complete(goal.id)
                goal.completed_at = utcnow()
                logger.info("Goal completed", goal_id=goal.id, metric=goal.metric)
            results.append(result)
        return results

    async def evaluate(self, goal_id: str, today: str | None = None) -> GoalProgress | None:
        """Evaluate a single goal without completing it."""
        goal = await self.goals.get(goal_id)
        if goal is None:
            return None
        journals = await self.recent_journals(today or today_iso())
        return evaluate_goal(goal, journals, await self.profiles.get())
