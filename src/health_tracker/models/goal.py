"""Goal data models and the fixed metric table."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

from ..utils.dates import format_timestamp, parse_timestamp


class GoalDirection(str, Enum):
    """Desired trend for a goal's metric."""

    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"

    @property
    def symbol(self) -> str:
        return {"increase": "↑", "decrease": "↓", "maintain": "↔"}[self.value]


class MetricSource(str, Enum):
    """Journal sub-document a metric is read from."""

    BODY = "body"
    DAILY = "daily"


class TrackingMode(str, Enum):
    """How a goal's current value is computed."""

    POINT_IN_TIME = "point-in-time"  # most recent recorded value
    ROLLING_AVERAGE = "30-day-average"  # mean over the recent window
    DERIVED = "derived"  # computed from other metrics


class GoalType(str, Enum):
    BODY = "body"
    HABIT = "habit"


@dataclass(frozen=True)
class GoalMetric:
    """Fixed tracking configuration of a goal metric."""

    source: MetricSource
    tracking_mode: TrackingMode
    type: GoalType
    label: str


GOAL_METRICS: dict[str, GoalMetric] = {
    "weight": GoalMetric(MetricSource.DAILY, TrackingMode.POINT_IN_TIME, GoalType.BODY, "Weight"),
    "bodyFat": GoalMetric(MetricSource.BODY, TrackingMode.POINT_IN_TIME, GoalType.BODY, "Body fat"),
    "waist": GoalMetric(MetricSource.BODY, TrackingMode.POINT_IN_TIME, GoalType.BODY, "Waist"),
    "waistToHeight": GoalMetric(
        MetricSource.BODY, TrackingMode.DERIVED, GoalType.BODY, "Waist-to-height"
    ),
    "restingHR": GoalMetric(
        MetricSource.DAILY, TrackingMode.ROLLING_AVERAGE, GoalType.BODY, "Resting HR"
    ),
    "calories": GoalMetric(
        MetricSource.DAILY, TrackingMode.ROLLING_AVERAGE, GoalType.HABIT, "Calories"
    ),
    "protein": GoalMetric(MetricSource.DAILY, TrackingMode.ROLLING_AVERAGE, GoalType.HABIT, "Protein"),
    "fibre": GoalMetric(MetricSource.DAILY, TrackingMode.ROLLING_AVERAGE, GoalType.HABIT, "Fibre"),
    "water": GoalMetric(MetricSource.DAILY, TrackingMode.ROLLING_AVERAGE, GoalType.HABIT, "Water"),
    "steps": GoalMetric(MetricSource.DAILY, TrackingMode.ROLLING_AVERAGE, GoalType.HABIT, "Steps"),
    "sleep": GoalMetric(MetricSource.DAILY, TrackingMode.ROLLING_AVERAGE, GoalType.HABIT, "Sleep"),
    "recovery": GoalMetric(
        MetricSource.DAILY, TrackingMode.ROLLING_AVERAGE, GoalType.HABIT, "Recovery"
    ),
}


def get_goal_metric(metric: str) -> GoalMetric:
    """Look up a goal metric, raising ValueError for unknown metrics."""
    try:
        return GOAL_METRICS[metric]
    except KeyError:
        raise ValueError(f"Unknown goal metric: {metric}") from None


@dataclass
class Goal:
    """A numeric target for one metric.

    ``source``, ``tracking_mode`` and ``type`` are looked up from ``metric``
    and can't be set per goal.
    """

    metric: str
    target: float
    direction: GoalDirection
    deadline: str | None = None  # YYYY-MM-DD
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime | None = None
    completed_at: datetime | None = None

    def __post_init__(self):
        get_goal_metric(self.metric)

    @property
    def config(self) -> GoalMetric:
        return GOAL_METRICS[self.metric]

    @property
    def source(self) -> MetricSource:
        return self.config.source

    @property
    def tracking_mode(self) -> TrackingMode:
        return self.config.tracking_mode

    @property
    def type(self) -> GoalType:
        return self.config.type

    @property
    def label(self) -> str:
        return self.config.label

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "type": self.type.value,
            "metric": self.metric,
            "source": self.source.value,
            "trackingMode": self.tracking_mode.value,
            "target": self.target,
            "direction": self.direction.value,
            "deadline": self.deadline,
            "createdAt": format_timestamp(self.created_at),
            "completedAt": format_timestamp(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        """Create from dictionary.

        Stored ``type``/``source``/``trackingMode`` values are ignored in
        favour of the metric table.
        """
        if not data.get("id"):
            raise ValueError("Goal record has no id")
        return cls(
            id=str(data["id"]),
            metric=data["metric"],
            target=float(data["target"]),
            direction=GoalDirection(data.get("direction", "maintain")),
            deadline=data.get("deadline") or None,
            created_at=parse_timestamp(data.get("createdAt")),
            completed_at=parse_timestamp(data.get("completedAt")),
        )
