"""Goal routes."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ...context import AppContext
from ...db import GoalRepository
from ...models.goal import GOAL_METRICS, GoalDirection
from ...services.goals import GoalTracker
from ..dependencies import get_context

router = APIRouter(prefix="/goals", tags=["goals"])


class GoalIn(BaseModel):
    metric: str
    target: float
    direction: GoalDirection
    deadline: str | None = None


@router.get("")
async def list_goals(context: AppContext = Depends(get_context)):
    """Active goals with progress. Goals reaching 100 are completed."""
    results = await GoalTracker().evaluate_all()
    return [r.to_dict(context.unit_preference.value) for r in results]


@router.get("/completed")
async def list_completed_goals():
    return [g.to_dict() for g in await GoalRepository().list_completed()]


@router.get("/metrics")
async def goal_metrics():
    """The metrics a goal can track."""
    return {
        name: {
            "label": config.label,
            "type": config.type.value,
            "source": config.source.value,
            "trackingMode": config.tracking_mode.value,
        }
        for name, config in GOAL_METRICS.items()
    }


@router.post("", status_code=201)
async def create_goal(data: GoalIn):
    if data.metric not in GOAL_METRICS:
        raise HTTPException(status_code=400, detail=f"Unknown goal metric: {data.metric}")
    goal = await GoalRepository().create(data.metric, data.target, data.direction, data.deadline)
    return goal.to_dict()


@router.get("/{goal_id}")
async def get_goal(goal_id: str, context: AppContext = Depends(get_context)):
    result = await GoalTracker().evaluate(goal_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return result.to_dict(context.unit_preference.value)


@router.post("/{goal_id}/complete")
async def complete_goal(goal_id: str):
    return await _set_completed(goal_id, True)


@router.post("/{goal_id}/reopen")
async def reopen_goal(goal_id: str):
    return await _set_completed(goal_id, False)


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(goal_id: str):
    await GoalRepository().delete(goal_id)


async def _set_completed(goal_id: str, completed: bool) -> dict:
    repo = GoalRepository()
    if await repo.get(goal_id) is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    if completed:
        await repo.complete(goal_id)
    else:
        await repo.reopen(goal_id)
    return (await repo.get(goal_id)).to_dict()
