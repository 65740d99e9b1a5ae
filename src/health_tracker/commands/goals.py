"""Goal commands."""

import click

from ..db import GoalRepository
from ..errors import StorageError
from ..models.goal import GOAL_METRICS, GoalDirection
from ..services.goals import GoalTracker
from ..utils.units import from_input
from .base import (
    async_command,
    date_param,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_unit_preference,
)


@click.group()
@click.pass_context
def goals(ctx):
    """Set and track goals.

    Body goals follow the latest measurement; habit goals follow the
    average over your recent journals. Goals that reach their target are
    completed automatically when listed.
    """
    ensure_initialized(ctx)


@goals.command()
@click.argument("metric", type=click.Choice(list(GOAL_METRICS)))
@click.argument("target", type=float)
@click.option(
    "--direction",
    type=click.Choice([d.value for d in GoalDirection]),
    default=None,
    help="Desired trend (default: decrease for body goals, increase for habits)",
)
@click.option("--deadline", default=None, callback=date_param, help="Target date (YYYY-MM-DD)")
@click.pass_context
@async_command
async def add(ctx, metric: str, target: float, direction: str | None, deadline: str | None):
    """Add a goal for METRIC with TARGET in your preferred units.

    Example:

        health-tracker goals add waist 80 --direction decrease
    """
    if direction is None:
        direction = "decrease" if GOAL_METRICS[metric].type.value == "body" else "increase"
    preference = await get_unit_preference()

    try:
        goal = await GoalRepository().create(
            metric, from_input(target, metric, preference), GoalDirection(direction), deadline
        )
    except StorageError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Goal added: {goal.label} {goal.direction.symbol} (ID: {goal.id})")


@goals.command(name="list")
@click.option("--completed", is_flag=True, help="Show completed goals instead")
@async_command
async def list_goals(completed: bool):
    """List goals with their current progress."""
    preference = await get_unit_preference()

    if completed:
        done = await GoalRepository().list_completed()
        if not done:
            echo_info("No completed goals")
            return
        rows = [
            [g.id, g.label, g.direction.value, g.completed_at.strftime("%Y-%m-%d")]
            for g in done
        ]
        click.echo(format_table(["ID", "Metric", "Direction", "Completed"], rows))
        return

    results = await GoalTracker().evaluate_all()
    if not results:
        echo_info("No active goals. Add one with 'health-tracker goals add'")
        return

    rows = []
    for result in results:
        shown = result.to_dict(preference.value)
        progress = "--" if result.progress is None else f"{result.progress:.0f}%"
        rows.append([
            result.goal.id,
            f"{shown['label']} {result.goal.direction.symbol}",
            shown["displayCurrent"],
            shown["displayTarget"],
            progress,
        ])
    click.echo(format_table(["ID", "Goal", "Current", "Target", "Progress"], rows))

    for result in results:
        if result.is_complete:
            echo_success(f"{result.goal.label} goal reached and marked complete")


@goals.command()
@click.argument("goal_id")
@click.pass_context
@async_command
async def complete(ctx, goal_id: str):
    """Mark a goal as completed."""
    repo = GoalRepository()
    if await repo.get(goal_id) is None:
        echo_error(f"Goal {goal_id} not found")
        ctx.exit(1)
    await repo.complete(goal_id)
    echo_success(f"Goal {goal_id} completed")


@goals.command()
@click.argument("goal_id")
@click.pass_context
@async_command
async def reopen(ctx, goal_id: str):
    """Reopen a completed goal."""
    repo = GoalRepository()
    if await repo.get(goal_id) is None:
        echo_error(f"Goal {goal_id} not found")
        ctx.exit(1)
    await repo.reopen(goal_id)
    echo_success(f"Goal {goal_id} reopened")


@goals.command()
@click.argument("goal_id")
@click.pass_context
@async_command
async def delete(ctx, goal_id: str):
    """Delete a goal."""
    repo = GoalRepository()
    if await repo.get(goal_id) is None:
        echo_error(f"Goal {goal_id} not found")
        ctx.exit(1)
    await repo.delete(goal_id)
    echo_success(f"Goal {goal_id} deleted")
