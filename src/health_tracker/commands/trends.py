"""Trend and statistics commands."""

import click

from ..config import get_settings
from ..db import JournalRepository
from ..services.metrics import BODY, DAILY, DAILY_FIELDS
from ..services.stats import calculate_stats
from ..services.trends import (
    SeriesPoint,
    chart_series,
    chart_summary,
    exercise_load_series,
    exercises_in_period,
    linear_trend,
)
from ..utils.units import CIRCUMFERENCE_FIELDS, format_value
from .base import (
    async_command,
    date_param,
    echo_info,
    ensure_initialized,
    format_table,
    get_unit_preference,
)

BODY_FIELDS = ("bodyFat", *CIRCUMFERENCE_FIELDS)


def days_option(f):
    f = click.option("--all", "all_days", is_flag=True, help="Use the whole history")(f)
    f = click.option("--days", type=int, default=None, help="Window length in days")(f)
    f = click.option(
        "--end", default=None, callback=date_param, help="Last date of the window (default: today)"
    )(f)
    return f


def window(days: int | None, all_days: bool) -> int | None:
    if all_days:
        return None
    return days if days is not None else get_settings().chart_days


def echo_series(series: list[SeriesPoint], field: str, preference: str) -> None:
    trend = linear_trend(series)
    rows = []
    for i, point in enumerate(series):
        fitted = trend.at(i) if trend else None
        rows.append([
            point.date,
            format_value(point.value, field, preference),
            format_value(fitted, field, preference),
        ])
    click.echo(format_table(["Date", "Value", "Trend"], rows))

    summary = chart_summary(series)
    if summary:
        click.echo()
        click.echo(
            f"Start {format_value(summary.start, field, preference)}, "
            f"end {format_value(summary.end, field, preference)}, "
            f"change {summary.change_percent:+.1f}%"
        )


@click.group()
@click.pass_context
def trends(ctx):
    """Charts, trends and statistics over your journals."""
    ensure_initialized(ctx)


@trends.command()
@click.argument("field", type=click.Choice([*DAILY_FIELDS, *BODY_FIELDS]))
@click.option("--category", type=click.Choice([BODY, DAILY]), default=None)
@days_option
@async_command
async def series(field: str, category: str | None, days: int | None, all_days: bool, end: str | None):
    """Show the recorded values of FIELD over a window."""
    if category is None:
        category = BODY if field in BODY_FIELDS else DAILY
    preference = (await get_unit_preference()).value
    journals = await JournalRepository().list_all()

    points = chart_series(journals, field, category, window(days, all_days), end)
    if not points:
        echo_info(f"No {field} data in this period")
        return
    echo_series(points, field, preference)


@trends.command()
@click.argument("exercise")
@days_option
@async_command
async def exercise(exercise: str, days: int | None, all_days: bool, end: str | None):
    """Show average weight per rep for EXERCISE (id or name)."""
    preference = (await get_unit_preference()).value
    journals = await JournalRepository().list_all()

    points = exercise_load_series(journals, exercise, window(days, all_days), end)
    if not points:
        echo_info(f"No sets logged for {exercise} in this period")
        return
    echo_series(points, "weight", preference)


@trends.command()
@click.option("--days", type=int, default=30, help="Window length in days")
@click.option(
    "--end", default=None, callback=date_param, help="Last date of the window (default: today)"
)
@async_command
async def exercises(days: int, end: str | None):
    """List the exercises logged recently."""
    journals = await JournalRepository().list_all()
    found = exercises_in_period(journals, days, end)
    if not found:
        echo_info("No exercises logged in this period")
        return
    click.echo(format_table(["ID", "Name"], [[ex["id"], ex["name"]] for ex in found]))


@trends.command()
@async_command
async def stats():
    """Show tracking totals, streak and 30-day averages."""
    preference = (await get_unit_preference()).value
    result = calculate_stats(await JournalRepository().list_all())

    click.echo(f"Days tracked:   {result.days_tracked}")
    click.echo(f"Workouts:       {result.total_workouts}")
    click.echo(f"Current streak: {result.current_streak} day(s)")
    click.echo(f"Avg calories:   {format_value(result.avg_calories, 'calories', preference)}")
    click.echo(f"Avg protein:    {format_value(result.avg_protein, 'protein', preference, 0)}")
    click.echo(f"Avg sleep:      {format_value(result.avg_sleep, 'sleep', preference)}")
