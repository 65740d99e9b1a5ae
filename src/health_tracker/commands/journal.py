"""Daily journal commands."""

import click

from ..db import JournalRepository, ProgramRepository
from ..errors import StorageError, ValidationError
from ..models.journal import BodyMeasurements, DailyLog, Journal, Workout, WorkoutExercise, WorkoutSet
from ..services.metrics import DAILY_FIELDS, daily_completion
from ..services.scheduler import ProgramScheduler
from ..utils.dates import today_iso
from ..utils.units import CIRCUMFERENCE_FIELDS, format_value, from_input
from ..validation import validate_measurements
from .base import (
    async_command,
    date_param,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    get_unit_preference,
)

DAILY_OPTIONS = {
    "weight": "weight",
    "resting_hr": "restingHR",
    "calories": "calories",
    "protein": "protein",
    "fibre": "fibre",
    "water": "water",
    "steps": "steps",
    "sleep": "sleep",
    "recovery": "recovery",
}


def parse_measures(measures: tuple[str, ...]) -> dict[str, str]:
    """Parse ``NAME=VALUE`` pairs for circumference fields."""
    raw = {}
    for item in measures:
        name, sep, value = item.partition("=")
        if not sep or name not in CIRCUMFERENCE_FIELDS:
            raise ValidationError(
                f"Invalid measurement '{item}'. Use NAME=VALUE with NAME one of: "
                + ", ".join(CIRCUMFERENCE_FIELDS)
            )
        raw[name] = value
    return raw


def parse_exercise(text: str, preference: str) -> WorkoutExercise:
    """Parse ``ID:REPSxWEIGHT,REPSxWEIGHT`` into a logged exercise."""
    exercise_id, _, sets_text = text.partition(":")
    exercise_id = exercise_id.strip()
    if not exercise_id:
        raise ValidationError(f"Invalid exercise '{text}'")

    sets = []
    for item in filter(None, (s.strip() for s in sets_text.split(","))):
        reps, _, weight = item.partition("x")
        parsed = validate_measurements({"reps": reps, "weight": weight}, ("reps", "weight"))
        if "reps" not in parsed:
            raise ValidationError(f"Invalid set '{item}' for {exercise_id}")
        sets.append(
            WorkoutSet(
                reps=int(parsed["reps"]),
                weight=from_input(parsed.get("weight"), "weight", preference),
            )
        )
    return WorkoutExercise(id=exercise_id, name=exercise_id, sets=sets)


@click.group()
@click.pass_context
def journal(ctx):
    """Record and review daily journals.

    Each calendar date has one journal holding body measurements, daily
    tracking numbers, a workout and free-form notes.
    """
    ensure_initialized(ctx)


@journal.command()
@click.argument("date", required=False, callback=date_param)
@async_command
async def show(date: str | None):
    """Show the journal for DATE (default: today)."""
    date = date or today_iso()
    entry = await JournalRepository().get_for_date(date)
    preference = await get_unit_preference()

    click.echo()
    click.echo(click.style(f"Journal for {date}", bold=True))
    click.echo("=" * 40)

    if not entry.has_data and not entry.notes:
        echo_info("Nothing recorded for this date")
        return

    if entry.body:
        click.echo("\nBody:")
        click.echo(f"  Body fat: {format_value(entry.body.body_fat, 'bodyFat', preference)}")
        for name, value in entry.body.circumferences.items():
            click.echo(f"  {name}: {format_value(value, name, preference)}")

    if entry.daily:
        click.echo(f"\nDaily ({daily_completion(entry)}% complete):")
        for name in DAILY_FIELDS:
            value = entry.daily.get(name)
            if value is not None:
                click.echo(f"  {name}: {format_value(value, name, preference)}")

    if entry.has_exercises:
        workout = entry.workout
        header = "\nWorkout"
        if workout.day_number:
            header += f" (day {workout.day_number})"
        click.echo(header + ":")
        rows = []
        for ex in workout.exercises:
            for number, logged in enumerate(ex.sets, start=1):
                rows.append([
                    ex.name or ex.id,
                    str(number),
                    str(logged.reps if logged.reps is not None else "--"),
                    format_value(logged.weight, "weight", preference),
                ])
        click.echo(format_table(["Exercise", "Set", "Reps", "Weight"], rows))

    if entry.notes:
        click.echo(f"\nNotes: {entry.notes}")


@journal.command()
@click.option(
    "--date", "-d", default=None, callback=date_param, help="Date (YYYY-MM-DD, default: today)"
)
@click.option("--body-fat", default=None, help="Body fat percentage")
@click.option(
    "--measure", "-m", multiple=True, help="Circumference as NAME=VALUE (repeatable)"
)
@click.pass_context
@async_command
async def body(ctx, date: str | None, body_fat: str | None, measure: tuple[str, ...]):
    """Record body measurements.

    Circumferences are entered in your preferred units (cm or in).

    Example:

        health-tracker journal body --body-fat 18.5 -m waist=86 -m neck=38
    """
    preference = await get_unit_preference()
    try:
        circumferences = validate_measurements(parse_measures(measure), CIRCUMFERENCE_FIELDS)
        values = validate_measurements({"bodyFat": body_fat}, ("bodyFat",))
    except ValidationError as e:
        echo_error(str(e))
        ctx.exit(1)

    if not circumferences and not values:
        echo_info("Nothing to record")
        return

    repo = JournalRepository()
    entry = await repo.get_for_date(date or today_iso())
    entry.body = entry.body or BodyMeasurements()
    if "bodyFat" in values:
        entry.body.body_fat = values["bodyFat"]
    for name, value in circumferences.items():
        entry.body.circumferences[name] = from_input(value, name, preference)

    await _save(ctx, repo, entry)
    echo_success(f"Body measurements saved for {entry.date}")


@journal.command()
@click.option(
    "--date", "-d", default=None, callback=date_param, help="Date (YYYY-MM-DD, default: today)"
)
@click.option("--weight", default=None, help="Body weight (kg or lbs)")
@click.option("--resting-hr", default=None, help="Resting heart rate (bpm)")
@click.option("--calories", default=None, help="Calories (kcal)")
@click.option("--protein", default=None, help="Protein (g)")
@click.option("--fibre", default=None, help="Fibre (g)")
@click.option("--water", default=None, help="Water (L or fl oz)")
@click.option("--steps", default=None, help="Step count")
@click.option("--sleep", default=None, help="Sleep (hours)")
@click.option("--recovery", default=None, help="Recovery score (1-10)")
@click.pass_context
@async_command
async def daily(ctx, date: str | None, **options):
    """Record daily tracking numbers.

    Only the given fields change; zero is recorded as a value.
    """
    preference = await get_unit_preference()
    raw = {DAILY_OPTIONS[k]: v for k, v in options.items()}
    try:
        values = validate_measurements(raw, DAILY_FIELDS)
    except ValidationError as e:
        echo_error(str(e))
        ctx.exit(1)

    if not values:
        echo_info("Nothing to record")
        return

    repo = JournalRepository()
    entry = await repo.get_for_date(date or today_iso())
    entry.daily = entry.daily or DailyLog()
    for name, value in values.items():
        value = from_input(value, name, preference)
        if name == "steps":
            value = int(value)
        setattr(entry.daily, DailyLog.FIELDS[name], value)

    await _save(ctx, repo, entry)
    echo_success(
        f"Daily log saved for {entry.date} ({daily_completion(entry)}% complete)"
    )


@journal.command()
@click.option(
    "--date", "-d", default=None, callback=date_param, help="Date (YYYY-MM-DD, default: today)"
)
@click.option("--program", "program_id", default=None, help="Program ID (default: active)")
@click.option("--day", "day_number", type=int, default=None, help="Program day (default: next)")
@click.option(
    "--exercise",
    "-e",
    "exercises",
    multiple=True,
    help="Exercise as ID:REPSxWEIGHT,REPSxWEIGHT (repeatable)",
)
@click.option("--from-last", is_flag=True, help="Copy sets from the last matching session")
@click.pass_context
@async_command
async def workout(
    ctx,
    date: str | None,
    program_id: str | None,
    day_number: int | None,
    exercises: tuple[str, ...],
    from_last: bool,
):
    """Log a workout.

    Without --day the next day of the program rotation is used.

    Example:

        health-tracker journal workout -e bench:5x100,5x100 -e row:8x60
    """
    date = date or today_iso()
    preference = await get_unit_preference()
    programs = ProgramRepository()

    if program_id is None:
        active = await programs.get_active()
        program_id = active.id if active else None
        if program_id is None:
            echo_warning("No active program; the workout won't be linked to a program day")
    elif await programs.get(program_id) is None:
        echo_error(f"Program {program_id} not found")
        ctx.exit(1)

    scheduler = ProgramScheduler(programs=programs)
    if program_id and day_number is None:
        day_number = await scheduler.next_day(program_id, today=date)

    try:
        logged = [parse_exercise(text, preference) for text in exercises]
    except ValidationError as e:
        echo_error(str(e))
        ctx.exit(1)

    if from_last and not logged:
        previous = await scheduler.previous_session(program_id, day_number)
        if previous is None:
            echo_error("No previous workout to copy")
            ctx.exit(1)
        logged = previous.workout.exercises
        echo_info(f"Copied {len(logged)} exercise(s) from {previous.date}")

    if not logged:
        echo_error("No exercises given. Use --exercise or --from-last")
        ctx.exit(1)

    repo = JournalRepository()
    entry = await repo.get_for_date(date)
    entry.workout = Workout(program_id=program_id, day_number=day_number, exercises=logged)
    await _save(ctx, repo, entry)

    message = f"Workout saved for {date}"
    if day_number:
        message += f" (day {day_number})"
    echo_success(message)


@journal.command()
@click.argument("text")
@click.option(
    "--date", "-d", default=None, callback=date_param, help="Date (YYYY-MM-DD, default: today)"
)
@click.pass_context
@async_command
async def notes(ctx, text: str, date: str | None):
    """Set the notes for a day."""
    repo = JournalRepository()
    entry = await repo.get_for_date(date or today_iso())
    entry.notes = text.strip() or None
    await _save(ctx, repo, entry)
    echo_success(f"Notes saved for {entry.date}")


@journal.command(name="month")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@async_command
async def month_dates(year: int, month: int):
    """List the dates in a month that have a journal."""
    dates = await JournalRepository().dates_in_month(year, month)
    if not dates:
        echo_info(f"No journals in {year:04d}-{month:02d}")
        return
    for date in dates:
        click.echo(date)


@journal.command()
@click.argument("date", callback=date_param)
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@async_command
async def delete(date: str, force: bool):
    """Delete the journal for DATE."""
    if not force and not click.confirm(f"Delete the journal for {date}?"):
        echo_info("Cancelled")
        return
    await JournalRepository().delete(date)
    echo_success(f"Journal for {date} deleted")


async def _save(ctx: click.Context, repo: JournalRepository, entry: Journal) -> None:
    try:
        await repo.save(entry)
    except StorageError as e:
        echo_error(f"Could not save journal: {e}")
        ctx.exit(1)
