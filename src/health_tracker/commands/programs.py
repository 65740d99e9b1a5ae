"""Program management commands."""

import click

from ..db import JournalRepository, ProgramRepository
from ..errors import StorageError, ValidationError
from ..models.program import ProgramDay
from ..services.scheduler import ProgramScheduler
from .base import (
    async_command,
    date_param,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)


def parse_days(days: tuple[str, ...]) -> list[ProgramDay]:
    """Parse comma-separated exercise ids, one string per day."""
    return [
        ProgramDay(exercises=[ex.strip() for ex in day.split(",") if ex.strip()])
        for day in days
    ]


@click.group()
@click.pass_context
def programs(ctx):
    """Manage training programs.

    A program is an ordered list of days, each with 3-6 exercises. The
    active program drives the day suggested when logging a workout.
    """
    ensure_initialized(ctx)


@programs.command()
@click.argument("name")
@click.option(
    "--day", "days", multiple=True, help="Comma-separated exercise ids for one day (repeatable)"
)
@click.option("--activate", is_flag=True, help="Make this the active program")
@click.pass_context
@async_command
async def create(ctx, name: str, days: tuple[str, ...], activate: bool):
    """Create a program.

    Example:

        health-tracker programs create "Full Body" --day squat,bench,row --day deadlift,ohp,pullup
    """
    repo = ProgramRepository()
    try:
        program = await repo.create(name, parse_days(days))
    except (ValidationError, StorageError) as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Program '{program.name}' created (ID: {program.id})")
    if activate:
        repo.set_active(program.id)
        echo_info("Program is now active")


@programs.command(name="list")
@async_command
async def list_programs():
    """List all programs."""
    repo = ProgramRepository()
    all_programs = await repo.list_all()

    if not all_programs:
        echo_info("No programs found. Create one with 'health-tracker programs create'")
        return

    active_id = repo.active.get()
    headers = ["ID", "Name", "Days", "Created", "Active"]
    rows = []

    for prog in all_programs:
        created = prog.created_at.strftime("%Y-%m-%d") if prog.created_at else "N/A"
        rows.append([
            prog.id,
            prog.name[:30] + "..." if len(prog.name) > 30 else prog.name,
            str(prog.day_count),
            created,
            "*" if prog.id == active_id else "",
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_programs)} program(s)")


@programs.command()
@click.argument("program_id")
@click.pass_context
@async_command
async def show(ctx, program_id: str):
    """Show details of a specific program."""
    program = await ProgramRepository().get(program_id)
    if not program:
        echo_error(f"Program {program_id} not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"Program: {program.name} (ID: {program.id})")
    click.echo("=" * 60)
    click.echo(f"Created: {program.created_at}")
    click.echo()
    click.echo(program.get_summary())


@programs.command()
@click.argument("program_id")
@click.option("--name", default=None, help="New name")
@click.option("--day", "days", multiple=True, help="Replacement days (repeatable)")
@click.pass_context
@async_command
async def edit(ctx, program_id: str, name: str | None, days: tuple[str, ...]):
    """Rename a program or replace its days."""
    repo = ProgramRepository()
    program = await repo.get(program_id)
    if not program:
        echo_error(f"Program {program_id} not found")
        ctx.exit(1)

    try:
        await repo.update(
            program_id,
            name if name is not None else program.name,
            parse_days(days) if days else program.days,
        )
    except (ValidationError, StorageError) as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Program {program_id} updated")


@programs.command()
@click.argument("program_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, program_id: str, force: bool):
    """Delete a program."""
    repo = ProgramRepository()
    program = await repo.get(program_id)
    if not program:
        echo_error(f"Program {program_id} not found")
        ctx.exit(1)

    if not force:
        click.echo(f"Program: {program.name}")
        if not click.confirm("Are you sure you want to delete this program?"):
            echo_info("Cancelled")
            return

    await repo.delete(program_id)
    echo_success(f"Program {program_id} deleted")


@programs.command()
@click.argument("program_id", required=False)
@click.option("--clear", is_flag=True, help="Stop following any program")
@click.pass_context
@async_command
async def activate(ctx, program_id: str | None, clear: bool):
    """Set the program you are following."""
    repo = ProgramRepository()
    if clear:
        repo.set_active(None)
        echo_success("Active program cleared")
        return

    if not program_id:
        echo_error("Give a program ID or --clear")
        ctx.exit(1)

    program = await repo.get(program_id)
    if not program:
        echo_error(f"Program {program_id} not found")
        ctx.exit(1)

    repo.set_active(program.id)
    echo_success(f"Now following '{program.name}'")


@programs.command(name="next")
@click.option(
    "--date", "-d", default=None, callback=date_param, help="Date to suggest for (default: today)"
)
@click.pass_context
@async_command
async def next_day(ctx, date: str | None):
    """Show the next day of the active program."""
    repo = ProgramRepository()
    program = await repo.get_active()
    if not program:
        echo_error("No active program. Use 'health-tracker programs activate'")
        ctx.exit(1)

    scheduler = ProgramScheduler(journals=JournalRepository(), programs=repo)
    day_number = await scheduler.next_day(program.id, today=date)

    click.echo(f"{program.name}: day {day_number} of {program.day_count}")
    day = program.get_day(day_number)
    if day:
        for exercise in day.exercises:
            click.echo(f"  - {exercise}")
