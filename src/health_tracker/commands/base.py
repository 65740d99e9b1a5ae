"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click

from ..config import get_settings
from ..db import ProfileRepository, get_db_path
from ..errors import ValidationError
from ..models.user_profile import UnitPreference
from ..validation import validate_date


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def date_param(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    """Click callback rejecting dates that are not YYYY-MM-DD."""
    try:
        return validate_date(value)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from None


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_settings().data_dir


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        echo_error("Project not initialized. Run 'health-tracker init' first.")
        ctx.exit(1)


async def get_unit_preference() -> UnitPreference:
    """Unit preference from the saved profile."""
    profile = await ProfileRepository().get()
    return profile.unit_preference


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)
