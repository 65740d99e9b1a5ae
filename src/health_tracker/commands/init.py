"""Initialize project command."""

import click

from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@async_command
async def init():
    """Initialize the health-tracker data directory and database.

    Creates the data directory and brings the SQLite schema up to the
    latest version. Safe to run again after upgrading.
    """
    data_dir = get_data_dir()
    echo_info(f"Initializing health-tracker in {data_dir}")

    data_dir.mkdir(parents=True, exist_ok=True)
    version = await init_db(get_db_path(data_dir))
    echo_success(f"Database ready (schema version {version})")

    click.echo()
    click.echo("Next steps:")
    click.echo("  health-tracker profile set --height 180 --units metric")
    click.echo("  health-tracker journal daily --weight 80 --steps 9000")
    click.echo('  health-tracker programs create "Upper/Lower" --day "bench,row,ohp"')
