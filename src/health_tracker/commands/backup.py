"""Backup export and import commands."""

import json
from pathlib import Path

import click

from ..errors import BackupError, StorageError
from ..services.backup import BackupService
from ..utils.dates import today_iso
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized


@click.group()
@click.pass_context
def backup(ctx):
    """Export and import all data as a JSON bundle."""
    ensure_initialized(ctx)


@backup.command()
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="Output file (default: health-tracker-backup-<date>.json, '-' for stdout)")
@click.pass_context
@async_command
async def export(ctx, output: Path | None):
    """Export every journal, program, goal and the profile."""
    try:
        bundle = await BackupService().export_bundle()
    except StorageError as e:
        echo_error(f"Export failed: {e}")
        ctx.exit(1)

    text = json.dumps(bundle, indent=2)
    if output is not None and str(output) == "-":
        click.echo(text)
        return

    output = output or Path(f"health-tracker-backup-{today_iso()}.json")
    output.write_text(text)
    echo_success(
        f"Exported {len(bundle['journals'])} journal(s), {len(bundle['programs'])} "
        f"program(s) and {len(bundle['goals'])} goal(s) to {output}"
    )


@backup.command(name="import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--merge", is_flag=True, help="Merge into existing data instead of replacing it")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def import_bundle(ctx, file: Path, merge: bool, force: bool):
    """Import a bundle from FILE.

    By default all existing data is replaced. With --merge, missing records
    are added and newer journals replace older ones.
    """
    try:
        data = json.loads(file.read_text())
    except (OSError, json.JSONDecodeError) as e:
        echo_error(f"Could not read {file}: {e}")
        ctx.exit(1)

    if not merge and not force:
        if not click.confirm("This replaces all existing data. Continue?"):
            echo_info("Cancelled")
            return

    service = BackupService()
    try:
        if merge:
            counts = await service.merge_bundle(data)
        else:
            counts = await service.import_bundle(data)
    except (BackupError, StorageError) as e:
        echo_error(str(e))
        ctx.exit(1)

    verb = "Merged" if merge else "Imported"
    echo_success(
        f"{verb} {counts['journals']} journal(s), {counts['programs']} program(s), "
        f"{counts['goals']} goal(s)"
    )
