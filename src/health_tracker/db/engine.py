"""Database engine setup and schema migrations."""

import json
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

import aiosqlite
import structlog

from ..config import get_settings
from ..utils.units import CIRCUMFERENCE_FIELDS

logger = structlog.get_logger()


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_filename


@dataclass(frozen=True)
class Migration:
    """One schema step. ``apply`` must be safe to run more than once."""

    version: int
    description: str
    apply: Callable[[aiosqlite.Connection], Awaitable[None]]


async def _create_journals(db: aiosqlite.Connection) -> None:
    await db.execute("""
        CREATE TABLE IF NOT EXISTS journals (
            date TEXT PRIMARY KEY,
            data TEXT NOT NULL
        )
    """)


async def _create_programs(db: aiosqlite.Connection) -> None:
    await db.execute("""
        CREATE TABLE IF NOT EXISTS programs (
            id TEXT PRIMARY KEY,
            name TEXT,
            data TEXT NOT NULL
        )
    """)
    await db.execute("CREATE INDEX IF NOT EXISTS idx_programs_name ON programs(name)")

    # Workouts logged before programs existed get explicit empty links
    cursor = await db.execute("SELECT date, data FROM journals")
    for date, raw in await cursor.fetchall():
        journal = json.loads(raw)
        workout = journal.get("workout")
        if not isinstance(workout, dict):
            continue
        if "programId" in workout and "dayNumber" in workout:
            continue
        workout.setdefault("programId", None)
        workout.setdefault("dayNumber", None)
        await db.execute(
            "UPDATE journals SET data = ? WHERE date = ?", (json.dumps(journal), date)
        )


async def _create_goals(db: aiosqlite.Connection) -> None:
    await db.execute("""
        CREATE TABLE IF NOT EXISTS goals (
            id TEXT PRIMARY KEY,
            type TEXT,
            metric TEXT,
            data TEXT NOT NULL
        )
    """)
    await db.execute("CREATE INDEX IF NOT EXISTS idx_goals_type ON goals(type)")
    await db.execute("CREATE INDEX IF NOT EXISTS idx_goals_metric ON goals(metric)")


async def _create_profile(db: aiosqlite.Connection) -> None:
    await db.execute("""
        CREATE TABLE IF NOT EXISTS profile (
            id TEXT PRIMARY KEY,
            data TEXT NOT NULL
        )
    """)


async def _nest_circumferences(db: aiosqlite.Connection) -> None:
    cursor = await db.execute("SELECT date, data FROM journals")
    for date, raw in await cursor.fetchall():
        journal = json.loads(raw)
        body = journal.get("body")
        if not isinstance(body, dict):
            continue
        flat = [name for name in CIRCUMFERENCE_FIELDS if name in body]
        if not flat:
            continue
        nested = body.get("circumferences") or {}
        for name in flat:
            value = body.pop(name)
            if nested.get(name) is None and value is not None:
                nested[name] = value
        body["circumferences"] = nested
        await db.execute(
            "UPDATE journals SET data = ? WHERE date = ?", (json.dumps(journal), date)
        )


MIGRATIONS: tuple[Migration, ...] = (
    Migration(1, "journals collection", _create_journals),
    Migration(2, "programs collection, workout program links", _create_programs),
    Migration(3, "goals collection", _create_goals),
    Migration(4, "profile collection", _create_profile),
    Migration(5, "circumferences nested under body", _nest_circumferences),
)

SCHEMA_VERSION = MIGRATIONS[-1].version


async def get_schema_version(db: aiosqlite.Connection) -> int:
    cursor = await db.execute("PRAGMA user_version")
    row = await cursor.fetchone()
    return row[0]


async def run_migrations(
    db: aiosqlite.Connection,
    migrations: Sequence[Migration] = MIGRATIONS,
    from_version: int | None = None,
) -> int:
    """Apply every migration newer than the database's schema version.

    Args:
        db: Open connection
        migrations: Steps ordered by version
        from_version: Re-apply steps after this version instead of the
            stored one (used for recovery and tests)

    Returns:
        The schema version after migrating
    """
    current = await get_schema_version(db) if from_version is None else from_version

    for migration in migrations:
        if migration.version <= current:
            continue
        logger.info(
            "Applying migration",
            version=migration.version,
            description=migration.description,
        )
        await migration.apply(db)
        current = migration.version
        # PRAGMA does not accept bound parameters
        await db.execute(f"PRAGMA user_version = {int(current)}")
        await db.commit()

    return current


async def init_db(db_path: Path | None = None) -> int:
    """Create or upgrade the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        return await run_migrations(db)
