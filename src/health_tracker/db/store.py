"""Keyed document store over SQLite.

Each record kind lives in its own table holding the JSON document together
with its key and indexed columns. All operations are coroutines; every
SQLite failure surfaces as :class:`~health_tracker.errors.StorageError`.
"""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import aiosqlite

from ..errors import DuplicateRecordError, StorageError
from .engine import get_db_path


@dataclass(frozen=True)
class KindSchema:
    table: str
    key: str
    indexes: tuple[str, ...] = ()

    @property
    def columns(self) -> tuple[str, ...]:
        return (self.key, *self.indexes, "data")


class RecordKind(str, Enum):
    """The four persisted record kinds."""

    JOURNALS = "journals"
    PROGRAMS = "programs"
    GOALS = "goals"
    PROFILE = "profile"

    @property
    def schema(self) -> KindSchema:
        return _SCHEMAS[self]


_SCHEMAS = {
    RecordKind.JOURNALS: KindSchema("journals", "date"),
    RecordKind.PROGRAMS: KindSchema("programs", "id", ("name",)),
    RecordKind.GOALS: KindSchema("goals", "id", ("type", "metric")),
    RecordKind.PROFILE: KindSchema("profile", "id"),
}


def _row_values(schema: KindSchema, record: dict) -> tuple:
    key = record.get(schema.key)
    if key is None:
        raise StorageError(f"{schema.table} record is missing key {schema.key!r}")
    return (
        str(key),
        *(record.get(column) for column in schema.indexes),
        json.dumps(record),
    )


class StoreTransaction:
    """Record operations sharing one connection and one transaction."""

    def __init__(self, db: aiosqlite.Connection):
        self._db = db

    async def get_all(self, kind: RecordKind) -> list[dict]:
        schema = kind.schema
        cursor = await self._db.execute(
            f"SELECT data FROM {schema.table} ORDER BY {schema.key}"
        )
        rows = await cursor.fetchall()
        return [json.loads(row[0]) for row in rows]

    async def get_by_key(self, kind: RecordKind, key: str) -> dict | None:
        schema = kind.schema
        cursor = await self._db.execute(
            f"SELECT data FROM {schema.table} WHERE {schema.key} = ?", (key,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    async def add(self, kind: RecordKind, record: dict) -> None:
        """Insert a record, failing if its key already exists."""
        schema = kind.schema
        placeholders = ", ".join("?" for _ in schema.columns)
        try:
            await self._db.execute(
                f"INSERT INTO {schema.table} ({', '.join(schema.columns)}) "
                f"VALUES ({placeholders})",
                _row_values(schema, record),
            )
        except aiosqlite.IntegrityError:
            raise DuplicateRecordError(kind.value, str(record[schema.key])) from None

    async def put(self, kind: RecordKind, record: dict) -> None:
        """Insert or replace a record."""
        schema = kind.schema
        placeholders = ", ".join("?" for _ in schema.columns)
        await self._db.execute(
            f"INSERT OR REPLACE INTO {schema.table} ({', '.join(schema.columns)}) "
            f"VALUES ({placeholders})",
            _row_values(schema, record),
        )

    async def update(self, kind: RecordKind, key: str, fields: dict) -> dict | None:
        """Merge ``fields`` onto an existing record. No-op when it is missing."""
        existing = await self.get_by_key(kind, key)
        if existing is None:
            return None
        updated = {**existing, **fields, kind.schema.key: existing[kind.schema.key]}
        await self.put(kind, updated)
        return updated

    async def delete(self, kind: RecordKind, key: str) -> None:
        schema = kind.schema
        await self._db.execute(f"DELETE FROM {schema.table} WHERE {schema.key} = ?", (key,))

    async def clear(self, kind: RecordKind) -> None:
        await self._db.execute(f"DELETE FROM {kind.schema.table}")


class RecordStore:
    """Durable keyed CRUD for journals, programs, goals and the profile.

    Every call runs in its own transaction. Use :meth:`transaction` to group
    several operations so they commit or roll back together.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreTransaction]:
        """Open a transaction that commits on success and rolls back on error."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                try:
                    yield StoreTransaction(db)
                except BaseException:
                    await db.rollback()
                    raise
                await db.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Store operation failed: {e}") from e

    async def get_all(self, kind: RecordKind) -> list[dict]:
        async with self.transaction() as tx:
            return await tx.get_all(kind)

    async def get_by_key(self, kind: RecordKind, key: str) -> dict | None:
        async with self.transaction() as tx:
            return await tx.get_by_key(kind, key)

    async def add(self, kind: RecordKind, record: dict) -> None:
        async with self.transaction() as tx:
            await tx.add(kind, record)

    async def put(self, kind: RecordKind, record: dict) -> None:
        async with self.transaction() as tx:
            await tx.put(kind, record)

    async def update(self, kind: RecordKind, key: str, fields: dict) -> dict | None:
        async with self.transaction() as tx:
            return await tx.update(kind, key, fields)

    async def delete(self, kind: RecordKind, key: str) -> None:
        async with self.transaction() as tx:
            await tx.delete(kind, key)

    async def clear(self, kind: RecordKind) -> None:
        async with self.transaction() as tx:
            await tx.clear(kind)
