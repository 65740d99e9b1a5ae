"""Backup bundle export and import.

A bundle is one JSON document::

    {version, exportedAt, programs: [...], journals: [...],
     goals: [...], profile: {...} | null}

Imports validate and parse every record before the store is touched, then
apply all changes inside a single transaction.
"""

from dataclasses import dataclass
from pathlib import Path

import structlog

from ..db.settings_store import ActiveProgramSetting
from ..db.store import RecordKind, RecordStore
from ..errors import BackupError, StorageError
from ..models.goal import Goal
from ..models.journal import Journal
from ..models.program import Program
from ..models.user_profile import PROFILE_KEY, UserProfile
from ..utils.dates import format_timestamp, utcnow

logger = structlog.get_logger()

BUNDLE_VERSION = 3
MIN_BUNDLE_VERSION = 2
REQUIRED_FIELDS = ("version", "programs", "journals")


@dataclass
class ParsedBundle:
    """Records of a validated bundle."""

    programs: list[Program]
    journals: list[Journal]
    goals: list[Goal]
    profile: UserProfile | None

    @property
    def counts(self) -> dict[str, int]:
        return {
            "programs": len(self.programs),
            "journals": len(self.journals),
            "goals": len(self.goals),
            "profile": 1 if self.profile else 0,
        }


def parse_bundle(data) -> ParsedBundle:
    """Validate a bundle and parse its records.

    Raises:
        BackupError: If required fields are missing, the version is too old,
            or any record is malformed.
    """
    if not isinstance(data, dict) or any(data.get(f) is None for f in REQUIRED_FIELDS):
        raise BackupError("Invalid backup file")
    if not isinstance(data["programs"], list) or not isinstance(data["journals"], list):
        raise BackupError("Invalid backup file")

    try:
        version = int(data["version"])
    except (TypeError, ValueError):
        raise BackupError("Invalid backup file") from None
    if version < MIN_BUNDLE_VERSION:
        raise BackupError(
            "This backup file is from an older version and cannot be imported."
        )

    try:
        return ParsedBundle(
            programs=[Program.from_dict(p) for p in data["programs"]],
            journals=[Journal.from_dict(j) for j in data["journals"]],
            goals=[Goal.from_dict(g) for g in data.get("goals") or []],
            profile=UserProfile.from_dict(data["profile"]) if data.get("profile") else None,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise BackupError(f"Invalid record in backup file: {e}") from e


class BackupService:
    """Exports and imports the full contents of the record store."""

    def __init__(
        self,
        db_path: Path | None = None,
        store: RecordStore | None = None,
        active: ActiveProgramSetting | None = None,
    ):
        self.store = store or RecordStore(db_path)
        self.active = active or ActiveProgramSetting()

    async def export_bundle(self) -> dict:
        """Read every record kind into a bundle."""
        try:
            async with self.store.transaction() as tx:
                programs = await tx.get_all(RecordKind.PROGRAMS)
                journals = await tx.get_all(RecordKind.JOURNALS)
                goals = await tx.get_all(RecordKind.GOALS)
                profile = await tx.get_by_key(RecordKind.PROFILE, PROFILE_KEY)
        except StorageError as e:
            logger.error("Failed to export data", error=str(e))
            raise

        return {
            "version": BUNDLE_VERSION,
            "exportedAt": format_timestamp(utcnow()),
            "programs": programs,
            "journals": journals,
            "goals": goals,
            "profile": profile if profile and profile.get("updatedAt") else None,
        }

    async def import_bundle(self, data) -> dict[str, int]:
        """Replace all stored data with the bundle's contents.

        Either every record is replaced or nothing changes.

        Returns:
            Number of records imported per kind
        """
        bundle = parse_bundle(data)

        try:
            async with self.store.transaction() as tx:
                for kind in RecordKind:
                    await tx.clear(kind)
                for program in bundle.programs:
                    await tx.add(RecordKind.PROGRAMS, program.to_dict())
                for journal in bundle.journals:
                    await tx.add(RecordKind.JOURNALS, journal.to_dict())
                for goal in bundle.goals:
                    await tx.add(RecordKind.GOALS, goal.to_dict())
                if bundle.profile:
                    await tx.put(RecordKind.PROFILE, bundle.profile.to_dict())
        except StorageError as e:
            logger.error("Failed to import data", error=str(e))
            raise

        self.active.clear()
        logger.info("Imported backup", **bundle.counts)
        return bundle.counts

    async def merge_bundle(self, data) -> dict[str, int]:
        """Merge the bundle into stored data.

        Missing records are added. Journals and the profile are replaced
        only by newer versions; stored programs and goals are kept.
        Applying the same bundle again changes nothing.

        Returns:
            Number of records written per kind
        """
        bundle = parse_bundle(data)
        written = {"programs": 0, "journals": 0, "goals": 0, "profile": 0}

        try:
            async with self.store.transaction() as tx:
                for program in bundle.programs:
                    if await tx.get_by_key(RecordKind.PROGRAMS, program.id) is None:
                        await tx.add(RecordKind.PROGRAMS, program.to_dict())
                        written["programs"] += 1

                for goal in bundle.goals:
                    if await tx.get_by_key(RecordKind.GOALS, goal.id) is None:
                        await tx.add(RecordKind.GOALS, goal.to_dict())
                        written["goals"] += 1

                for journal in bundle.journals:
                    existing = await tx.get_by_key(RecordKind.JOURNALS, journal.date)
                    if existing is None or _is_newer(
                        journal.last_modified, Journal.from_dict(existing).last_modified
                    ):
                        await tx.put(RecordKind.JOURNALS, journal.to_dict())
                        written["journals"] += 1

                if bundle.profile:
                    existing = await tx.get_by_key(RecordKind.PROFILE, PROFILE_KEY)
                    if existing is None or _is_newer(
                        bundle.profile.updated_at, UserProfile.from_dict(existing).updated_at
                    ):
                        await tx.put(RecordKind.PROFILE, bundle.profile.to_dict())
                        written["profile"] = 1
        except StorageError as e:
            logger.error("Failed to merge data", error=str(e))
            raise

        logger.info("Merged backup", **written)
        return written


def _is_newer(incoming, existing) -> bool:
    if incoming is None:
        return False
    return existing is None or incoming > existing
