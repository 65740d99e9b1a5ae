"""Backup routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from ...context import AppContext
from ...db import JournalRepository
from ...services.backup import BackupService
from ..dependencies import get_context

router = APIRouter(prefix="/backup", tags=["backup"])


@router.get("/export")
async def export_backup():
    """Export every record as one bundle."""
    return await BackupService().export_bundle()


@router.post("/import")
async def import_backup(
    bundle: Any = Body(...),
    merge: bool = False,
    context: AppContext = Depends(get_context),
):
    """Replace (or with ``merge=true``, merge into) all data from a bundle."""
    service = BackupService()
    if merge:
        counts = await service.merge_bundle(bundle)
    else:
        counts = await service.import_bundle(bundle)

    context.reset_journal_dates(j.date for j in await JournalRepository().list_all())
    return {"merged" if merge else "imported": counts}
