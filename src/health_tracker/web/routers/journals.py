"""Journal routes."""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...context import AppContext
from ...db import JournalRepository
from ...models.journal import Journal
from ...services.metrics import DAILY_FIELDS, daily_completion
from ...utils.units import CIRCUMFERENCE_FIELDS
from ...validation import validate_date, validate_measurements
from ..dependencies import get_context

router = APIRouter(prefix="/journals", tags=["journals"])


class JournalUpdate(BaseModel):
    """Partial journal update. Sections left out are kept; null clears one."""

    body: dict[str, Any] | None = None
    daily: dict[str, Any] | None = None
    workout: dict[str, Any] | None = None
    notes: str | None = None


def journal_response(journal: Journal) -> dict:
    return {**journal.to_dict(), "completion": daily_completion(journal)}


@router.get("")
async def list_journals(start: str | None = None, end: str | None = None):
    """List journals, oldest first, optionally within ``[start, end]``."""
    validate_date(start, "start date")
    validate_date(end, "end date")
    journals = await JournalRepository().list_all()
    return [
        j.to_dict()
        for j in journals
        if (start is None or j.date >= start) and (end is None or j.date <= end)
    ]


@router.get("/dates")
async def journal_dates(year: int, month: int):
    """Dates in a month that have a journal."""
    return await JournalRepository().dates_in_month(year, month)


@router.get("/{date}")
async def get_journal(date: str, context: AppContext = Depends(get_context)):
    """Get the journal for a date (an empty shell when none is stored)."""
    validate_date(date)
    context.select_date(date)
    return journal_response(await JournalRepository().get_for_date(date))


@router.put("/{date}")
async def save_journal(
    date: str, update: JournalUpdate, context: AppContext = Depends(get_context)
):
    """Create or update the journal for a date.

    Sections given replace the stored ones. Values are metric.
    """
    validate_date(date)
    changes = update.model_dump(exclude_unset=True)
    if changes.get("daily"):
        changes["daily"] = validate_measurements(changes["daily"], DAILY_FIELDS)
    if changes.get("body"):
        body = changes["body"]
        changes["body"] = {
            **validate_measurements(body, ("bodyFat",)),
            "circumferences": validate_measurements(
                body.get("circumferences") or body, CIRCUMFERENCE_FIELDS
            ),
        }

    repo = JournalRepository()
    current = (await repo.get_for_date(date)).to_dict()
    journal = await repo.save(Journal.from_dict({**current, **changes, "date": date}))

    context.mark_journal_date(date)
    return journal_response(journal)


@router.delete("/{date}", status_code=204)
async def delete_journal(date: str, context: AppContext = Depends(get_context)):
    validate_date(date)
    await JournalRepository().delete(date)
    context.journal_dates.discard(date)
