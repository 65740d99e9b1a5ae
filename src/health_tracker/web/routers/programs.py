"""Program routes."""

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from ...db import JournalRepository, ProgramRepository
from ...models.program import ProgramDay
from ...services.scheduler import ProgramScheduler
from ...validation import validate_date

router = APIRouter(prefix="/programs", tags=["programs"])


class ProgramIn(BaseModel):
    name: str
    days: list[list[str]]

    def program_days(self) -> list[ProgramDay]:
        return [ProgramDay(exercises=day) for day in self.days]


class ActiveProgramIn(BaseModel):
    program_id: str | None = Field(default=None, alias="programId")


@router.get("")
async def list_programs():
    """List all programs, newest first."""
    return [p.to_dict() for p in await ProgramRepository().list_all()]


@router.post("", status_code=201)
async def create_program(data: ProgramIn):
    program = await ProgramRepository().create(data.name, data.program_days())
    return program.to_dict()


@router.get("/active")
async def get_active_program():
    """The program being followed, with the suggested day for today."""
    repo = ProgramRepository()
    program = await repo.get_active()
    if program is None:
        return {"program": None, "nextDay": None}
    scheduler = ProgramScheduler(journals=JournalRepository(), programs=repo)
    return {"program": program.to_dict(), "nextDay": await scheduler.next_day(program.id)}


@router.put("/active")
async def set_active_program(data: ActiveProgramIn):
    repo = ProgramRepository()
    if data.program_id and await repo.get(data.program_id) is None:
        raise HTTPException(status_code=404, detail="Program not found")
    repo.set_active(data.program_id)
    return {"programId": data.program_id}


@router.get("/previous-session")
async def previous_session(
    program_id: str | None = Query(None, alias="programId"),
    day_number: int | None = Query(None, alias="dayNumber"),
):
    """Latest workout to prefill a session from."""
    journal = await ProgramScheduler().previous_session(program_id, day_number)
    return journal.to_dict() if journal else None


@router.get("/{program_id}")
async def get_program(program_id: str):
    program = await ProgramRepository().get(program_id)
    if program is None:
        raise HTTPException(status_code=404, detail="Program not found")
    return program.to_dict()


@router.put("/{program_id}")
async def update_program(program_id: str, data: ProgramIn):
    repo = ProgramRepository()
    if await repo.get(program_id) is None:
        raise HTTPException(status_code=404, detail="Program not found")
    await repo.update(program_id, data.name, data.program_days())
    return (await repo.get(program_id)).to_dict()


@router.delete("/{program_id}", status_code=204)
async def delete_program(program_id: str):
    await ProgramRepository().delete(program_id)


@router.get("/{program_id}/next-day")
async def next_day(program_id: str, date: str | None = None):
    """Suggested day number for a program on ``date`` (default: today)."""
    validate_date(date)
    day_number = await ProgramScheduler().next_day(program_id, today=date)
    return {"programId": program_id, "dayNumber": day_number}
