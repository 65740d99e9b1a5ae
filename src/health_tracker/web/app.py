"""FastAPI application for the health-tracker JSON API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import get_settings
from ..context import AppContext
from ..db import JournalRepository, ProfileRepository
from ..db.engine import get_db_path, init_db
from ..errors import DuplicateRecordError, StorageError, ValidationError
from ..log import configure_logging
from .routers import backup, goals, journals, profile, programs, trends


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Bring the schema up to date and load the shared context."""
    configure_logging(get_settings().log_level)
    await init_db(get_db_path())

    context = AppContext()
    context.apply_profile(await ProfileRepository().get())
    context.reset_journal_dates(j.date for j in await JournalRepository().list_all())
    app.state.context = context
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="health-tracker",
        description="Personal health and training journal",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(DuplicateRecordError)
    async def duplicate_record(request: Request, exc: DuplicateRecordError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        return JSONResponse(status_code=500, content={"detail": "Storage error"})

    app.include_router(journals.router)
    app.include_router(programs.router)
    app.include_router(goals.router)
    app.include_router(profile.router)
    app.include_router(trends.router)
    app.include_router(backup.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
