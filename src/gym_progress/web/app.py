"""FastAPI application for the gym-progress API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..db.engine import get_db_path, init_db
from ..errors import ConflictRetryExhausted, ExerciseNotScheduled, InvalidInput, NotFound
from .routers import goals, members, plans, progress, workouts

_LOGGER = logging.getLogger(__name__)

# HTTP status for each service error
ERROR_STATUS = {
    NotFound: 404,
    InvalidInput: 400,
    ExerciseNotScheduled: 409,
    ConflictRetryExhausted: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    # Startup: make sure the schema exists
    await init_db(app.state.db_path)
    yield


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="gym-progress",
        description="Workout plan scheduling, progress tracking and fitness goals",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db_path = db_path or get_db_path()

    for error_cls, status_code in ERROR_STATUS.items():
        app.add_exception_handler(error_cls, _error_handler(status_code))

    # Include routers
    app.include_router(members.router)
    app.include_router(plans.router)
    app.include_router(workouts.router)
    app.include_router(progress.router)
    app.include_router(goals.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


def _error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        _LOGGER.debug("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
        return JSONResponse({"error": str(exc)}, status_code=status_code)

    return handler
