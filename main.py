# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
StudyPilot Planner
==================
A teacher's desk service: a day-agnostic eight-period template, a six-day
weekly grid, saved notes per grade and a mock sign-in, all kept in a local
key-value store (SQLite by default, in-memory with STORAGE_URL=memory://).

Port: 8010
Run:  uvicorn main:create_app --factory --port 8010
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studypilot.controllers import (
    auth_controller,
    notes_controller,
    schedule_controller,
    system_controller,
)
from studypilot.core.config import settings
from studypilot.core.logging import get_logger
from studypilot.middleware import MetricsMiddleware, RequestIDMiddleware
from studypilot.repositories.storage import KeyValueStorage, build_storage
from studypilot.services.auth_service import AuthService
from studypilot.services.notes_service import NotesService
from studypilot.services.schedule_store import ScheduleStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    store: ScheduleStore = application.state.schedule_store
    for key in store.recovered_keys:
        logger.warning("Stored value was invalid; replaced with defaults", extra={"key": key})
    logger.info("%s v%s starting", settings.SERVICE_NAME, settings.SERVICE_VERSION)
    yield
    logger.info("%s shutting down", settings.SERVICE_NAME)


def create_app(storage: Optional[KeyValueStorage] = None) -> FastAPI:
    """Build one application with its own storage, store and services."""
    if storage is None:
        storage = build_storage(settings.STORAGE_URL, settings.STORAGE_TABLE)

    application = FastAPI(
        title="StudyPilot Planner",
        description="Daily and weekly class schedules, saved notes and mock teacher sign-in.",
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )
    application.state.storage = storage
    application.state.schedule_store = ScheduleStore(storage)
    application.state.notes_service = NotesService(storage)
    application.state.auth_service = AuthService(storage)

    # ── Middleware (order matters: last added = first executed) ──
    application.add_middleware(MetricsMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Global exception handler ──
    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        req_id = getattr(request.state, "request_id", None)
        logger.exception("Unhandled exception", extra={"request_id": req_id})
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
        )

    # ── Routers ──
    application.include_router(system_controller.router)
    application.include_router(auth_controller.router)
    application.include_router(schedule_controller.router)
    application.include_router(notes_controller.router)
    return application


# ── Entrypoint ──
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
