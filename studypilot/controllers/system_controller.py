# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from studypilot.core.config import settings
from studypilot.core.dependencies import get_notes_service, get_storage
from studypilot.repositories.storage import KeyValueStorage
from studypilot.services.notes_service import NotesService

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check(notes: NotesService = Depends(get_notes_service)):
    """Liveness probe for Docker and orchestration."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "notes_count": notes.count(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
def readiness_check(storage: KeyValueStorage = Depends(get_storage)):
    """Readiness probe — verifies the storage backend answers."""
    try:
        storage.verify()
    except Exception as exc:
        raise HTTPException(status_code=503, detail=f"Storage unavailable: {exc}")
    return {"status": "ready", "service": settings.SERVICE_NAME, "storage": "connected"}


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
