"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from .. import __version__

router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": _timestamp(),
        "service": "onyx-forge",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Ready once the orchestrator has been built by the lifespan."""
    return {
        "ready": getattr(request.app.state, "orchestrator", None) is not None,
        "timestamp": _timestamp(),
    }
