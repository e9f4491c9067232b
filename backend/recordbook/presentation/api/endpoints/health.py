"""Health check endpoint — no dependencies, always available."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter

from recordbook.config import get_settings

router = APIRouter(tags=["Health"])

_STARTED_AT = time.monotonic()


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status and process uptime."""
    settings = get_settings()
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.app_env,
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "version": settings.app_version,
        "database": settings.database_label,
    }
