"""Health & Readiness Probes — banner, liveness and readiness endpoints.

Invariants:
    - GET / returns the plain-text banner
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
    - Readiness bodies are always {status, checks}, ready or not
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

import library_api.infrastructure.database as database
from library_api import __version__

router = APIRouter(tags=["health"])

BANNER = "📚 Library Management System Backend Running..."


@router.get("/", response_class=PlainTextResponse)
async def banner():
    return BANNER


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "library-api",
        "version": __version__,
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe: includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "checks": {"database": "unhealthy"},
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
