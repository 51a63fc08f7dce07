"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness), reporting
      the search paging policy, deadline and page-size cap it serves with
    - GET /health/ready returns 503 if database is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - db_manager read through the module at call time: it is set by the lifespan
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import medcatalog.infrastructure.database as db_module
from medcatalog.config import get_settings

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness probe with the active search configuration."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "medcatalog-api",
        "version": "1.0.0",
        "search": {
            "paging_policy": settings.search_paging_policy.value,
            "timeout_seconds": settings.search_timeout_seconds,
            "max_page_size": settings.max_page_size,
        },
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
