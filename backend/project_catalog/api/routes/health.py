"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable or the
      project catalog cannot be loaded (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Readiness loads the catalog: a ready instance never fails its first query on a bad file
"""

import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from project_catalog.api.deps import get_context
from project_catalog.core.errors import CatalogError
from project_catalog.services.catalog_context import CatalogContext

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "project-catalog-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    request: Request, ctx: CatalogContext = Depends(get_context),
):
    """Readiness probe — database connectivity and catalog load."""
    db_manager = getattr(request.app.state, "db_manager", None)
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    try:
        catalog = await ctx.projects.load()
    except CatalogError as e:
        logger.error(f"Catalog not loadable: {e}", extra={"error_code": e.code})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "catalog_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "catalog": len(catalog)},
    }
