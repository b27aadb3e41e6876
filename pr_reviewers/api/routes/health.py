"""Health Probes — liveness and database readiness.

Invariants:
    - GET /api/v1/health/ answers 200 whenever the process serves requests
    - GET /api/v1/health/ready answers 503 unless the database answers SELECT 1
      within READINESS_TIMEOUT seconds

Design Decisions:
    - db_manager looked up through the module on each call: init_db runs in
      the lifespan, after this module is imported
"""

import asyncio
import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pr_reviewers.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "pr-reviewers-service"
SERVICE_VERSION = "1.0.0"
READINESS_TIMEOUT = 5.0


async def _database_reachable() -> bool:
    manager = database.db_manager
    if manager is None:
        return False
    try:
        return await asyncio.wait_for(manager.health_check(), READINESS_TIMEOUT)
    except asyncio.TimeoutError:
        logger.error(f"Database probe timed out after {READINESS_TIMEOUT}s")
        return False


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness_check():
    """Ready when the merge workflow can open a transaction."""
    if not await _database_reachable():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
