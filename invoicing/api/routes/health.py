"""Health Routes — liveness and readiness probes, no identity required.

Invariants:
    - GET /health/ answers 200 whenever the process can serve a request
    - GET /health/ready answers 503 until the database answers a ping
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from invoicing.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "invoicing-api"
SERVICE_VERSION = "1.0.0"


async def _database_ready() -> bool:
    # read at call time: assigned by the lifespan, swapped by tests
    manager = database.db_manager
    return manager is not None and await manager.health_check()


@router.get("/")
async def liveness():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness():
    if not await _database_ready():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
