"""Health Routes — liveness and readiness probes, both public.

Invariants:
    - GET /api/health answers {ok: true, timestamp} whenever the process serves
    - GET /api/health/ready answers 503 until the database answers SELECT 1
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from stockroom.infrastructure import database

router = APIRouter(prefix="/api/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
async def liveness():
    return {"ok": True, "timestamp": _now()}


@router.get("/ready")
async def readiness():
    """Database reachability; the manager is read at call time, not import time."""
    manager = database.db_manager
    ready = manager is not None and await manager.health_check()
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "ok": ready,
            "timestamp": _now(),
            "database": "up" if ready else "down",
        },
    )
