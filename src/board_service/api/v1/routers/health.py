from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from board_service.config import settings
from board_service.infrastructure.db.session import engine

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(request: Request) -> dict[str, str | int]:
    """Liveness plus the number of live viewer sessions in this process."""
    return {"status": "ok", "sessions": len(request.app.state.hub)}


@router.get("/readyz")
async def readyz(request: Request) -> JSONResponse:
    # Driver messages stay in the log; callers only see ok/error per dependency.
    checks: dict[str, str] = {}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception:  # noqa: BLE001
        logger.exception("Readiness check failed: database")
        checks["database"] = "error"

    if settings.BROADCAST_BACKEND == "redis":
        try:
            await request.app.state.redis.ping()
            checks["redis"] = "ok"
        except Exception:  # noqa: BLE001
            logger.exception("Readiness check failed: redis")
            checks["redis"] = "error"

    ready = all(v == "ok" for v in checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "unavailable", "checks": checks},
    )
