"""
Health check endpoints.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from casefolio.database.session import get_session

router = APIRouter()
logger = logging.getLogger("casefolio.health")

SERVICE_NAME = "Casefolio"
SERVICE_VERSION = "0.1.0"


@router.get("/healthz")
async def health_check() -> Dict[str, Any]:
    """
    Liveness probe.

    Returns:
        Dict with status information
    """
    logger.debug("Health check requested")

    return {"status": "ok", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/health")
async def detailed_health(db: AsyncSession = Depends(get_session)) -> JSONResponse:
    """
    Readiness probe including database connectivity.

    Returns:
        200 when the database answers, 503 otherwise
    """
    logger.info("Detailed health check requested")

    try:
        await db.execute(text("SELECT 1"))
        database_status = "ok"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        database_status = "unavailable"

    healthy = database_status == "ok"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ok" if healthy else "degraded",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "components": {"database": database_status},
        },
    )
