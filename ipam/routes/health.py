"""Liveness and readiness probes"""

import structlog  # type: ignore[import-untyped]
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from .dependencies import HealthCheckerDep

router = APIRouter(tags=["health"])
logger = structlog.get_logger()


@router.get("/healthz", response_class=PlainTextResponse)
async def healthz():
    """Process is up"""
    return "ok"


@router.get("/readyz", response_class=PlainTextResponse)
async def readyz(health_checker: HealthCheckerDep):
    """Storage answers a ping"""
    try:
        await health_checker.ping()
    except Exception as e:
        logger.warning("readiness_check_failed", error=str(e))
        return PlainTextResponse("db unavailable", status_code=503)
    return "ready"
