"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (document store reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException

from temporal_books.core.logging import get_logger
from temporal_books.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)

READY_TIMEOUT_SECONDS = 5


async def check_database() -> dict[str, Any]:
    """
    Check document store connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    try:
        from temporal_books.core.database import get_database

        start = utc_now()
        await get_database().command("ping")
        latency_ms = int((utc_now() - start).total_seconds() * 1000)

        return {"status": "healthy", "latency_ms": latency_ms}

    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 if the document store cannot be reached in time.
    """
    try:
        async with asyncio.timeout(READY_TIMEOUT_SECONDS):
            db_result = await check_database()
    except TimeoutError:
        db_result = {"status": "unhealthy", "error": "timed out"}

    checks = {"database": db_result}

    if db_result.get("status") == "unhealthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
