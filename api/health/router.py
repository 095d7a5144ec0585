"""
Liveness and database readiness endpoints.
"""

from __future__ import annotations

import asyncio
import logging

import asyncpg
from fastapi import APIRouter, HTTPException, status

from core import db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/db")
async def health_db() -> dict:
    try:
        ok = await db.ping()
    except (OSError, asyncio.TimeoutError, RuntimeError, asyncpg.PostgresError) as exc:
        logger.warning("db_health_failed error=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable.",
        ) from exc
    if not ok:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable.",
        )
    return {"status": "ok", "database": "ok"}
