"""Health check endpoint — database reachability and queue backlog."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ticketflow.adapters.persistence.database import get_session
from ticketflow.adapters.persistence.message_queue import SqlMessageQueue
from ticketflow.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Always 200; ``status`` is "degraded" when the database cannot be queried."""
    queue = None
    try:
        await session.execute(text("SELECT 1"))
        queue = await SqlMessageQueue(session).depth()
        db_status = "connected"
    except Exception as e:
        logger.warning("Health check database query failed: %s", e)
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "queue": queue,
        "service": settings.service_name,
        "environment": settings.stage_name,
    }
