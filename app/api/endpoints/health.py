"""
Health check - for load balancers, uptime monitors and humans.
Reports process uptime, build metadata and whether the database answers.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy import text

from app.config import get_settings
from app.db.session import DbSession
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

_STARTED_AT = time.monotonic()


@router.get("", response_model=HealthResponse)
async def health(session: DbSession):
    """Liveness plus database state. Always 200; `database` tells whether storage is reachable."""
    try:
        await session.execute(text("SELECT 1"))
        database = "connected"
    except Exception as exc:
        logger.warning("Health check: database unreachable: %s", exc)
        await session.rollback()
        database = "disconnected"
    return HealthResponse(
        status="ok",
        uptime_seconds=int(time.monotonic() - _STARTED_AT),
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        env=settings.environment,
        database=database,
    )
