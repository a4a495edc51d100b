"""
Simple health check endpoint.
"""
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, text

from daydiary.core.config import settings
from daydiary.core.database import get_session
from daydiary.core.logging_config import log_warning
from daydiary.core.time_utils import utc_now

router = APIRouter(tags=["health"])


@router.get("/health", response_model=Dict[str, Any])
async def health_check(session: Annotated[Session, Depends(get_session)]):
    """
    Health check with database status.

    Returns degraded status if database is unreachable but service is running.
    """
    db_status = "connected"
    try:
        session.exec(text("SELECT 1")).first()
    except SQLAlchemyError as e:
        log_warning(f"Health check database query failed: {e}")
        db_status = f"disconnected: {e.__class__.__name__}"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "timestamp": utc_now().isoformat(),
        "service": settings.app_name,
        "version": settings.app_version,
        "database": db_status,
    }
