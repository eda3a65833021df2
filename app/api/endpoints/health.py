"""
Health check endpoints.
"""

import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime, timezone

from app.core.database import get_db

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Health check including a database round trip.
    """
    try:
        db.execute(text("SELECT 1"))
        database = {"status": "healthy"}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        database = {"status": "unhealthy", "error": str(e)}

    return {
        "status": database["status"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {"database": database},
    }
