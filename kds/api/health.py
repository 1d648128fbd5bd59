"""
Health check endpoint
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime, timezone

from kds.database import get_db
from kds.config import settings
from kds.publishers import get_broadcaster, get_event_publisher
from kds.publishers.base import EventPublisher
from kds.publishers.broadcaster import Broadcaster

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
    publisher: EventPublisher = Depends(get_event_publisher)
):
    """
    Health check endpoint

    Checks:
    - Service status
    - Database connectivity
    - Connected realtime subscribers
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    return {
        "service": settings.SERVICE_NAME,
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "database": db_status,
        "event_bus": publisher.provider_name,
        "subscribers": broadcaster.subscriber_count,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
