"""Health check endpoint."""

import time

from fastapi import APIRouter, Depends

from ..core.config import get_settings_instance
from ..core.exceptions import DataSourceError
from ..core.logging import get_logger
from ..services.record_store import RecordStore, get_record_store

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Health check")
async def health_check(store: RecordStore = Depends(get_record_store)):
    """Report application status and whether the character data can be loaded.

    Returns ``unhealthy`` (still HTTP 200) when the data source is broken so
    monitoring sees the reason instead of a bare 500.
    """
    settings = get_settings_instance()
    health_data = {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.version,
        "environment": settings.environment,
        "checks": {},
    }

    try:
        count = len(await store.get_records())
        health_data["checks"]["record_store"] = {
            "status": "healthy",
            "source": store.source.description,
            "record_count": count,
        }
    except DataSourceError as e:
        logger.warning("Health check: record store unavailable", extra={"reason": e.message})
        health_data["checks"]["record_store"] = {
            "status": "unhealthy",
            "source": store.source.description,
            "error": e.message,
        }
        health_data["status"] = "unhealthy"

    return {"data": health_data}
