"""
GreenPlan Server - Status Endpoints

Unauthenticated health check for load balancers and uptime monitors.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from database import GetDatabaseManager
from managers import DatabaseManager


# Create router instance
router = APIRouter()

SERVICE_NAME = "GreenPlan Server"
SERVICE_VERSION = "1.0.0"


@router.get("/health", tags=["Status"])
def health_check(db_manager: DatabaseManager = Depends(GetDatabaseManager)):
    """
    Report whether the server is up and can reach its database

    The response is always 200; a failed database probe shows up as
    status "degraded".

    Returns:
        dict: status, service, version, database and timestamp_utc
    """
    database_ok = db_manager.Ping()

    return {
        "status": "healthy" if database_ok else "degraded",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "database": "connected" if database_ok else "unavailable",
        "timestamp_utc": datetime.now(timezone.utc).isoformat()
    }
