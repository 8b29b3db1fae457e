"""
Health check endpoints
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from app.api.deps import get_context
from app.context import AppContext
from app.dtos import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Simple API health check."""
    return HealthResponse(
        status="OK",
        message="Server is running healthy!",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/health/db")
def database_health(ctx: AppContext = Depends(get_context)):
    """MongoDB health check."""
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        ctx.db.command("ping")
    except PyMongoError as exc:
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(exc),
            "timestamp": timestamp,
        }

    return {"status": "OK", "database": "connected", "timestamp": timestamp}
