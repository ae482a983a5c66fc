from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.logging import get_logger
from catalog_api.db.base import get_db_session

logger = get_logger(__name__)

health_router = APIRouter(prefix="/health")


@health_router.get("")
async def health_check():
    """Health check endpoint for load balancers and monitoring"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@health_router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db_session)):
    """Readiness check: the database answers a trivial query"""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "unavailable",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    return {
        "status": "healthy",
        "database": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
