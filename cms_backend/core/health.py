"""
Health check utilities
"""
from typing import Dict, Any
from sqlalchemy import text

from cms_backend import __version__
from cms_backend.core.database import SessionLocal
from cms_backend.core.config import settings
import logging

logger = logging.getLogger(__name__)


async def check_database() -> Dict[str, Any]:
    """
    Check database connectivity.
    
    Returns:
        Dictionary with status and details
    """
    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
            return {
                "status": "healthy",
                "message": "Database connection successful"
            }
        finally:
            db.close()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "message": "Database connection failed"
        }


async def get_health_status() -> Dict[str, Any]:
    """Overall health status with per-component details"""
    db_status = await check_database()
    
    return {
        "status": db_status["status"],
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "components": {
            "database": db_status,
        }
    }
