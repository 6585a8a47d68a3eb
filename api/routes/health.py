"""
Health check endpoint with database connectivity
"""

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from core.database import create_engine
from core.exceptions import ConfigurationError
from schemas.api import HealthResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns:
    - Whether DATABASE_URL is configured
    - Database connectivity status
    """
    db_configured = True
    db_connected = False

    try:
        engine = create_engine()
    except ConfigurationError as e:
        logger.error(f"Health check: {e.message}")
        db_configured = False
    except SQLAlchemyError as e:
        logger.error(f"Invalid database configuration: {str(e)}")
    else:
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            db_connected = True
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database connection failed: {str(e)}")
        finally:
            await engine.dispose()

    return HealthResponse(
        status="healthy" if db_connected else "unhealthy",
        database_configured=db_configured,
        database_connected=db_connected
    )
