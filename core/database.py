"""
Database engine and session factory with SQLAlchemy async
"""

from typing import Optional
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy.pool import NullPool
from core.config import settings
from core.exceptions import ConfigurationError
import logging

logger = logging.getLogger(__name__)


def resolve_database_url(database_url: Optional[str] = None) -> str:
    """Return the configured database URL or fail with ConfigurationError."""
    url = database_url or settings.DATABASE_URL
    if not url:
        raise ConfigurationError(
            "DATABASE_URL is not configured",
            context={"setting": "DATABASE_URL"}
        )
    return url


def create_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create an async engine for one scrape invocation."""
    url = resolve_database_url(database_url)
    logger.debug(f"Creating engine for {url.split('@')[-1]}")
    return create_async_engine(
        url,
        echo=settings.DB_ECHO,
        poolclass=NullPool,  # One engine per invocation, nothing to pool across runs
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Create session factory bound to the engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )
