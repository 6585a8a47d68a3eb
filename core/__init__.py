"""
Core utilities and configuration for the Zighang scrape job.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Application configuration and environment variable management
    database: Async engine and session factory
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration

Usage:
    from core.config import settings
    from core.database import create_engine, create_session_maker
    from core.exceptions import RemoteApiError, PersistenceError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Open a session for one run
    engine = create_engine()
    async with create_session_maker(engine)() as session:
        ...
    await engine.dispose()
"""

__all__ = [
    "settings",
    "create_engine",
    "create_session_maker",
    "setup_logging",
    # Exceptions
    "ScraperError",
    "RemoteApiError",
    "ApiTransportError",
    "ApiStatusError",
    "ApiEnvelopeError",
    "PersistenceError",
    "ConfigurationError",
]
