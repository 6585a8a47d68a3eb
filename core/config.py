"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Database (required at run time, validated by the job entry point)
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False

    # API server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Zighang recruitment API
    ZIGHANG_API_URL: str = "https://api.zighang.com/api/recruitments/v3"
    QUERY_START_DATE: str = "2026-01-01T00:00"
    REQUEST_TIMEOUT: float = 30.0

    # Scrape loop
    PAGE_SIZE: int = 100
    PAGE_DELAY_SECONDS: float = 0.3
    MAX_CONSECUTIVE_FAILURES: int = 3

    # Scheduler
    SCHEDULER_ENABLED: bool = False
    SCRAPE_INTERVAL_MINUTES: int = 60


settings = Settings()
