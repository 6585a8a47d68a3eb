"""
FastAPI application initialization
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from api.routes import health, scrape
from core.config import settings
from core.logging import setup_logging
from ingestion.scheduler import ScrapeScheduler
import logging

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown"""
    logger.info("Starting Zighang scrape service")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    scheduler = None
    if settings.SCHEDULER_ENABLED:
        scheduler = ScrapeScheduler()
        scheduler.start()

    yield

    logger.info("Shutting down Zighang scrape service")
    if scheduler is not None:
        scheduler.stop()


# Create FastAPI app
app = FastAPI(
    title="Zighang Scrape Service",
    description="Pulls Zighang recruitment listings into scrape_jobs",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Include routers
app.include_router(health.router)
app.include_router(scrape.router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Zighang Scrape Service",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "scrape": "/scrape"
        }
    }
