"""
Scrape trigger endpoint
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from ingestion.job import handle_invocation
from schemas.api import ScrapeErrorResponse, ScrapeSuccessResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Scrape"])


@router.api_route(
    "/scrape",
    methods=["GET", "POST"],
    response_model=ScrapeSuccessResponse,
    responses={500: {"model": ScrapeErrorResponse}}
)
async def trigger_scrape():
    """
    Run one scrape invocation and report its statistics.

    Returns:
    - 200 with run statistics (also when the circuit breaker aborted the run)
    - 500 with {"error": ...} when the run could not produce statistics
    """
    logger.info("Scrape triggered over HTTP")
    status_code, body = await handle_invocation()
    return JSONResponse(status_code=status_code, content=body)
