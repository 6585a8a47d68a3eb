"""
Entry point for one scrape invocation.

Every trigger (HTTP route, scheduler tick, CLI) goes through
``handle_invocation``: it runs the job once and turns the outcome into a
status code plus response body.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
import httpx
import logging

from core.database import create_engine, create_session_maker
from ingestion.extractors.page_fetcher import PageFetcher, QueryWindow
from ingestion.loaders.postgres_loader import PostgresLoader
from ingestion.reporter import build_failure_response, build_success_response
from ingestion.runner import RunResult, ScrapeRunner
from ingestion.transformers.row_mapper import RowMapper

logger = logging.getLogger(__name__)


async def run_scrape_job(
    now: Optional[datetime] = None,
    database_url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
    page_delay: Optional[float] = None
) -> RunResult:
    """
    Run the scrape once.

    Args:
        now: Run start time; fixes the query window (default: current UTC time)
        database_url: Overrides settings.DATABASE_URL
        client: HTTP client to use instead of a fresh one
        page_delay: Overrides settings.PAGE_DELAY_SECONDS

    Returns:
        RunResult of the run

    Raises:
        ConfigurationError: DATABASE_URL is not configured
        RemoteApiError: The first page could not be fetched
    """
    window = QueryWindow.starting_at(now or datetime.now(timezone.utc))
    engine = create_engine(database_url)

    try:
        session_maker = create_session_maker(engine)
        async with session_maker() as session, PageFetcher(client=client) as fetcher:
            runner = ScrapeRunner(
                fetcher=fetcher,
                mapper=RowMapper(),
                loader=PostgresLoader(session),
                page_delay=page_delay
            )
            return await runner.run(window)
    finally:
        await engine.dispose()


async def handle_invocation(**job_kwargs) -> Tuple[int, Dict[str, Any]]:
    """
    Run the job and build the response.

    Returns:
        (200, statistics body) when a RunResult was produced, including
        breaker-aborted runs; (500, {"error": ...}) otherwise
    """
    try:
        result = await run_scrape_job(**job_kwargs)
    except Exception as e:
        logger.exception(f"Scrape invocation failed: {e}")
        return 500, build_failure_response(e)

    return 200, build_success_response(result)
