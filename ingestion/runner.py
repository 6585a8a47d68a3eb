# ============================================================================
# File: ingestion/runner.py
# Description: Paginated fetch -> map -> upsert loop with a consecutive-failure breaker
# ============================================================================
"""
Scrape Runner - walks every page of the listing API once.

This module provides the scrape loop with:
- Page 0 fetched up front to learn totalPages/totalElements
- Per-page partial failure support (a failed page is recorded, the run goes on)
- Circuit breaker: abort after N consecutive fetch failures (default 3)
- Courtesy delay between page requests
- Run statistics returned as a RunResult

Pages are fetched and persisted strictly in order, one at a time.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional
import logging

from core.config import settings
from core.exceptions import PersistenceError, RemoteApiError, ScraperError
from ingestion.extractors.page_fetcher import PageFetcher, QueryWindow
from ingestion.loaders.postgres_loader import PostgresLoader
from ingestion.transformers.row_mapper import RowMapper

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Statistics of one scrape run."""

    total_elements: int
    total_pages: int
    pages_processed: int = 0
    total_upserted: int = 0
    errors: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    aborted: bool = False


class ScrapeRunner:
    """
    Scrape loop orchestrator.

    Responsibilities:
    - Drive pagination from page 0 to totalPages - 1
    - Map each page's listings and upsert them as one batch
    - Record fetch and persistence failures without stopping the run
    - Abort once fetch failures happen back to back too many times

    Anything that is not a RemoteApiError or PersistenceError (including a
    failure of the very first fetch) propagates to the caller.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        mapper: RowMapper,
        loader: PostgresLoader,
        page_delay: Optional[float] = None,
        max_consecutive_failures: Optional[int] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        timer: Callable[[], float] = time.monotonic
    ):
        self.fetcher = fetcher
        self.mapper = mapper
        self.loader = loader
        self.page_delay = settings.PAGE_DELAY_SECONDS if page_delay is None else page_delay
        self.max_consecutive_failures = (
            settings.MAX_CONSECUTIVE_FAILURES
            if max_consecutive_failures is None else max_consecutive_failures
        )
        self.sleep = sleep
        self.timer = timer

    async def run(self, window: QueryWindow) -> RunResult:
        """
        Run the scrape loop once.

        Args:
            window: Query window fixed for the whole run

        Returns:
            RunResult with pages processed, rows upserted, page-0 totals,
            the ordered error list and elapsed time

        Raises:
            RemoteApiError: If the first page cannot be fetched
        """
        started = self.timer()

        logger.info(f"Starting scrape (window {window.start_date} -> {window.end_date})")

        # Page 0 establishes the iteration bound; its failure fails the run
        first = await self.fetcher.fetch(0, window)

        result = RunResult(
            total_elements=first.total_elements,
            total_pages=first.total_pages,
        )
        logger.info(
            f"API reports {first.total_elements} listings across {first.total_pages} pages"
        )

        consecutive_failures = 0

        for page in range(first.total_pages):
            if page == 0:
                envelope = first
            else:
                try:
                    envelope = await self.fetcher.fetch(page, window)
                except RemoteApiError as e:
                    consecutive_failures += 1
                    self._record_error(result, page, e)

                    if consecutive_failures >= self.max_consecutive_failures:
                        result.aborted = True
                        logger.warning(
                            f"Circuit breaker tripped after {consecutive_failures} "
                            f"consecutive fetch failures; skipping pages {page + 1}.."
                            f"{first.total_pages - 1}"
                        )
                        break
                    continue

                consecutive_failures = 0

            if not envelope.content:
                logger.info(f"Page {page} is empty, stopping")
                break

            rows = self.mapper.map_many(envelope.content)

            try:
                result.total_upserted += await self.loader.upsert(rows)
            except PersistenceError as e:
                self._record_error(result, page, e)

            result.pages_processed += 1
            logger.info(
                f"Page {page + 1}/{first.total_pages} done: {len(rows)} listings, "
                f"{result.total_upserted} upserted so far"
            )

            if envelope.last:
                logger.info(f"Page {page} is marked last, stopping")
                break

            if page > 0:
                await self.sleep(self.page_delay)

        result.elapsed_seconds = self.timer() - started

        logger.info(
            f"Scrape {'aborted' if result.aborted else 'completed'}: "
            f"pages={result.pages_processed}, upserted={result.total_upserted}, "
            f"errors={len(result.errors)}, elapsed={result.elapsed_seconds:.1f}s"
        )
        return result

    @staticmethod
    def _record_error(result: RunResult, page: int, error: ScraperError):
        result.errors.append(f"page {page}: {error.message}")
        logger.error(
            f"Page {page} failed: {error.describe()}",
            extra={"error_context": error.to_dict()}
        )
