import logging
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from core.config import settings
from ingestion.job import handle_invocation

logger = logging.getLogger(__name__)


class ScrapeScheduler:
    def __init__(self, interval_minutes: Optional[int] = None):
        self.scheduler = AsyncIOScheduler()
        self.interval_minutes = (
            settings.SCRAPE_INTERVAL_MINUTES if interval_minutes is None else interval_minutes
        )

    async def run_scrape_job(self):
        """Job to run one scrape invocation"""
        logger.info("Scheduler: Starting scrape job")
        status_code, body = await handle_invocation()

        if status_code == 200:
            logger.info(
                f"Scheduler: scrape finished - pages={body['pagesProcessed']}, "
                f"upserted={body['totalUpserted']}, errors={len(body.get('errors', []))}"
            )
        else:
            logger.error(f"Scheduler: scrape job failed - {body['error']}")

    def start(self):
        """Start the scheduler"""
        self.scheduler.add_job(
            self.run_scrape_job,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id="scrape_job",
            replace_existing=True,
            max_instances=1,  # Runs must not overlap
            coalesce=True
        )
        self.scheduler.start()
        logger.info(f"Scrape scheduler started (every {self.interval_minutes} minutes)")

    def stop(self):
        self.scheduler.shutdown()
        logger.info("Scrape scheduler stopped")
