"""
Script to run one scrape invocation from the command line
"""

import asyncio
import json
import sys
import os
import logging

# Add current directory to path to allow imports from core, ingestion, etc.
sys.path.append(os.getcwd())

from core.logging import setup_logging
from ingestion.job import handle_invocation

logger = logging.getLogger(__name__)


async def run_scrape() -> int:
    """Run the scrape once and print the response body"""
    status_code, body = await handle_invocation()
    print(json.dumps(body, ensure_ascii=False, indent=2))

    if status_code != 200:
        logger.error("Scrape failed")
        return 1

    logger.info("Scrape finished")
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(asyncio.run(run_scrape()))
