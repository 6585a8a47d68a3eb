"""
Scrape pipeline components for the Zighang recruitment API.

Modules:
    runner: Paginated fetch -> map -> upsert loop with a circuit breaker
    reporter: Response bodies for finished and failed invocations
    job: One invocation end to end (config, engine, HTTP client, runner)
    scheduler: APScheduler integration for periodic invocations

Subpackages:
    extractors: Page fetcher and query window
    transformers: Listing -> storage row mapping
    loaders: Idempotent upsert into scrape_jobs

Architecture:
    Each run walks the API's pages in order:

    1. Fetch - one page per request, envelope validated
    2. Map - every listing to a null-safe row
    3. Upsert - one batch per page, keyed by listing id

    Fetch and upsert failures are recorded per page and the run continues;
    three fetch failures in a row abort the run.

Usage:
    from ingestion.job import handle_invocation

    status_code, body = await handle_invocation()
    print(body["totalUpserted"])
"""

__all__ = [
    "PageFetcher",
    "QueryWindow",
    "RowMapper",
    "PostgresLoader",
    "ScrapeRunner",
    "RunResult",
    "run_scrape_job",
    "handle_invocation",
]
