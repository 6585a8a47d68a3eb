"""
Package run outcomes into the invocation response body.
"""

from typing import Any, Dict
from ingestion.runner import RunResult
from schemas.api import ScrapeErrorResponse, ScrapeSuccessResponse


def build_success_response(result: RunResult) -> Dict[str, Any]:
    """Serialize a RunResult; ``errors`` is left out when the run had none."""
    if result.aborted:
        message = "Scrape aborted after consecutive fetch failures"
    else:
        message = "Scrape complete"

    body = ScrapeSuccessResponse(
        message=message,
        total_elements=result.total_elements,
        total_pages=result.total_pages,
        pages_processed=result.pages_processed,
        total_upserted=result.total_upserted,
        errors=list(result.errors) or None,
        elapsed_seconds=round(result.elapsed_seconds, 1),
    )
    return body.model_dump(by_alias=True, exclude_none=True)


def build_failure_response(error: BaseException) -> Dict[str, Any]:
    """Failure body: the error description only, no partial statistics."""
    description = str(error) or type(error).__name__
    return ScrapeErrorResponse(error=description).model_dump()
