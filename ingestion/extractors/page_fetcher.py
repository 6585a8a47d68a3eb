"""
Page fetcher for the Zighang recruitment API.

One call fetches one page and validates its envelope. Failures surface as
RemoteApiError subclasses:
- ApiTransportError: connection errors and timeouts
- ApiStatusError: non-2xx HTTP status
- ApiEnvelopeError: non-JSON body, success=false, malformed pagination data

The fetcher never retries. Retry and abort policy belong to the scrape loop.
"""

import httpx
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional
from pydantic import ValidationError
from core.config import settings
from core.exceptions import (
    ApiEnvelopeError,
    ApiStatusError,
    ApiTransportError,
)
from schemas.source import PageEnvelope
import logging

logger = logging.getLogger(__name__)

QUERY_TIME_FORMAT = "%Y-%m-%dT%H:%M"


@dataclass(frozen=True)
class QueryWindow:
    """
    Time range sent with every page request of one run.

    The end boundary is fixed when the run starts so the API's ranking, and
    therefore its paging, stays stable while the run walks the pages.
    """

    start_date: str
    end_date: str

    @classmethod
    def starting_at(cls, now: datetime, start_date: Optional[str] = None) -> "QueryWindow":
        """Build the window for a run started at ``now`` (UTC, minute precision)."""
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        end_date = now.astimezone(timezone.utc).strftime(QUERY_TIME_FORMAT)
        return cls(
            start_date=start_date or settings.QUERY_START_DATE,
            end_date=end_date,
        )


class PageFetcher:
    """
    Fetch single pages of recruitment listings.

    Use as an async context manager; it opens an httpx.AsyncClient for the
    run unless a client is injected (the caller then owns that client).

    Attributes:
        api_url: Listing endpoint
        page_size: Records requested per page (default: 100)
        timeout: Request timeout in seconds (default: 30.0)
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        page_size: Optional[int] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.api_url = api_url or settings.ZIGHANG_API_URL
        self.page_size = page_size or settings.PAGE_SIZE
        self.timeout = timeout or settings.REQUEST_TIMEOUT
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "PageFetcher":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_params(self, page_index: int, window: QueryWindow) -> Dict[str, str]:
        """Query parameters for one page request"""
        return {
            "page": str(page_index),
            "size": str(self.page_size),
            "careerMin": "0",
            "careerMax": "0",
            "startDate": window.start_date,
            "endDate": window.end_date,
            "sortCondition": "VIEWS",
            "orderCondition": "DESC",
        }

    async def fetch(self, page_index: int, window: QueryWindow) -> PageEnvelope:
        """
        Fetch and validate one page.

        Args:
            page_index: 0-based page number
            window: Query window shared by every page of the run

        Returns:
            Validated page envelope

        Raises:
            ApiTransportError: The request could not be completed
            ApiStatusError: Non-success HTTP status
            ApiEnvelopeError: Unusable response body
        """
        if self._client is None:
            raise RuntimeError("PageFetcher must be entered with 'async with' before fetching")

        params = self.build_params(page_index, window)
        context = {"api_url": self.api_url, "page": page_index}

        logger.debug(f"Fetching page {page_index} from {self.api_url}")

        try:
            response = await self._client.get(
                self.api_url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout
            )
        except httpx.HTTPError as e:
            raise ApiTransportError(
                f"Zighang API request failed: {type(e).__name__}: {e}",
                context=context,
                original_exception=e
            )

        if not response.is_success:
            raise ApiStatusError(
                f"Zighang API returned {response.status_code}",
                context={
                    **context,
                    "status_code": response.status_code,
                    "response_body": response.text[:500]  # Truncate
                }
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ApiEnvelopeError(
                "Zighang API returned a non-JSON body",
                context={**context, "response_body": response.text[:500]},
                original_exception=e
            )

        if not isinstance(payload, dict) or payload.get("success") is not True:
            code = payload.get("code") if isinstance(payload, dict) else None
            raise ApiEnvelopeError(
                f"Zighang API error: {code}",
                context={**context, "code": code}
            )

        try:
            envelope = PageEnvelope.model_validate(payload.get("data"))
        except ValidationError as e:
            raise ApiEnvelopeError(
                f"Zighang API returned a malformed page envelope ({e.error_count()} errors)",
                context=context,
                original_exception=e
            )
        except (ValueError, TypeError, OverflowError) as e:
            raise ApiEnvelopeError(
                f"Zighang API returned a malformed page envelope: {type(e).__name__}: {e}",
                context=context,
                original_exception=e
            )

        logger.debug(
            f"Page {page_index}: {len(envelope.content)} records "
            f"(totalPages={envelope.total_pages}, last={envelope.last})"
        )
        return envelope
