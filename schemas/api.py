"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime, timezone


# ============================================================================
# Scrape Invocation Schemas
# ============================================================================

class ScrapeSuccessResponse(BaseModel):
    """Statistics of a finished (or breaker-aborted) scrape run"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "message": "Scrape complete",
                "totalElements": 4213,
                "totalPages": 43,
                "pagesProcessed": 43,
                "totalUpserted": 4213,
                "elapsedSeconds": 21.4
            }
        }
    )

    message: str
    total_elements: int = Field(..., alias="totalElements")
    total_pages: int = Field(..., alias="totalPages")
    pages_processed: int = Field(..., alias="pagesProcessed")
    total_upserted: int = Field(..., alias="totalUpserted")
    errors: Optional[List[str]] = Field(None, description="Omitted when the run had no errors")
    elapsed_seconds: float = Field(..., alias="elapsedSeconds")


class ScrapeErrorResponse(BaseModel):
    """Invocation failed before any statistics were produced"""

    error: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Zighang API returned 503"}}
    )


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response model"""
    status: str = Field(..., description="healthy or unhealthy")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    database_configured: bool
    database_connected: bool
