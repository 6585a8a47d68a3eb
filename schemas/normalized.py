"""
Pydantic schema for the flattened, null-safe storage row
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime


class JobPostingRow(BaseModel):
    """
    Row written to ``scrape_jobs``.

    Ensures:
    - id is always present
    - list fields are never None
    - career bounds and views are integers (0 when unknown)
    """

    id: str = Field(..., min_length=1)

    affiliate: Optional[str] = None
    title: Optional[str] = None
    deadline_type: Optional[str] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    career_min: int = 0
    career_max: int = 0

    company_id: Optional[str] = None
    company_name: Optional[str] = None
    company_image: Optional[str] = None

    regions: List[str] = Field(default_factory=list)
    employee_types: List[str] = Field(default_factory=list)
    educations: List[str] = Field(default_factory=list)
    depth_ones: List[str] = Field(default_factory=list)
    depth_twos: List[str] = Field(default_factory=list)
    depth_threes: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    badges: List[str] = Field(default_factory=list)

    views: int = 0

    scraped_at: datetime

    @field_validator(
        "regions", "employee_types", "educations",
        "depth_ones", "depth_twos", "depth_threes",
        "keywords", "tags", "badges",
        mode="before"
    )
    @classmethod
    def ensure_list(cls, v):
        """Ensure list fields are never None"""
        if v is None:
            return []
        return v

    def to_row(self) -> Dict[str, Any]:
        """Column mapping for the upsert statement"""
        return self.model_dump()
