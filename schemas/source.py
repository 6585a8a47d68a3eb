"""
Pydantic schemas for the Zighang recruitment API payload.

Every listing field except ``id`` is optional. Values of the wrong type are
coerced to ``None`` instead of rejecting the record, so one odd listing never
invalidates a whole page; only a missing id or missing pagination metadata
makes the envelope invalid.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Bounds of the INTEGER columns the values end up in
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


def _parse_optional_int(value: Any) -> Optional[int]:
    """Safely parse int value; out-of-range values become None"""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        parsed = int(float(value))  # Handle "3.0" strings
    except (ValueError, TypeError, OverflowError):
        return None
    return parsed if INT_MIN <= parsed <= INT_MAX else None


def _parse_optional_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _parse_optional_str_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    return [str(item) for item in value if item is not None]


class CompanyRecord(BaseModel):
    """Company sub-record embedded in a listing"""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None

    @field_validator("id", "name", "image", mode="before")
    @classmethod
    def coerce_str(cls, v):
        return _parse_optional_str(v)


class SourceRecord(BaseModel):
    """One recruitment listing as returned by the API"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    affiliate: Optional[str] = None
    title: Optional[str] = None
    deadline_type: Optional[str] = Field(None, alias="deadlineType")
    end_date: Optional[str] = Field(None, alias="endDate")
    created_at: Optional[str] = Field(None, alias="createdAt")

    career_min: Optional[int] = Field(None, alias="careerMin")
    career_max: Optional[int] = Field(None, alias="careerMax")

    company: Optional[CompanyRecord] = None

    regions: Optional[List[str]] = None
    employee_types: Optional[List[str]] = Field(None, alias="employeeTypes")
    educations: Optional[List[str]] = None
    depth_ones: Optional[List[str]] = Field(None, alias="depthOnes")
    depth_twos: Optional[List[str]] = Field(None, alias="depthTwos")
    depth_threes: Optional[List[str]] = Field(None, alias="depthThrees")
    keywords: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    badges: Optional[List[str]] = None

    views: Optional[int] = None

    @field_validator("id", mode="before")
    @classmethod
    def require_id(cls, v):
        """Listing id is the primary key and must be present"""
        if v is None or isinstance(v, (bool, dict, list)) or str(v).strip() == "":
            raise ValueError("listing id is missing")
        return str(v).strip()

    @field_validator(
        "affiliate", "title", "deadline_type", "end_date", "created_at",
        mode="before"
    )
    @classmethod
    def coerce_str(cls, v):
        return _parse_optional_str(v)

    @field_validator("career_min", "career_max", "views", mode="before")
    @classmethod
    def coerce_int(cls, v):
        return _parse_optional_int(v)

    @field_validator("company", mode="before")
    @classmethod
    def coerce_company(cls, v):
        return v if isinstance(v, (dict, CompanyRecord)) else None

    @field_validator(
        "regions", "employee_types", "educations",
        "depth_ones", "depth_twos", "depth_threes",
        "keywords", "tags", "badges",
        mode="before"
    )
    @classmethod
    def coerce_str_list(cls, v):
        return _parse_optional_str_list(v)


class PageEnvelope(BaseModel):
    """
    Pagination envelope (the ``data`` member of an API response).

    ``content``, ``totalElements`` and ``totalPages`` are required; an
    envelope without them is structurally invalid.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    content: List[SourceRecord]
    page: int = 0
    size: int = 0
    total_elements: int = Field(..., alias="totalElements")
    total_pages: int = Field(..., alias="totalPages")
    last: bool = False
