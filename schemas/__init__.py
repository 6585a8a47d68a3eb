"""
Pydantic schemas for data validation and serialization.

Schemas:
    source: Zighang API payload (SourceRecord, CompanyRecord, PageEnvelope)
    normalized: Flattened storage row (JobPostingRow)
    api: Invocation and health response bodies

Validation:
    Listing fields are parsed leniently: wrong-typed optional values become
    None instead of rejecting the record. Only a missing listing id or
    missing pagination metadata invalidates a page.

Usage:
    from schemas.source import PageEnvelope, SourceRecord
    from schemas.normalized import JobPostingRow

Example:
    record = SourceRecord.model_validate({"id": "123", "careerMin": "abc"})
    assert record.career_min is None
"""

__all__ = [
    "CompanyRecord",
    "SourceRecord",
    "PageEnvelope",
    "JobPostingRow",
    "ScrapeSuccessResponse",
    "ScrapeErrorResponse",
    "HealthResponse",
]
