"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class and shared column types
    job_posting: Flattened recruitment listings (table ``scrape_jobs``)

Database Schema:
    A single table keyed by the Zighang listing id. Every run upserts into
    it, so the table always holds the latest captured state per listing.

Usage:
    from models.base import Base
    from models.job_posting import JobPosting
"""

__all__ = [
    "Base",
    "JSONList",
    "JobPosting",
]
