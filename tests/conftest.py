"""
Pytest configuration and fixtures
"""

import os
from typing import Any, AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from models.base import Base
# Registers scrape_jobs on Base.metadata
from models.job_posting import JobPosting  # noqa: F401
from schemas.source import PageEnvelope

# Test database URL (set TEST_DATABASE_URL to run against PostgreSQL)
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine"""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection, otherwise every checkout sees an empty in-memory DB
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables after test
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_maker() as session:
        yield session
        await session.rollback()


def build_listing(listing_id: str = "1001", **overrides) -> Dict[str, Any]:
    """A complete listing as the API sends it"""
    listing = {
        "id": listing_id,
        "affiliate": "ZIGHANG",
        "title": f"Backend Engineer {listing_id}",
        "deadlineType": "DATE",
        "endDate": "2026-03-31T23:59:59",
        "createdAt": "2026-01-05T09:30:00",
        "careerMin": 1,
        "careerMax": 5,
        "company": {"id": "c-77", "name": "Acme Corp", "image": "https://cdn.example.com/acme.png"},
        "regions": ["Seoul"],
        "employeeTypes": ["FULL_TIME"],
        "educations": ["BACHELOR"],
        "depthOnes": ["IT"],
        "depthTwos": ["Development"],
        "depthThrees": ["Backend"],
        "views": 420,
        "keywords": ["python", "django"],
        "tags": ["remote-ok"],
        "badges": ["HOT"],
    }
    listing.update(overrides)
    return listing


def build_page_payload(
    page: int,
    content: List[Dict[str, Any]],
    total_pages: int,
    total_elements: Optional[int] = None,
    last: Optional[bool] = None,
    size: int = 100,
) -> Dict[str, Any]:
    """A full API response body for one page"""
    return {
        "success": True,
        "code": "SUCCESS",
        "data": {
            "content": content,
            "page": page,
            "size": size,
            "totalElements": total_elements if total_elements is not None else len(content),
            "totalPages": total_pages,
            "last": last if last is not None else page >= total_pages - 1,
        },
    }


def build_envelope(page: int, count: int, total_pages: int, **kwargs) -> PageEnvelope:
    """Validated envelope holding ``count`` listings with ids unique per page"""
    content = [build_listing(f"{page}-{i}") for i in range(count)]
    payload = build_page_payload(page, content, total_pages, **kwargs)
    return PageEnvelope.model_validate(payload["data"])


@pytest.fixture
def listing():
    return build_listing()
