"""
Integration tests for the upsert against a real database session
"""

import pytest
from datetime import datetime, timezone
from sqlalchemy import func, select
from conftest import build_listing
from core.exceptions import PersistenceError
from ingestion.loaders.postgres_loader import PostgresLoader
from ingestion.transformers.row_mapper import RowMapper
from models.job_posting import JobPosting
from schemas.source import SourceRecord

CAPTURED_AT = datetime(2026, 2, 10, 8, 15, tzinfo=timezone.utc)


def map_rows(*listings):
    mapper = RowMapper(clock=lambda: CAPTURED_AT)
    return [mapper.map(SourceRecord.model_validate(listing)) for listing in listings]


def snapshot(posting: JobPosting) -> dict:
    """Column values except the capture time (tz handling differs per backend)"""
    return {
        column.name: getattr(posting, column.name)
        for column in JobPosting.__table__.columns
        if column.name != "scraped_at"
    }


async def count_rows(session) -> int:
    result = await session.execute(select(func.count()).select_from(JobPosting))
    return result.scalar()


@pytest.mark.asyncio
async def test_upsert_inserts_new_rows(db_session):
    loader = PostgresLoader(db_session)

    affected = await loader.upsert(map_rows(build_listing("a"), build_listing("b")))

    assert affected == 2
    assert await count_rows(db_session) == 2


@pytest.mark.asyncio
async def test_same_row_twice_is_idempotent(db_session):
    loader = PostgresLoader(db_session)
    rows = map_rows(build_listing("a"))

    await loader.upsert(rows)
    first = snapshot((await db_session.execute(select(JobPosting))).scalar_one())
    db_session.expire_all()

    await loader.upsert(rows)
    second = snapshot((await db_session.execute(select(JobPosting))).scalar_one())

    assert await count_rows(db_session) == 1
    assert first == second
    assert second["regions"] == ["Seoul"]
    assert second["career_max"] == 5


@pytest.mark.asyncio
async def test_changed_listing_overwrites_previous_values(db_session):
    loader = PostgresLoader(db_session)

    await loader.upsert(map_rows(build_listing("a", views=10, tags=["old"])))
    await loader.upsert(map_rows(build_listing("a", views=99, tags=[], company=None)))
    db_session.expire_all()

    posting = (await db_session.execute(select(JobPosting))).scalar_one()

    assert await count_rows(db_session) == 1
    assert posting.views == 99
    assert posting.tags == []
    assert posting.company_name is None


@pytest.mark.asyncio
async def test_sparse_listing_stored_with_defaults(db_session):
    loader = PostgresLoader(db_session)

    await loader.upsert(map_rows({"id": "sparse"}))

    posting = (await db_session.execute(select(JobPosting))).scalar_one()
    assert posting.id == "sparse"
    assert posting.career_min == 0
    assert posting.career_max == 0
    assert posting.badges == []
    assert posting.depth_ones == []
    assert posting.end_date is None


@pytest.mark.asyncio
async def test_out_of_range_numbers_stored_as_defaults(db_session):
    loader = PostgresLoader(db_session)

    await loader.upsert(map_rows(build_listing("huge", views=10 ** 20, careerMax=-(10 ** 12))))

    posting = (await db_session.execute(select(JobPosting))).scalar_one()
    assert posting.views == 0
    assert posting.career_max == 0


@pytest.mark.asyncio
async def test_row_rejected_by_store_raises_persistence_error(db_session):
    loader = PostgresLoader(db_session)
    row = map_rows(build_listing("huge"))[0].model_copy(update={"views": 10 ** 20})

    with pytest.raises(PersistenceError):
        await loader.upsert([row])

    assert await count_rows(db_session) == 0
