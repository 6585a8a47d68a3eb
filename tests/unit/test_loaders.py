"""
Unit tests for the upsert loader
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError
from core.exceptions import PersistenceError
from ingestion.loaders.postgres_loader import PostgresLoader
from schemas.normalized import JobPostingRow


def make_row(listing_id: str, **overrides) -> JobPostingRow:
    return JobPostingRow(
        id=listing_id,
        title=f"Job {listing_id}",
        scraped_at=datetime(2026, 2, 10, tzinfo=timezone.utc),
        **overrides
    )


def mock_session(rowcount=None) -> MagicMock:
    session = MagicMock()
    session.execute = AsyncMock(return_value=MagicMock(rowcount=rowcount))
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


class TestPostgresLoader:
    """Test upsert loader behaviour"""

    @pytest.mark.asyncio
    async def test_upsert_batch_in_one_statement(self):
        session = mock_session(rowcount=3)
        loader = PostgresLoader(session)

        affected = await loader.upsert([make_row("a"), make_row("b"), make_row("c")])

        assert affected == 3
        session.execute.assert_called_once()
        session.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_statement_is_on_conflict_update_by_id(self):
        session = mock_session(rowcount=1)
        loader = PostgresLoader(session)

        await loader.upsert([make_row("a")])

        stmt = session.execute.call_args.args[0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "INSERT INTO scrape_jobs" in sql
        assert "ON CONFLICT (id) DO UPDATE SET" in sql
        assert "title = excluded.title" in sql
        assert "scraped_at = excluded.scraped_at" in sql
        assert "id = excluded.id" not in sql.replace("company_id = excluded.company_id", "")

    @pytest.mark.asyncio
    async def test_empty_batch_skips_store(self):
        session = mock_session()
        loader = PostgresLoader(session)

        assert await loader.upsert([]) == 0
        session.execute.assert_not_called()
        session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_partial_or_unknown_rowcount_accepted(self):
        loader = PostgresLoader(mock_session(rowcount=1))
        assert await loader.upsert([make_row("a"), make_row("b")]) == 1

        loader = PostgresLoader(mock_session(rowcount=-1))
        assert await loader.upsert([make_row("a")]) == 0

        loader = PostgresLoader(mock_session(rowcount=None))
        assert await loader.upsert([make_row("a")]) == 0

    @pytest.mark.asyncio
    async def test_repeated_id_in_batch_keeps_last(self):
        session = mock_session(rowcount=1)
        loader = PostgresLoader(session)

        await loader.upsert([make_row("a", views=1), make_row("a", views=9)])

        stmt = session.execute.call_args.args[0]
        params = stmt.compile(dialect=postgresql.dialect()).params
        view_params = [value for key, value in params.items() if key.startswith("views")]
        assert view_params == [9]

    @pytest.mark.asyncio
    async def test_store_failure_raises_persistence_error(self):
        session = mock_session()
        session.execute = AsyncMock(
            side_effect=OperationalError("INSERT INTO scrape_jobs ...", {}, Exception("disk full"))
        )
        loader = PostgresLoader(session)

        with pytest.raises(PersistenceError) as exc_info:
            await loader.upsert([make_row("a")])

        session.rollback.assert_called_once()
        session.commit.assert_not_called()
        assert exc_info.value.context["operation"] == "UPSERT"
        assert exc_info.value.context["table_name"] == "scrape_jobs"
        assert "disk full" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_driver_overflow_raises_persistence_error(self):
        session = mock_session()
        session.execute = AsyncMock(
            side_effect=OverflowError("Python int too large to convert to SQLite INTEGER")
        )
        loader = PostgresLoader(session)

        with pytest.raises(PersistenceError) as exc_info:
            await loader.upsert([make_row("a", views=10 ** 20)])

        session.rollback.assert_called_once()
        assert "too large" in exc_info.value.message
        assert exc_info.value.context["batch_size"] == 1

    @pytest.mark.asyncio
    async def test_non_database_error_propagates(self):
        session = mock_session()
        session.execute = AsyncMock(side_effect=RuntimeError("bug"))
        loader = PostgresLoader(session)

        with pytest.raises(RuntimeError):
            await loader.upsert([make_row("a")])
