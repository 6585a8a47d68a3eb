"""
Upsert storage rows into scrape_jobs (idempotent by listing id)
"""

from typing import Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from models.job_posting import JobPosting
from schemas.normalized import JobPostingRow
from core.exceptions import PersistenceError
import logging

logger = logging.getLogger(__name__)

CONFLICT_KEY = "id"


class PostgresLoader:
    """
    Load rows with INSERT ... ON CONFLICT (id) DO UPDATE.

    Ensures:
    - No duplicate rows on repeated runs
    - Existing rows take the latest captured values
    - One transaction per batch
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    def _insert(self):
        dialect = getattr(self.db.bind, "dialect", None)
        if getattr(dialect, "name", None) == "sqlite":
            return sqlite_insert(JobPosting)
        return pg_insert(JobPosting)

    async def upsert(self, rows: List[JobPostingRow]) -> int:
        """
        Upsert one batch of rows keyed by id.

        Args:
            rows: Mapped rows, at most one page worth

        Returns:
            Affected-row count reported by the store (0 when unknown)

        Raises:
            PersistenceError: The store rejected or failed the batch
        """
        if not rows:
            return 0

        # Postgres refuses to touch the same row twice in one statement
        by_id: Dict[str, dict] = {}
        for row in rows:
            by_id[row.id] = row.to_row()
        if len(by_id) < len(rows):
            logger.debug(f"Collapsed {len(rows) - len(by_id)} repeated ids within batch")

        stmt = self._insert().values(list(by_id.values()))
        stmt = stmt.on_conflict_do_update(
            index_elements=[CONFLICT_KEY],
            set_={
                column.name: stmt.excluded[column.name]
                for column in JobPosting.__table__.columns
                if column.name != CONFLICT_KEY
            }
        )

        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except (SQLAlchemyError, OverflowError) as e:
            # sqlite3 raises a bare OverflowError for integers beyond 64 bits
            await self.db.rollback()
            # First line only; the rest is the rendered SQL
            reason = (str(e).splitlines() or [type(e).__name__])[0]
            raise PersistenceError(
                f"Upsert into {JobPosting.__tablename__} failed: {reason}",
                context={
                    "operation": "UPSERT",
                    "table_name": JobPosting.__tablename__,
                    "batch_size": len(by_id)
                },
                original_exception=e
            )

        rowcount = getattr(result, "rowcount", None)
        affected = rowcount if isinstance(rowcount, int) and rowcount > 0 else 0

        logger.info(f"Upserted {affected}/{len(by_id)} rows into {JobPosting.__tablename__}")
        return affected
