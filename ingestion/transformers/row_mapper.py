"""
Transform API listings into flattened, null-safe storage rows
"""

from typing import Any, Callable, List, Optional
from datetime import datetime, timezone
from schemas.normalized import JobPostingRow
from schemas.source import SourceRecord
import logging

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RowMapper:
    """
    Map a SourceRecord to a JobPostingRow.

    Handles:
    - Flattening the company sub-record
    - Default values (0 for career bounds and views, [] for taxonomy lists)
    - Lenient timestamp parsing
    - Capture timestamp (scraped_at)

    The mapping is total: sparse or odd input still yields a valid row.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self.clock = clock

    def map(self, record: SourceRecord) -> JobPostingRow:
        company = record.company

        return JobPostingRow(
            id=record.id,
            affiliate=record.affiliate,
            title=record.title,
            deadline_type=record.deadline_type,
            end_date=self._parse_datetime(record.end_date),
            created_at=self._parse_datetime(record.created_at),
            career_min=record.career_min if record.career_min is not None else 0,
            career_max=record.career_max if record.career_max is not None else 0,
            company_id=company.id if company else None,
            company_name=company.name if company else None,
            company_image=company.image if company else None,
            regions=self._list(record.regions),
            employee_types=self._list(record.employee_types),
            educations=self._list(record.educations),
            depth_ones=self._list(record.depth_ones),
            depth_twos=self._list(record.depth_twos),
            depth_threes=self._list(record.depth_threes),
            keywords=self._list(record.keywords),
            tags=self._list(record.tags),
            badges=self._list(record.badges),
            views=record.views if record.views is not None else 0,
            scraped_at=self.clock(),
        )

    def map_many(self, records: List[SourceRecord]) -> List[JobPostingRow]:
        return [self.map(record) for record in records]

    @staticmethod
    def _list(value: Optional[List[str]]) -> List[str]:
        return list(value) if value is not None else []

    @staticmethod
    def _parse_datetime(value: Any) -> Optional[datetime]:
        """
        Safely parse an API timestamp.

        Offset-aware values are converted to naive UTC; naive values are kept
        as sent. Anything unparseable becomes None.
        """
        if value is None or value == "":
            return None
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Unparseable timestamp from API: {value!r}")
            return None
        if parsed.tzinfo is not None:
            try:
                parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
            except (ValueError, OverflowError):
                logger.debug(f"Timestamp out of range in UTC: {value!r}")
                return None
        return parsed
