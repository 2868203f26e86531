"""
Time-Window Aggregation

Answers "everything I recorded in 2024" or "everything in March 2024"
in one response by querying the four transactional collections
concurrently.

GUARANTEES:
- Only the caller's documents are returned
- All four queries succeed or the whole request fails; no partial payloads
- Records keep query order; they are not sorted by date
"""

import asyncio
from typing import Any, Optional

from finance_tracker.ledger.records import RecordService
from finance_tracker.logger import get_logger
from finance_tracker.models.records import RecordKind
from finance_tracker.models.user import VerifiedUser


logger = get_logger(__name__)


class TimeWindowAggregator:
    """Fans out one owner + window query per transactional collection."""

    def __init__(self, records: RecordService):
        self._records = records

    async def aggregate(
        self,
        caller: VerifiedUser,
        year: int,
        month: Optional[int] = None,
    ) -> dict[str, list[dict[str, Any]]]:
        """
        Collect the caller's records for a year, or a year and month.

        Returns:
            {"salaries": [...], "expenses": [...], "investments": [...], "activities": [...]}

        Raises:
            The first error raised by any of the four queries
        """
        kinds = list(RecordKind)
        results = await asyncio.gather(
            *(self._records.list(kind, caller, year, month) for kind in kinds)
        )

        logger.debug(
            "window_aggregated",
            user_id=caller.uid,
            year=year,
            month=month,
            counts={kind.value: len(items) for kind, items in zip(kinds, results)},
        )
        return {kind.value: items for kind, items in zip(kinds, results)}
