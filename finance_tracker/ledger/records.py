"""
Transactional Records

Create, list and delete for salaries, expenses, investments and
activities. Records are never updated in place.
"""

from typing import Any, Optional

from finance_tracker.ledger.scoped import ScopedCollection
from finance_tracker.logger import get_logger
from finance_tracker.models.records import RecordKind, TransactionIn
from finance_tracker.models.user import VerifiedUser
from finance_tracker.services.storage import DocumentStore


logger = get_logger(__name__)


class RecordService:
    """
    CRUD over the four transactional collections.

    All access is scoped to the calling user.
    """

    def __init__(self, store: DocumentStore):
        self._store = store

    def scoped(self, kind: RecordKind, caller: VerifiedUser) -> ScopedCollection:
        return ScopedCollection(self._store, kind.value, caller.uid)

    async def create(
        self,
        kind: RecordKind,
        caller: VerifiedUser,
        payload: TransactionIn,
    ) -> dict[str, Any]:
        """
        Store a new record for the caller.

        Returns:
            The stored record including its generated id
        """
        doc = await self.scoped(kind, caller).add(payload.to_document(caller))
        logger.info("record_created", kind=kind.value, record_id=doc.id, user_id=caller.uid)
        return doc.to_record()

    async def list(
        self,
        kind: RecordKind,
        caller: VerifiedUser,
        year: int,
        month: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """List the caller's records for a year, or a year and month."""
        filters: dict[str, Any] = {"year": year}
        if month is not None:
            filters["month"] = month
        docs = await self.scoped(kind, caller).list(**filters)
        return [doc.to_record() for doc in docs]

    async def delete(self, kind: RecordKind, caller: VerifiedUser, record_id: str) -> None:
        """Delete one of the caller's records. Raises NotFound otherwise."""
        await self.scoped(kind, caller).delete(record_id)
        logger.info("record_deleted", kind=kind.value, record_id=record_id, user_id=caller.uid)
