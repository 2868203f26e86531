"""Household members: a named list per user, ordered by creation time."""

from datetime import datetime, timezone
from typing import Any, Optional

from finance_tracker.errors import InvalidArgument
from finance_tracker.ledger.scoped import ScopedCollection
from finance_tracker.logger import get_logger
from finance_tracker.models.user import VerifiedUser
from finance_tracker.services.storage import DocumentStore, StoredDocument


MEMBERS_COLLECTION = "members"

logger = get_logger(__name__)


def _created_at_key(doc: StoredDocument) -> float:
    # Members without a timestamp sort first
    created_at = doc.data.get("createdAt")
    if isinstance(created_at, datetime):
        return created_at.timestamp()
    return 0.0


def _to_member(doc: StoredDocument) -> dict[str, Any]:
    return {
        "id": doc.id,
        "name": doc.data.get("name"),
        "createdAt": doc.data.get("createdAt"),
    }


class MemberService:
    """List, add and remove household members."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def _scoped(self, caller: VerifiedUser) -> ScopedCollection:
        return ScopedCollection(self._store, MEMBERS_COLLECTION, caller.uid)

    async def list(self, caller: VerifiedUser) -> list[dict[str, Any]]:
        docs = await self._scoped(caller).list()
        return [_to_member(doc) for doc in sorted(docs, key=_created_at_key)]

    async def create(self, caller: VerifiedUser, name: Optional[str]) -> dict[str, Any]:
        """
        Add a member.

        Raises:
            InvalidArgument: If the name is blank after trimming
        """
        name = (name or "").strip()
        if not name:
            raise InvalidArgument("Name is required")

        doc = await self._scoped(caller).add({
            "name": name,
            "createdAt": datetime.now(timezone.utc),
        })
        logger.info("member_created", member_id=doc.id, user_id=caller.uid)
        return _to_member(doc)

    async def delete(self, caller: VerifiedUser, member_id: str) -> None:
        await self._scoped(caller).delete(member_id)
        logger.info("member_deleted", member_id=member_id, user_id=caller.uid)
