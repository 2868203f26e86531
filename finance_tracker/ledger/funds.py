"""
Savings Funds Settings

One document per user, keyed by the user's uid, holding the emergency
and vacation funds.

Reads never create the document. Writes replace whole funds: a fund
present in the update is overwritten entirely, a fund absent from it
keeps its stored value (or the default). The merged result overwrites
the whole document. Read-modify-write atomicity relies on the store's
per-document consistency; there is no locking here.
"""

from typing import Any

from finance_tracker.logger import get_logger
from finance_tracker.models.funds import FUND_NAMES, FundsUpdate, default_fund
from finance_tracker.models.user import VerifiedUser
from finance_tracker.services.storage import DocumentStore


FUNDS_COLLECTION = "funds"

logger = get_logger(__name__)


class FundsStore:
    """Reads and merges a user's funds settings."""

    def __init__(self, store: DocumentStore):
        self._store = store

    async def read(self, caller: VerifiedUser) -> dict[str, Any]:
        """Stored funds, with defaults for anything never saved."""
        data = await self._store.get(FUNDS_COLLECTION, caller.uid) or {}
        return {name: data.get(name) or default_fund() for name in FUND_NAMES}

    async def write(self, caller: VerifiedUser, update: FundsUpdate) -> dict[str, Any]:
        """
        Merge a partial update into the stored funds.

        Returns:
            The full merged document as stored
        """
        existing = await self.read(caller)

        merged = {}
        for name in FUND_NAMES:
            incoming = getattr(update, name)
            merged[name] = incoming.model_dump() if incoming is not None else existing[name]

        await self._store.set(FUNDS_COLLECTION, caller.uid, merged)
        logger.info(
            "funds_updated",
            user_id=caller.uid,
            updated=[name for name in FUND_NAMES if getattr(update, name) is not None],
        )
        return merged
