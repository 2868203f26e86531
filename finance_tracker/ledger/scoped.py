"""
Owner-Scoped Collection Access

Every read and write of user data goes through a ScopedCollection bound
to one collection and one owner.

GUARANTEES:
- list() always filters on the owner before any other predicate
- get() and delete() fetch first, then check ownership
- A document owned by someone else looks exactly like a missing one
"""

from typing import Any, Optional

from finance_tracker.errors import NotFound
from finance_tracker.models.records import OWNER_FIELD
from finance_tracker.services.storage import DocumentStore, StoredDocument


def belongs_to_caller(doc: Optional[dict[str, Any]], caller_id: str) -> bool:
    """True if the document exists and is owned by caller_id."""
    return doc is not None and doc.get(OWNER_FIELD) == caller_id


class ScopedCollection:
    """A collection view restricted to one owner's documents."""

    def __init__(self, store: DocumentStore, collection: str, owner_id: str):
        self._store = store
        self.collection = collection
        self.owner_id = owner_id

    async def list(self, **filters: Any) -> list[StoredDocument]:
        """List the owner's documents matching additional equality filters."""
        predicates = [(OWNER_FIELD, self.owner_id), *filters.items()]
        return await self._store.query(self.collection, predicates)

    async def add(self, data: dict[str, Any]) -> StoredDocument:
        """Insert a document stamped with the owner."""
        data = {**data, OWNER_FIELD: self.owner_id}
        doc_id = await self._store.add(self.collection, data)
        return StoredDocument(doc_id, data)

    async def get(self, doc_id: str) -> StoredDocument:
        data = await self._store.get(self.collection, doc_id)
        if not belongs_to_caller(data, self.owner_id):
            raise NotFound()
        return StoredDocument(doc_id, data)

    async def delete(self, doc_id: str) -> None:
        """Delete one of the owner's documents, or raise NotFound."""
        await self.get(doc_id)
        await self._store.delete(self.collection, doc_id)
