"""
In-Memory Storage Implementation

Dictionary-backed document store. Used by the test-suite and for local
development without Firebase credentials (STORAGE_BACKEND=memory).

Documents are deep-copied on the way in and out so callers can never
mutate stored state by accident. Query results keep insertion order.
"""

import copy
from typing import Any, Optional
from uuid import uuid4

from finance_tracker.services.storage.interface import (
    DocumentStore,
    StoredDocument,
)


class InMemoryDocumentStore(DocumentStore):
    """Document store kept in process memory. Not shared between processes."""

    def __init__(self):
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = uuid4().hex[:20]
        self._collection(collection)[doc_id] = copy.deepcopy(data)
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        data = self._collection(collection).get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._collection(collection)[doc_id] = copy.deepcopy(data)

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    async def query(
        self,
        collection: str,
        filters: list[tuple[str, Any]],
    ) -> list[StoredDocument]:
        results = []
        for doc_id, data in self._collection(collection).items():
            if all(field in data and data[field] == value for field, value in filters):
                results.append(StoredDocument(doc_id, copy.deepcopy(data)))
        return results
