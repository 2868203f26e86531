"""
Cloud Firestore Storage Implementation

DESIGN DECISION: Firestore is the production backend because the client
already authenticates against the same Firebase project, and it gives us
per-document atomic writes and indexed equality queries without running
a database.

TRADEOFFS:
- Equality filters on userId + year (+ month) need composite indexes,
  which Firestore suggests on the first failing query
- No retries here: errors propagate to the request immediately
"""

from typing import Any, Optional

from firebase_admin import App, firestore_async
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from finance_tracker.services.storage.interface import (
    DocumentStore,
    StorageError,
    StorageUnavailableError,
    StoredDocument,
)


UNAVAILABLE_ERRORS = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
)


class FirestoreDocumentStore(DocumentStore):
    """
    Firestore implementation of the document store.

    Wraps the async client from firebase_admin so every call suspends on
    I/O instead of blocking the event loop.
    """

    def __init__(self, client):
        self._client = client

    @classmethod
    def from_app(cls, app: App) -> "FirestoreDocumentStore":
        return cls(firestore_async.client(app))

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Insert a document and return its generated ID."""
        try:
            _, ref = await self._client.collection(collection).add(data)
            return ref.id
        except UNAVAILABLE_ERRORS as e:
            raise StorageUnavailableError(f"Firestore unavailable: {e}") from e
        except Exception as e:
            raise StorageError(f"Failed to add document to {collection}: {e}") from e

    async def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        try:
            snapshot = await self._client.collection(collection).document(doc_id).get()
        except UNAVAILABLE_ERRORS as e:
            raise StorageUnavailableError(f"Firestore unavailable: {e}") from e
        except Exception as e:
            raise StorageError(f"Failed to get {collection}/{doc_id}: {e}") from e

        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Full overwrite (no merge) of a single document."""
        try:
            await self._client.collection(collection).document(doc_id).set(data)
        except UNAVAILABLE_ERRORS as e:
            raise StorageUnavailableError(f"Firestore unavailable: {e}") from e
        except Exception as e:
            raise StorageError(f"Failed to write {collection}/{doc_id}: {e}") from e

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            await self._client.collection(collection).document(doc_id).delete()
        except UNAVAILABLE_ERRORS as e:
            raise StorageUnavailableError(f"Firestore unavailable: {e}") from e
        except Exception as e:
            raise StorageError(f"Failed to delete {collection}/{doc_id}: {e}") from e

    async def query(
        self,
        collection: str,
        filters: list[tuple[str, Any]],
    ) -> list[StoredDocument]:
        query = self._client.collection(collection)
        for field, value in filters:
            query = query.where(filter=FieldFilter(field, "==", value))

        try:
            snapshots = await query.get()
        except UNAVAILABLE_ERRORS as e:
            raise StorageUnavailableError(f"Firestore unavailable: {e}") from e
        except Exception as e:
            raise StorageError(f"Failed to query {collection}: {e}") from e

        return [StoredDocument(snap.id, snap.to_dict() or {}) for snap in snapshots]
