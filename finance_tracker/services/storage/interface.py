"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for document storage.
This allows us to:
1. Run against Cloud Firestore in production
2. Use in-memory storage for testing and local development
3. Keep ownership and aggregation logic decoupled from the backend

The interface is intentionally small - it is the subset of document
database operations the ledger needs: add, get, set, delete and
equality-filtered queries.
"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional


class StoredDocument(NamedTuple):
    """A document together with its store-generated identifier."""
    id: str
    data: dict[str, Any]

    def to_record(self) -> dict[str, Any]:
        """Flatten into the wire shape: {id, ...data}."""
        return {"id": self.id, **self.data}


class DocumentStore(ABC):
    """
    Abstract interface for document storage operations.

    Any storage implementation (Firestore, in-memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """
        Insert a document with a generated ID.

        Args:
            collection: Collection name
            data: Document body

        Returns:
            The generated document ID

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        """
        Fetch a single document.

        Returns:
            The document body if it exists, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """
        Create or fully overwrite the document with the given ID.
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """
        Delete a document. Deleting a missing document is not an error.
        """
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: list[tuple[str, Any]],
    ) -> list[StoredDocument]:
        """
        List documents matching every equality filter.

        Args:
            collection: Collection name
            filters: (field, value) pairs, applied in order

        Returns:
            Matching documents in backend order
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """The storage backend is not configured or could not be reached."""
    pass
