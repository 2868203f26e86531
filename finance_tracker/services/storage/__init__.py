"""
Storage Services Package

Provides the abstract document store interface and its implementations.
Firestore is the production backend; the in-memory store backs tests
and local development.
"""

from finance_tracker.services.storage.interface import (
    DocumentStore,
    StorageError,
    StorageUnavailableError,
    StoredDocument,
)
from finance_tracker.services.storage.memory import InMemoryDocumentStore

__all__ = [
    # Interface
    "DocumentStore",
    "StoredDocument",
    # Exceptions
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryDocumentStore",
]
