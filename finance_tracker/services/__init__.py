"""Services package: identity verification, document storage, client bootstrap."""

from finance_tracker.services.identity import (
    IdentityError,
    IdentityUnavailableError,
    IdentityVerifier,
    InvalidTokenError,
)
from finance_tracker.services.storage import (
    DocumentStore,
    InMemoryDocumentStore,
    StorageError,
    StorageUnavailableError,
    StoredDocument,
)

__all__ = [
    # Identity
    "IdentityError",
    "IdentityUnavailableError",
    "IdentityVerifier",
    "InvalidTokenError",
    # Storage
    "DocumentStore",
    "InMemoryDocumentStore",
    "StorageError",
    "StorageUnavailableError",
    "StoredDocument",
]
