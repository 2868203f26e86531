"""
Service Client Bootstrap

Builds the external clients once at startup and hands them to the HTTP
layer as an immutable ServiceClients value.

Firebase credentials are looked up in order, first match wins:
1. GOOGLE_APPLICATION_CREDENTIALS (application default credentials)
2. FIREBASE_SERVICE_ACCOUNT (inline service account JSON)
3. serviceAccountKey.json in the key search directory
4. any *firebase*adminsdk*.json in the key search directory

If no source works the clients stay unset and every API request answers
503 instead of the process refusing to start.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import firebase_admin
from firebase_admin import credentials

from finance_tracker.config import FirebaseSettings, Settings, get_settings
from finance_tracker.logger import get_logger
from finance_tracker.services.identity import IdentityVerifier
from finance_tracker.services.identity.firebase_auth import FirebaseIdentityVerifier
from finance_tracker.services.storage import DocumentStore, InMemoryDocumentStore
from finance_tracker.services.storage.firestore import FirestoreDocumentStore


FIREBASE_APP_NAME = "finance-tracker"
SERVICE_ACCOUNT_KEY_FILE = "serviceAccountKey.json"
SETUP_HINT = (
    "Set GOOGLE_APPLICATION_CREDENTIALS (path to serviceAccountKey.json) or "
    "FIREBASE_SERVICE_ACCOUNT (JSON string) in .env, or place "
    "serviceAccountKey.json in the project root."
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ServiceClients:
    """
    External collaborators used by request handlers.

    Either field may be None when its service is not configured.
    """
    identity: Optional[IdentityVerifier] = None
    store: Optional[DocumentStore] = None

    @property
    def identity_configured(self) -> bool:
        return self.identity is not None

    @property
    def store_configured(self) -> bool:
        return self.store is not None


def find_key_file(search_dir: Path) -> Optional[Path]:
    """Locate a service account key file in a directory."""
    key_path = search_dir / SERVICE_ACCOUNT_KEY_FILE
    if key_path.exists():
        return key_path

    if not search_dir.is_dir():
        return None

    for candidate in sorted(search_dir.glob("*.json")):
        if "firebase" in candidate.name and "adminsdk" in candidate.name:
            return candidate
    return None


def credential_sources(
    firebase: FirebaseSettings,
) -> list[tuple[str, Callable[[], credentials.Base]]]:
    """
    Candidate credentials in priority order.

    Each entry is (source name, factory). Factories are only called when
    the source is tried, so a broken source never blocks a later one
    from being considered.
    """
    sources = []

    if firebase.application_credentials:
        sources.append(("application default", credentials.ApplicationDefault))

    if firebase.service_account:
        raw = firebase.service_account
        sources.append(("env JSON", lambda: credentials.Certificate(json.loads(raw))))

    key_file = find_key_file(Path(firebase.key_search_dir))
    if key_file is not None:
        sources.append((key_file.name, lambda: credentials.Certificate(str(key_file))))

    return sources


def _initialize_app(credential: credentials.Base, project_id: Optional[str]) -> firebase_admin.App:
    options = {"projectId": project_id} if project_id else None
    try:
        existing = firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass
    else:
        firebase_admin.delete_app(existing)
    return firebase_admin.initialize_app(credential, options, name=FIREBASE_APP_NAME)


def initialize_firebase(firebase: FirebaseSettings) -> Optional[firebase_admin.App]:
    """Initialize the Firebase Admin app from the first working credential source."""
    for source, factory in credential_sources(firebase):
        try:
            app = _initialize_app(factory(), firebase.project_id)
        except Exception as e:
            logger.error("firebase_init_failed", source=source, error=str(e))
            continue
        logger.info("firebase_initialized", source=source)
        return app

    logger.warning("firebase_not_configured", hint=SETUP_HINT)
    return None


def create_service_clients(settings: Optional[Settings] = None) -> ServiceClients:
    """
    Factory function to create all external clients.

    Args:
        settings: Settings to read; the cached settings by default.

    Returns:
        ServiceClients with whichever services could be configured
    """
    settings = settings or get_settings()
    app_settings = settings.app

    firebase_app = initialize_firebase(settings.firebase)
    identity = FirebaseIdentityVerifier(firebase_app) if firebase_app else None

    if app_settings.storage_backend == "memory":
        logger.warning("using_in_memory_storage")
        store = InMemoryDocumentStore()
    elif firebase_app is not None:
        store = FirestoreDocumentStore.from_app(firebase_app)
    else:
        store = None

    return ServiceClients(identity=identity, store=store)
