"""Tests for settings, credential discovery and client bootstrap."""

import pytest
from fastapi.testclient import TestClient

from finance_tracker.api import create_app
from finance_tracker.config import AppSettings, FirebaseSettings, Settings, validate_all_settings
from finance_tracker.services.clients import (
    ServiceClients,
    create_service_clients,
    credential_sources,
    find_key_file,
)
from finance_tracker.services.storage import InMemoryDocumentStore

from tests.conftest import TOKENS, StaticTokenVerifier


CREDENTIAL_ENV_VARS = ("GOOGLE_APPLICATION_CREDENTIALS", "FIREBASE_SERVICE_ACCOUNT", "FIREBASE_PROJECT_ID")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No ambient credentials; key search pointed at an empty directory."""
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FIREBASE_KEY_SEARCH_DIR", str(tmp_path))
    return tmp_path


class TestAppSettings:
    """Tests for application settings."""

    def test_defaults(self, monkeypatch):
        """Test the default port and environment."""
        for name in ("PORT", "APP_ENVIRONMENT", "SERVE_STATIC", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings()
        assert settings.port == 3001
        assert settings.cors_origins_list == ["*"]
        assert settings.should_serve_static is False

    def test_production_serves_static(self, monkeypatch):
        """Test that production turns on static serving by default."""
        monkeypatch.delenv("SERVE_STATIC", raising=False)
        monkeypatch.setenv("APP_ENVIRONMENT", "production")
        assert AppSettings().should_serve_static is True

    def test_cors_origins_list(self, monkeypatch):
        """Test comma-separated origins."""
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://ledger.example.com")
        assert AppSettings().cors_origins_list == [
            "http://localhost:5173",
            "https://ledger.example.com",
        ]

    def test_port_from_env(self, monkeypatch):
        """Test PORT is read from the environment."""
        monkeypatch.setenv("PORT", "8080")
        assert AppSettings().port == 8080

    def test_validate_all_settings(self, clean_env):
        """Test the startup check."""
        results = validate_all_settings()
        assert results["firebase"] is True
        assert results["app"] is True

    def test_validate_all_settings_reports_errors(self, clean_env, monkeypatch):
        """Test that a bad section is reported with its message."""
        monkeypatch.setenv("PORT", "not-a-port")
        results = validate_all_settings(Settings())
        assert results["firebase"] is True
        assert results["app"] is False
        assert "port" in results["app_error"]

    def test_create_app_runs_startup_check(self, monkeypatch):
        """Test that building the app validates settings first."""
        checked = []

        def record_check(settings=None):
            checked.append(settings)
            return {"firebase": True, "app": True}

        monkeypatch.setattr("finance_tracker.api.app.validate_all_settings", record_check)
        settings = Settings()
        create_app(settings=settings, clients=ServiceClients())
        assert checked == [settings]


class TestCredentialDiscovery:
    """Tests for first-match-wins credential lookup."""

    def test_no_sources(self, clean_env):
        """Test that nothing configured yields no candidates."""
        assert credential_sources(FirebaseSettings()) == []

    def test_blank_env_is_unset(self, clean_env, monkeypatch):
        """Test that empty environment variables are ignored."""
        monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT", "  ")
        assert FirebaseSettings().service_account is None

    def test_priority_order(self, clean_env, monkeypatch):
        """Test the order sources are tried in."""
        (clean_env / "serviceAccountKey.json").write_text("{}")
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", "/etc/gcp/key.json")
        monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT", '{"type": "service_account"}')

        names = [name for name, _ in credential_sources(FirebaseSettings())]
        assert names == ["application default", "env JSON", "serviceAccountKey.json"]

    def test_find_key_file_prefers_default_name(self, tmp_path):
        """Test serviceAccountKey.json beats an adminsdk file."""
        (tmp_path / "proj-firebase-adminsdk-x1.json").write_text("{}")
        (tmp_path / "serviceAccountKey.json").write_text("{}")
        assert find_key_file(tmp_path).name == "serviceAccountKey.json"

    def test_find_key_file_adminsdk(self, tmp_path):
        """Test the *firebase*adminsdk*.json fallback."""
        (tmp_path / "package.json").write_text("{}")
        (tmp_path / "proj-firebase-adminsdk-x1.json").write_text("{}")
        assert find_key_file(tmp_path).name == "proj-firebase-adminsdk-x1.json"

    def test_find_key_file_missing_dir(self, tmp_path):
        """Test a directory that does not exist."""
        assert find_key_file(tmp_path / "nowhere") is None


class TestServiceClients:
    """Tests for client bootstrap without Firebase."""

    def test_unconfigured(self, clean_env, monkeypatch):
        """Test that missing credentials leave both clients unset."""
        monkeypatch.setenv("STORAGE_BACKEND", "firestore")
        clients = create_service_clients(Settings())
        assert clients == ServiceClients()
        assert clients.identity_configured is False
        assert clients.store_configured is False

    def test_memory_backend(self, clean_env, monkeypatch):
        """Test the in-memory store for local development."""
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        clients = create_service_clients(Settings())
        assert isinstance(clients.store, InMemoryDocumentStore)
        assert clients.identity is None

    def test_clients_are_immutable(self):
        """Test that ServiceClients cannot be reassigned after startup."""
        clients = ServiceClients()
        with pytest.raises(AttributeError):
            clients.store = InMemoryDocumentStore()


class TestStaticClient:
    """Tests for serving the built client."""

    @pytest.fixture
    def client(self, tmp_path, monkeypatch):
        (tmp_path / "index.html").write_text("<html>ledger</html>")
        (tmp_path / "app.js").write_text("console.log('ledger')")
        monkeypatch.setenv("SERVE_STATIC", "true")
        monkeypatch.setenv("STATIC_DIR", str(tmp_path))

        clients = ServiceClients(identity=StaticTokenVerifier(TOKENS), store=InMemoryDocumentStore())
        return TestClient(create_app(settings=Settings(), clients=clients))

    def test_index(self, client):
        """Test the root path serves index.html."""
        response = client.get("/")
        assert response.status_code == 200
        assert "ledger" in response.text

    def test_asset(self, client):
        """Test a built asset is served as-is."""
        assert client.get("/app.js").text == "console.log('ledger')"

    def test_client_route_falls_back_to_index(self, client):
        """Test client-side routes get index.html."""
        response = client.get("/dashboard/2024/3")
        assert response.status_code == 200
        assert "<html>ledger</html>" in response.text

    def test_api_routes_still_win(self, client):
        """Test that the API is not shadowed by the client bundle."""
        assert client.get("/api/funds").status_code == 401
        assert client.get("/api/unknown").status_code == 404
