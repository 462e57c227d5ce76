import pytest
from fastapi.testclient import TestClient

from easytech_api.config import Settings
from easytech_api.main import create_app
from easytech_api.storage import StorageError


def test_root_and_health(client):
    assert client.get("/").json() == {"name": "EasyTechAPI", "version": "1.0.0", "status": "running"}
    assert client.get("/health").json() == {"status": "healthy"}


def test_storage_failure_returns_generic_500(client, monkeypatch):
    def broken():
        raise StorageError("disk I/O error at /var/lib/db")

    monkeypatch.setattr(client.app.state.storage, "list_services", broken)

    response = client.get("/api/services")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error", "message": "Internal server error"}


def test_settings_require_session_secret(monkeypatch):
    monkeypatch.delenv("SESSION_SECRET", raising=False)
    monkeypatch.setattr("easytech_api.config.load_dotenv", lambda: None)
    with pytest.raises(ValueError):
        Settings.from_env()


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setattr("easytech_api.config.load_dotenv", lambda: None)
    monkeypatch.setenv("SESSION_SECRET", "s3cret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'env.db'}")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("COOKIE_SECURE", "true")

    settings = Settings.from_env()

    assert settings.session_secret == "s3cret"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.cookie_secure is True
    assert settings.admin_password is None

    with TestClient(create_app(settings)) as client:
        assert client.get("/health").status_code == 200
