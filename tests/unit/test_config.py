"""Unit tests for core configuration."""

from backend.core.config import Settings, settings


def test_settings_initialization():
    """Test settings are initialized properly."""
    assert settings.APP_NAME == "Backend API"
    assert settings.APP_VERSION == "1.0.0"
    assert settings.DOCS_URL == "/docs"


def test_settings_test_environment():
    """Test the test suite runs against in-memory SQLite."""
    assert settings.ENVIRONMENT == "test"
    assert settings.DATABASE_URL == "sqlite://"
    assert settings.is_sqlite
    assert not settings.is_production


def test_settings_default_origins():
    """Test default CORS origins cover the local web client."""
    assert "http://localhost:3000" in settings.ALLOWED_ORIGINS
    assert "PUT" in settings.ALLOWED_METHODS
    assert "DELETE" in settings.ALLOWED_METHODS


def test_allowed_origins_from_env(monkeypatch):
    """Test comma-separated ALLOWED_ORIGINS override."""
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example.com, https://b.example.com")

    custom = Settings()

    assert custom.ALLOWED_ORIGINS == ["https://a.example.com", "https://b.example.com"]
    assert custom.ALLOW_CREDENTIALS is True


def test_wildcard_origin_disables_credentials(monkeypatch):
    """Test '*' origin turns off credentialed CORS."""
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")

    custom = Settings()

    assert custom.ALLOWED_ORIGINS == ["*"]
    assert custom.ALLOW_CREDENTIALS is False


def test_server_url_set():
    """Test the published server URL is always set."""
    assert settings.SERVER_URL.startswith("http")


def test_codegen_outputs():
    """Test generated artefact paths."""
    assert settings.OPENAPI_OUTPUT.name == "openapi.json"
    assert settings.TYPESCRIPT_OUTPUT.name == "api-types.ts"
