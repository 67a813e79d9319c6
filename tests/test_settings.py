"""Tests for environment-driven configuration."""

from config import ClientSettings, ServerSettings


def test_server_defaults(monkeypatch):
    for name in ("DOCS_ROOT", "PORT", "ALLOWED_ORIGINS", "DEPLOYMENT_KEY", "UPLINK_URL", "LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    settings = ServerSettings.from_env()
    assert settings.port == 3001
    assert settings.allowed_origins == ["http://localhost:3002", "https://platform.stefankruik.com"]
    assert settings.deployment_key is None
    assert settings.uplink_url is None
    assert settings.uplink_exchange == "platform"
    assert settings.uplink_routing_key == "server"
    assert settings.refresh_rate_limit == "10 per 2 minutes"
    assert settings.log_json is False


def test_server_from_env(monkeypatch):
    monkeypatch.setenv("DOCS_ROOT", "/srv/docs")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("DEPLOYMENT_KEY", "k")
    monkeypatch.setenv("UPLINK_URL", "amqp://broker/")
    monkeypatch.setenv("LOG_JSON", "true")
    settings = ServerSettings.from_env()
    assert settings.docs_root == "/srv/docs"
    assert settings.port == 8080
    assert settings.allowed_origins == ["https://a.example", "https://b.example"]
    assert settings.deployment_key == "k"
    assert settings.uplink_url == "amqp://broker/"
    assert settings.log_json is True


def test_empty_secrets_are_unset(monkeypatch):
    monkeypatch.setenv("DEPLOYMENT_KEY", "")
    monkeypatch.setenv("UPLINK_URL", "")
    settings = ServerSettings.from_env()
    assert settings.deployment_key is None
    assert settings.uplink_url is None


def test_client_from_env(monkeypatch):
    monkeypatch.setenv("DOCS_API_BASE", "https://docs.example.com")
    monkeypatch.setenv("DOCS_STORAGE_PATH", "/tmp/store.json")
    settings = ClientSettings.from_env()
    assert settings.api_base == "https://docs.example.com"
    assert settings.storage_path == "/tmp/store.json"
