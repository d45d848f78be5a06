import pytest

from jobconsole.core.settings import DEFAULT_API_URL, ConsoleSettings


def test_defaults_when_environment_is_empty(monkeypatch):
    for key in ("JOB_CONSOLE_API_URL", "JOB_CONSOLE_TIMEOUT", "API_CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    settings = ConsoleSettings.from_env()

    assert settings.api_url == DEFAULT_API_URL
    assert settings.timeout == 30.0
    assert settings.cors_origins == ["http://localhost:3000", "http://127.0.0.1:3000"]
    assert settings.debounce_seconds == 0.3
    assert settings.notification_ttl == 4.5


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JOB_CONSOLE_API_URL", "https://imports.example.com/")
    monkeypatch.setenv("JOB_CONSOLE_TIMEOUT", "5")
    monkeypatch.setenv("API_CORS_ORIGINS", "https://console.example.com, ,https://ops.example.com")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = ConsoleSettings.from_env()

    assert settings.api_url == "https://imports.example.com"
    assert settings.timeout == 5.0
    assert settings.cors_origins == ["https://console.example.com", "https://ops.example.com"]
    assert settings.log_level == "DEBUG"


def test_api_url_must_include_scheme_and_host():
    with pytest.raises(ValueError):
        ConsoleSettings(api_url="imports.example.com")
