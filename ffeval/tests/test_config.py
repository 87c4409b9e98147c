# ffeval/tests/test_config.py
"""
Tests for environment-based settings.
"""


from ffeval.config import DEFAULT_CORS_ORIGINS, load_settings


def _clear(monkeypatch):
    for name in ("FFEVAL_HOST", "FFEVAL_PORT", "DEBUG", "LOG_LEVEL", "FFEVAL_CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)
    settings = load_settings()
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.debug is False
    assert settings.log_level == "INFO"
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_environment_overrides(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("FFEVAL_PORT", "9100")
    monkeypatch.setenv("DEBUG", "TRUE")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("FFEVAL_CORS_ORIGINS", "https://a.example, https://b.example,")
    settings = load_settings()
    assert settings.port == 9100
    assert settings.debug is True
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ("https://a.example", "https://b.example")


def test_invalid_port_falls_back(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("FFEVAL_PORT", "eighty")
    assert load_settings().port == 8000
