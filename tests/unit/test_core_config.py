"""Unit tests for the core configuration module."""

import os
from unittest.mock import patch

from core.config import Settings, get_settings


def test_settings_defaults(monkeypatch):
    """Test that Settings initializes with expected defaults."""
    for name in ("LT_HOST", "LT_PORT", "CHUNK_SIZE", "LAYOUT_LINE_SPACING"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert settings.lt_host == "http://127.0.0.1"
    assert settings.lt_port == "8081"
    assert settings.chunk_size == 1000
    assert settings.check_concurrency == 1
    assert settings.layout_line_spacing == 0.65


def test_settings_with_env_vars(monkeypatch):
    """Test that Settings properly loads values from environment variables."""
    monkeypatch.setenv("LT_PORT", "8010")
    monkeypatch.setenv("CHUNK_SIZE", "250")
    monkeypatch.setenv("DEBOUNCE_SECONDS", "1.5")

    settings = Settings(_env_file=None)

    assert settings.lt_port == "8010"
    assert settings.chunk_size == 250
    assert settings.debounce_seconds == 1.5


def test_get_settings_singleton():
    """Test that get_settings returns the same instance each time."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
    assert isinstance(settings1, Settings)


def test_settings_extra_field_handling():
    """Test that settings ignores extra fields."""
    with patch.dict(os.environ, {"UNKNOWN_FIELD": "value"}):
        settings = Settings(_env_file=None)

    assert hasattr(settings, "lt_host")
