"""
Pytest tests for TraderBot configuration (env getters and Settings).
"""

from __future__ import annotations

from zoneinfo import ZoneInfo


def test_database_url_precedence(monkeypatch, tmp_path):
    from backend_traderbot.config.env import get_database_url

    monkeypatch.delenv("TRADERBOT_DB_URL", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("TRADERBOT_DB_PATH", str(tmp_path / "x.db"))
    assert get_database_url() == f"sqlite:///{tmp_path / 'x.db'}"

    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/traderbot")
    assert get_database_url() == "postgresql://u:p@db/traderbot"

    monkeypatch.setenv("TRADERBOT_DB_URL", "sqlite:///override.db")
    assert get_database_url() == "sqlite:///override.db"


def test_analytics_timezone_fallback(monkeypatch):
    """Unknown zone names fall back to UTC instead of failing requests."""
    from backend_traderbot.config.env import get_analytics_timezone

    monkeypatch.setenv("ANALYTICS_TIMEZONE", "Europe/Berlin")
    assert get_analytics_timezone() == ZoneInfo("Europe/Berlin")
    monkeypatch.setenv("ANALYTICS_TIMEZONE", "Not/AZone")
    assert get_analytics_timezone() == ZoneInfo("UTC")


def test_analytics_timezone_directory_name_falls_back(monkeypatch):
    """A zone name that resolves to a tzdata directory (not a zone file) falls back to UTC."""
    from backend_traderbot.config.env import get_analytics_timezone

    monkeypatch.setenv("ANALYTICS_TIMEZONE", "America")
    assert get_analytics_timezone() == ZoneInfo("UTC")


def test_timeline_limit(monkeypatch):
    from backend_traderbot.config.env import get_timeline_limit

    monkeypatch.delenv("ANALYTICS_TIMELINE_LIMIT", raising=False)
    assert get_timeline_limit() == 8
    monkeypatch.setenv("ANALYTICS_TIMELINE_LIMIT", "20")
    assert get_timeline_limit() == 20
    for bad in ("0", "-3", "many"):
        monkeypatch.setenv("ANALYTICS_TIMELINE_LIMIT", bad)
        assert get_timeline_limit() == 8


def test_get_settings(monkeypatch):
    from backend_traderbot.config import get_settings

    monkeypatch.setenv("API_PORT", "9001")
    monkeypatch.setenv("ANALYTICS_TIMEZONE", "UTC")
    settings = get_settings()
    assert settings.api_port == 9001
    assert settings.analytics_timezone == "UTC"
    assert settings.timeline_limit >= 1
