"""
Application settings and environment configuration.

Responsibilities:
- Load configuration from environment variables and .env files.
- Provide defaults for optional settings.
- Expose typed settings (database URL, API host/port, log level, analytics
  display timezone) for use across the store, analytics and API server.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from backend_traderbot.config.env import (
    get_analytics_timezone_name,
    get_database_url,
    get_timeline_limit,
    load_traderbot_env,
)


@dataclass(frozen=True)
class Settings:
    database_url: str
    api_host: str
    api_port: int
    log_level: str
    log_format: str
    analytics_timezone: str
    timeline_limit: int


def get_settings() -> Settings:
    """
    Return the current application settings, read fresh from the environment.

    Returns:
        Settings with database_url, api_host, api_port, log_level, log_format,
        analytics_timezone and timeline_limit.
    """
    load_traderbot_env()
    return Settings(
        database_url=get_database_url(),
        api_host=os.getenv("API_HOST", "0.0.0.0").strip() or "0.0.0.0",
        api_port=int(os.getenv("API_PORT", "8000").strip() or "8000"),
        log_level=os.getenv("LOG_LEVEL", "info").strip().lower() or "info",
        log_format=os.getenv("LOG_FORMAT", "json").strip().lower() or "json",
        analytics_timezone=get_analytics_timezone_name(),
        timeline_limit=get_timeline_limit(),
    )
