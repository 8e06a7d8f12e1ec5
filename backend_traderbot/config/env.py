"""
Environment variable loading for TraderBot.

- DATABASE_URL: SQLAlchemy URL for the transaction store (PostgreSQL etc.)
- TRADERBOT_DB_PATH: SQLite file used when DATABASE_URL is unset (default: traderbot.db)
- ANALYTICS_TIMEZONE: IANA zone used for chart dates and day keys (default: UTC)
- ANALYTICS_TIMELINE_LIMIT: number of entries in the activity timeline (default: 8)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Project root: config is backend_traderbot/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_SQLITE_PATH = "traderbot.db"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_TIMELINE_LIMIT = 8


def load_traderbot_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def get_database_url() -> str:
    """
    Resolve the transaction store URL.
    Order: TRADERBOT_DB_URL > DATABASE_URL > sqlite:///TRADERBOT_DB_PATH.
    """
    load_traderbot_env()
    url = (os.getenv("TRADERBOT_DB_URL") or os.getenv("DATABASE_URL") or "").strip()
    if url:
        return url
    path = (os.getenv("TRADERBOT_DB_PATH") or "").strip() or DEFAULT_SQLITE_PATH
    return f"sqlite:///{path}"


def get_analytics_timezone_name() -> str:
    load_traderbot_env()
    return (os.getenv("ANALYTICS_TIMEZONE") or "").strip() or DEFAULT_TIMEZONE


def get_analytics_timezone() -> tzinfo:
    """
    Return the display timezone for chart dates. Unknown zone names fall back to UTC
    so that analytics requests never fail on a bad setting.
    """
    name = get_analytics_timezone_name()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        from backend_traderbot.traderbot_logging import get_logger

        get_logger(__name__).warning("analytics_timezone_invalid", timezone=name, fallback=DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def get_timeline_limit() -> int:
    """Return ANALYTICS_TIMELINE_LIMIT (positive int), default 8."""
    load_traderbot_env()
    raw = (os.getenv("ANALYTICS_TIMELINE_LIMIT") or "").strip()
    try:
        value = int(raw) if raw else DEFAULT_TIMELINE_LIMIT
    except ValueError:
        return DEFAULT_TIMELINE_LIMIT
    return value if value > 0 else DEFAULT_TIMELINE_LIMIT
