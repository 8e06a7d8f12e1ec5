"""
Shared helpers for the analytics derivations: date rendering and token accumulation.
parse_amount is re-exported from core.amounts.

Every helper returns a defined value; malformed input never propagates as an
error or as NaN.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo

from backend_traderbot.core.amounts import parse_amount  # noqa: F401

DAY_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _to_datetime(timestamp_ms: int, tz: tzinfo | None) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=tz or timezone.utc)


def format_day(timestamp_ms: int, tz: tzinfo | None = None) -> str:
    """Calendar day key (YYYY-MM-DD) of an epoch-ms timestamp in the display timezone."""
    return _to_datetime(timestamp_ms, tz).strftime(DAY_FORMAT)


def format_datetime(timestamp_ms: int, tz: tzinfo | None = None) -> str:
    """Human-readable date and time of an epoch-ms timestamp in the display timezone."""
    return _to_datetime(timestamp_ms, tz).strftime(DATETIME_FORMAT)


def add_amount(totals: dict[str, float], token: str, amount: float) -> None:
    """Accumulate amount into totals[token]."""
    totals[token] = totals.get(token, 0.0) + amount
