"""
Structured logging for the transaction log and analytics API.

Every entry carries event_type, an ISO timestamp, the level and the module
logger name. Wallet-scoped entries carry a shortened `wallet` field so that
full addresses do not end up in aggregated logs.

LOG_LEVEL and LOG_FORMAT (json | console) are read at import; main.py
reconfigures from Settings before the server starts.

No backend_traderbot imports here: config and store import this module.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"
WALLET_LOG_CHARS = 16


def short_wallet(wallet: Any) -> str:
    """First WALLET_LOG_CHARS characters of an address, with '...' when cut."""
    text = str(wallet or "").strip()
    if len(text) <= WALLET_LOG_CHARS:
        return text
    return text[:WALLET_LOG_CHARS] + "..."


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _shorten_wallet(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    if "wallet" in event_dict:
        event_dict["wallet"] = short_wallet(event_dict["wallet"])
    return event_dict


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's positional 'event' becomes event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """
    (Re)configure structlog.

    level: stdlib level name; unknown names mean INFO.
    fmt: "json" renders one JSON object per line, anything else the dev console renderer.
    """
    level_name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    level_value = getattr(logging, level_name, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO
    fmt = (fmt or os.getenv("LOG_FORMAT") or DEFAULT_LOG_FORMAT).strip().lower()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
        _shorten_wallet,
    ]
    if fmt == "json":
        processors += [_event_type, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger:

        logger = get_logger(__name__)
        logger.info("transactions_analytics_built", record_count=3)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_wallet(wallet: str, name: str = "backend_traderbot") -> structlog.BoundLogger:
    """Logger with the (shortened) wallet bound to every entry."""
    return get_logger(name).bind(wallet=short_wallet(wallet))
