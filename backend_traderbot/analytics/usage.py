"""
Per-day pivots over swap records: token usage counts (heatmap), token amounts per
day, and per-swap volume.

Days are keyed by calendar date in the display timezone and emitted in the
order they are first encountered while scanning records forward.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Sequence

from backend_traderbot.analytics.amounts import add_amount, format_day
from backend_traderbot.transactions.models import SwapTransaction, TransactionRecord


def _rows(by_day: dict[str, dict[str, float]]) -> list[dict[str, Any]]:
    return [{"date": day, **tokens} for day, tokens in by_day.items()]


def token_usage_by_day(records: Sequence[TransactionRecord], tz: tzinfo | None = None) -> list[dict[str, Any]]:
    """
    One row per day with at least one swap: {date, <token>: count}.

    Each appearance of a token in a swap's tokens list counts once, regardless
    of amount. Only tokens used that day appear as keys.
    """
    by_day: dict[str, dict[str, int]] = {}
    for tx in records:
        if not isinstance(tx, SwapTransaction) or tx.details.tokens is None:
            continue
        day = by_day.setdefault(format_day(tx.details.timestamp, tz), {})
        for token in tx.details.tokens:
            day[token] = day.get(token, 0) + 1
    return _rows(by_day)


def token_amounts_by_day(records: Sequence[TransactionRecord], tz: tzinfo | None = None) -> list[dict[str, Any]]:
    """One row per day with a well-formed swap: {date, <token>: summed amount}."""
    by_day: dict[str, dict[str, float]] = {}
    for tx in records:
        if not isinstance(tx, SwapTransaction) or not tx.details.is_well_formed():
            continue
        day = by_day.setdefault(format_day(tx.details.timestamp, tz), {})
        for token, amount in tx.details.token_amounts():
            add_amount(day, token, amount)
    return _rows(by_day)


def swap_volume_series(records: Sequence[TransactionRecord], tz: tzinfo | None = None) -> list[dict[str, Any]]:
    """One point per swap: {date, value} where value is the sum of its parsed amounts."""
    return [
        {
            "date": format_day(tx.details.timestamp, tz),
            "value": tx.details.amount_total(),
        }
        for tx in records
        if isinstance(tx, SwapTransaction)
    ]
