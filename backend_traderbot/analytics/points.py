"""
Per-record chart points: scatter (amount vs. time per token) and the recent
activity timeline.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Sequence

from backend_traderbot.analytics.amounts import format_datetime
from backend_traderbot.config.env import DEFAULT_TIMELINE_LIMIT
from backend_traderbot.transactions.models import StakeTransaction, SwapTransaction, TransactionRecord


def scatter_points(records: Sequence[TransactionRecord], tz: tzinfo | None = None) -> list[dict[str, Any]]:
    """
    One point per (well-formed swap, token index): {token, amount, date, txId}.

    Stake records and malformed swaps are absent from the output.
    """
    points: list[dict[str, Any]] = []
    for tx in records:
        if not isinstance(tx, SwapTransaction):
            continue
        date = format_datetime(tx.details.timestamp, tz)
        for token, amount in tx.details.token_amounts():
            points.append({"token": token, "amount": amount, "date": date, "txId": tx.id})
    return points


def _digest(tx: TransactionRecord, tz: tzinfo | None) -> dict[str, Any]:
    date = format_datetime(tx.details.timestamp, tz)
    if isinstance(tx, SwapTransaction):
        amount = tx.details.amount_total()
        return {
            "type": tx.type,
            "date": date,
            "tokens": list(tx.details.tokens or []),
            "amount": amount,
            "desc": None,
        }
    if isinstance(tx, StakeTransaction):
        return {
            "type": tx.type,
            "date": date,
            "tokens": [],
            "amount": 0.0,
            "desc": tx.details.user_input,
        }
    raise TypeError(f"Unsupported transaction record: {type(tx).__name__}")


def timeline_digest(
    records: Sequence[TransactionRecord],
    tz: tzinfo | None = None,
    limit: int = DEFAULT_TIMELINE_LIMIT,
) -> list[dict[str, Any]]:
    """
    Most recent records first (reverse input order), at most `limit` entries:
    {type, date, tokens, amount, desc}.

    Input order decides recency; timestamps are only rendered.
    """
    recent = list(records[::-1][:limit]) if limit > 0 else []
    return [_digest(tx, tz) for tx in recent]
