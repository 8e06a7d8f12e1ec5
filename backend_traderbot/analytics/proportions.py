"""
Transaction-type summary: swap/stake counts and their share of all records.
"""

from __future__ import annotations

from typing import Any, Sequence

from backend_traderbot.transactions.models import TX_TYPE_STAKE, TX_TYPE_SWAP, TransactionRecord


def _count_by_type(records: Sequence[TransactionRecord]) -> dict[str, int]:
    counts = {TX_TYPE_SWAP: 0, TX_TYPE_STAKE: 0}
    for tx in records:
        counts[tx.type] += 1
    return counts


def type_counts(records: Sequence[TransactionRecord]) -> list[dict[str, Any]]:
    """[{type, count}] for swap and stake."""
    return [{"type": tx_type, "count": count} for tx_type, count in _count_by_type(records).items()]


def type_proportions(records: Sequence[TransactionRecord]) -> list[dict[str, Any]]:
    """
    [{type, value}] where value is the share of all records of that type.

    With no records both values are 0 rather than NaN.
    """
    total = len(records)
    counts = _count_by_type(records)
    return [
        {"type": tx_type, "value": (count / total) if total else 0.0}
        for tx_type, count in counts.items()
    ]
