"""
Running-total series indexed by record position, for stacked-area and line charts.
"""

from __future__ import annotations

from typing import Any, Sequence

from backend_traderbot.analytics.amounts import add_amount
from backend_traderbot.transactions.models import SwapTransaction, TransactionRecord


def per_token_cumulative(records: Sequence[TransactionRecord]) -> dict[str, list[float]]:
    """
    Per-token running totals: one entry per record index for every token ever swapped.

    After each record the current running total of every token seen so far is
    snapshotted. Positions before a token's first appearance are 0.0, so every
    series has exactly len(records) entries.
    """
    running: dict[str, float] = {}
    cumulative: dict[str, list[float]] = {}
    for i, tx in enumerate(records):
        if isinstance(tx, SwapTransaction):
            for token, amount in tx.details.token_amounts():
                if token not in cumulative:
                    # Left-fill: nothing moved for this token before index i.
                    cumulative[token] = [0.0] * i
                add_amount(running, token, amount)
        for token, total in running.items():
            cumulative[token].append(total)
    return cumulative


def running_total_line(records: Sequence[TransactionRecord]) -> list[dict[str, Any]]:
    """
    Total of all token balances after each record: [{index (1-based), total}].
    """
    line: list[dict[str, Any]] = []
    total = 0.0
    for i, tx in enumerate(records):
        if isinstance(tx, SwapTransaction):
            total += sum(amount for _, amount in tx.details.token_amounts())
        line.append({"index": i + 1, "total": total})
    return line
