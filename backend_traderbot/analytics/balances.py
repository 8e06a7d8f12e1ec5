"""
Balance aggregation: net token amounts moved by swaps, now and before the last swap.

balancesBefore covers the records strictly preceding the last swap record
(input order), so balanceChange is the effect of that last swap window.
Stake records carry no amounts and contribute nothing.
"""

from __future__ import annotations

from typing import Any, Sequence

from backend_traderbot.analytics.amounts import add_amount
from backend_traderbot.transactions.models import SwapTransaction, TransactionRecord


def aggregate_balances(records: Sequence[TransactionRecord], limit: int | None = None) -> dict[str, float]:
    """
    Sum signed swap amounts per token over records[:limit] (all records when limit is None).

    Malformed swaps (missing or misaligned tokens/amounts) are skipped.
    """
    balances: dict[str, float] = {}
    window = records if limit is None else records[:limit]
    for tx in window:
        if isinstance(tx, SwapTransaction):
            for token, amount in tx.details.token_amounts():
                add_amount(balances, token, amount)
    return balances


def find_last_swap_index(records: Sequence[TransactionRecord]) -> int | None:
    """Index of the last swap record scanning backward, or None when there is no swap."""
    for i in range(len(records) - 1, -1, -1):
        if isinstance(records[i], SwapTransaction):
            return i
    return None


def compute_balances(records: Sequence[TransactionRecord]) -> dict[str, dict[str, float]]:
    """
    Return balancesNow, balancesBefore and balanceChange.

    balanceChange[token] = balancesNow[token] - balancesBefore.get(token, 0) for every
    token in balancesNow, so now == before + change holds for each of them.
    """
    balances_now = aggregate_balances(records)
    last_swap = find_last_swap_index(records)
    balances_before = aggregate_balances(records, limit=last_swap) if last_swap is not None else {}
    balance_change = {
        token: value - balances_before.get(token, 0.0) for token, value in balances_now.items()
    }
    return {
        "balancesNow": balances_now,
        "balancesBefore": balances_before,
        "balanceChange": balance_change,
    }


def balances_as_rows(balances: dict[str, float]) -> list[dict[str, Any]]:
    """Pivot token -> value into [{token, value}] rows for pie/bar charts."""
    return [{"token": token, "value": value} for token, value in balances.items()]
