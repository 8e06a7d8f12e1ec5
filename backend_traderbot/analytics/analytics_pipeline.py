"""
Analytics pipeline: build the dashboard chart bundle from the full record list.

Single entrypoint for the API: every derivation runs fresh over the same input
list on each call; nothing is cached or persisted and the input is never mutated.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Sequence

from backend_traderbot.analytics.balances import balances_as_rows, compute_balances
from backend_traderbot.analytics.points import scatter_points, timeline_digest
from backend_traderbot.analytics.proportions import type_counts, type_proportions
from backend_traderbot.analytics.series import per_token_cumulative, running_total_line
from backend_traderbot.analytics.usage import (
    swap_volume_series,
    token_amounts_by_day,
    token_usage_by_day,
)
from backend_traderbot.config.env import DEFAULT_TIMELINE_LIMIT
from backend_traderbot.traderbot_logging import get_logger
from backend_traderbot.transactions.models import TransactionRecord, dump_transaction

logger = get_logger(__name__)


def build_chart_bundle(
    records: Sequence[TransactionRecord],
    tz: tzinfo | None = None,
    timeline_limit: int = DEFAULT_TIMELINE_LIMIT,
) -> dict[str, Any]:
    """
    Derive every chart view from the ordered record list.

    Returns dict: balancesNow, balancesBefore, balanceChange, chartData
    (pie, bar, line, time, tokenDistribution, transactionTypes, tokensPerDay,
    perTokenCumulative, heatmapData, scatter, timeline, doughnut) and the
    serialized input transactions. Empty input yields empty/zero forms.
    """
    logger.info("analytics_bundle_start", record_count=len(records))

    balances = compute_balances(records)
    chart_data = {
        "pie": balances_as_rows(balances["balancesNow"]),
        "bar": balances_as_rows(balances["balanceChange"]),
        "line": running_total_line(records),
        "time": swap_volume_series(records, tz),
        "tokenDistribution": balances_as_rows(balances["balancesNow"]),
        "transactionTypes": type_counts(records),
        "tokensPerDay": token_amounts_by_day(records, tz),
        "perTokenCumulative": per_token_cumulative(records),
        "heatmapData": token_usage_by_day(records, tz),
        "scatter": scatter_points(records, tz),
        "timeline": timeline_digest(records, tz, limit=timeline_limit),
        "doughnut": type_proportions(records),
    }

    result = {
        **balances,
        "chartData": chart_data,
        "transactions": [dump_transaction(tx) for tx in records],
    }
    logger.info(
        "analytics_bundle_done",
        record_count=len(records),
        token_count=len(balances["balancesNow"]),
        scatter_points=len(chart_data["scatter"]),
    )
    return result
