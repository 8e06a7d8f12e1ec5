"""
TraderBot analytics engine.

Pure derivations over the ordered transaction record list, combined into the
dashboard chart bundle. Modules: amounts, balances, series, usage, points,
proportions, analytics_pipeline.
"""

from backend_traderbot.analytics.analytics_pipeline import build_chart_bundle
from backend_traderbot.analytics.balances import (
    aggregate_balances,
    compute_balances,
    find_last_swap_index,
)
from backend_traderbot.analytics.points import scatter_points, timeline_digest
from backend_traderbot.analytics.proportions import type_counts, type_proportions
from backend_traderbot.analytics.series import per_token_cumulative, running_total_line
from backend_traderbot.analytics.usage import (
    swap_volume_series,
    token_amounts_by_day,
    token_usage_by_day,
)

__all__ = [
    "build_chart_bundle",
    "aggregate_balances",
    "compute_balances",
    "find_last_swap_index",
    "per_token_cumulative",
    "running_total_line",
    "token_usage_by_day",
    "token_amounts_by_day",
    "swap_volume_series",
    "scatter_points",
    "timeline_digest",
    "type_counts",
    "type_proportions",
]
