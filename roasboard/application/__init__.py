"""Application layer package."""

from .dashboard_service import DashboardSession
from .reporting.aggregations import (
    aggregate_by_campaign,
    aggregate_by_date,
    aggregate_channel_comparison,
    aggregate_channel_spend,
    build_views,
    compute_totals,
)
from .reporting.selectors import apply_filters, channel_options

__all__ = [
    "DashboardSession",
    "apply_filters",
    "channel_options",
    "aggregate_by_date",
    "aggregate_channel_spend",
    "aggregate_channel_comparison",
    "aggregate_by_campaign",
    "compute_totals",
    "build_views",
]
