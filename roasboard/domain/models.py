"""Domain models for marketing-performance records and their derived views."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime

REQUIRED_COLUMNS: tuple[str, ...] = (
    "Date",
    "Channel",
    "Campaign",
    "Spend",
    "Impressions",
    "Clicks",
    "Conversions",
    "Revenue",
)
CHANNEL_SENTINEL = "Unspecified"
CAMPAIGN_SENTINEL = "—"
TOTALS_KEY = "Total"


@dataclass(frozen=True)
class Record:
    """One marketing-performance observation (a single mapped CSV row)."""

    date: date
    channel: str
    campaign: str
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    revenue: float = 0.0


Dataset = tuple[Record, ...]


@dataclass(frozen=True)
class FilterSpec:
    channels: frozenset[str] = field(default_factory=frozenset)
    campaign_query: str = ""
    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        # Bounds compare by calendar day only.
        for name in ("start", "end"):
            value = getattr(self, name)
            if isinstance(value, datetime):
                object.__setattr__(self, name, value.date())
        if isinstance(self.channels, str):
            raise TypeError("channels must be a collection of channel names, not a single string")
        if not isinstance(self.channels, frozenset):
            object.__setattr__(self, "channels", frozenset(self.channels))

    @property
    def is_active(self) -> bool:
        return bool(self.channels or self.campaign_query or self.start or self.end)

    def with_channel_toggled(self, channel: str) -> "FilterSpec":
        if channel in self.channels:
            return replace(self, channels=self.channels - {channel})
        return replace(self, channels=self.channels | {channel})


@dataclass(frozen=True)
class AggregateRow:
    """Summed metrics for one group key plus derived ratios.

    Ratios are ``None`` when their denominator is zero. ``channel_count`` is
    only filled for the campaign view.
    """

    key: str
    spend: float
    impressions: float
    clicks: float
    conversions: float
    revenue: float
    roas: float | None
    ctr: float | None
    cvr: float | None
    cpa: float | None
    cpc: float | None
    cpm: float | None
    channel_count: int | None = None


@dataclass(frozen=True)
class DashboardViews:
    filters: FilterSpec
    records: Dataset
    by_date: tuple[AggregateRow, ...]
    channel_spend: tuple[AggregateRow, ...]
    channel_comparison: tuple[AggregateRow, ...]
    campaigns: tuple[AggregateRow, ...]
    totals: AggregateRow
