"""Grouping reducers behind the time-series, channel and campaign views."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterable, List

from roasboard.application.reporting.metrics import safe_per_mille, safe_ratio
from roasboard.application.reporting.selectors import apply_filters
from roasboard.domain.models import TOTALS_KEY, AggregateRow, DashboardViews, FilterSpec, Record


@dataclass
class _Accumulator:
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    revenue: float = 0.0
    channels: set[str] = field(default_factory=set)

    def add(self, record: Record) -> None:
        self.spend += record.spend
        self.impressions += record.impressions
        self.clicks += record.clicks
        self.conversions += record.conversions
        self.revenue += record.revenue
        self.channels.add(record.channel)

    def finalize(self, key: str, with_channel_count: bool = False) -> AggregateRow:
        return AggregateRow(
            key=key,
            spend=self.spend,
            impressions=self.impressions,
            clicks=self.clicks,
            conversions=self.conversions,
            revenue=self.revenue,
            roas=safe_ratio(self.revenue, self.spend),
            ctr=safe_ratio(self.clicks, self.impressions),
            cvr=safe_ratio(self.conversions, self.clicks),
            cpa=safe_ratio(self.spend, self.conversions),
            cpc=safe_ratio(self.spend, self.clicks),
            cpm=safe_per_mille(self.spend, self.impressions),
            channel_count=len(self.channels) if with_channel_count else None,
        )


def _group(records: Iterable[Record], key_fn: Callable[[Record], str]) -> Dict[str, _Accumulator]:
    # Insertion order is first-seen order; sorts below are stable on top of it.
    grouped: Dict[str, _Accumulator] = {}
    for record in records:
        key = key_fn(record)
        accumulator = grouped.get(key)
        if accumulator is None:
            accumulator = grouped[key] = _Accumulator()
        accumulator.add(record)
    return grouped


def aggregate_by_date(records: Iterable[Record]) -> tuple[AggregateRow, ...]:
    """Daily rows in ascending date order.

    A zero-spend day reports ``roas == 0.0`` instead of ``None`` so the series
    plots without gaps.
    """
    rows: List[AggregateRow] = []
    for key, acc in _group(records, lambda r: r.date.isoformat()).items():
        row = acc.finalize(key)
        if row.roas is None:
            row = replace(row, roas=0.0)
        rows.append(row)
    return tuple(sorted(rows, key=lambda row: row.key))


def aggregate_channel_spend(records: Iterable[Record]) -> tuple[AggregateRow, ...]:
    rows = [acc.finalize(key) for key, acc in _group(records, lambda r: r.channel).items()]
    return tuple(sorted(rows, key=lambda row: row.spend, reverse=True))


def aggregate_channel_comparison(records: Iterable[Record]) -> tuple[AggregateRow, ...]:
    rows = [acc.finalize(key) for key, acc in _group(records, lambda r: r.channel).items()]
    return tuple(sorted(rows, key=lambda row: row.revenue, reverse=True))


def aggregate_by_campaign(records: Iterable[Record]) -> tuple[AggregateRow, ...]:
    rows = [
        acc.finalize(key, with_channel_count=True)
        for key, acc in _group(records, lambda r: r.campaign).items()
    ]
    return tuple(sorted(rows, key=lambda row: row.revenue, reverse=True))


def compute_totals(records: Iterable[Record]) -> AggregateRow:
    acc = _Accumulator()
    for record in records:
        acc.add(record)
    return acc.finalize(TOTALS_KEY)


def build_views(dataset: Iterable[Record], spec: FilterSpec) -> DashboardViews:
    filtered = apply_filters(dataset, spec)
    return DashboardViews(
        filters=spec,
        records=filtered,
        by_date=aggregate_by_date(filtered),
        channel_spend=aggregate_channel_spend(filtered),
        channel_comparison=aggregate_channel_comparison(filtered),
        campaigns=aggregate_by_campaign(filtered),
        totals=compute_totals(filtered),
    )
