"""Text rendering helpers for KPI cards, the campaign table and chart colours."""

from __future__ import annotations

from typing import Dict, List, Sequence

from roasboard.application.reporting.metrics import (
    fmt_count,
    fmt_money,
    fmt_optional_money,
    fmt_pct,
    fmt_roas,
)
from roasboard.domain.models import AggregateRow

CAMPAIGN_TABLE_HEADER: List[str] = [
    "Campaign",
    "Channels",
    "Spend",
    "Revenue",
    "ROAS",
    "CPC",
    "CPA",
    "CPM",
    "Clicks",
    "Conversions",
]


def kpi_cards(totals: AggregateRow) -> List[tuple[str, str]]:
    return [
        ("Spend", fmt_money(totals.spend)),
        ("Revenue", fmt_money(totals.revenue)),
        ("ROAS", fmt_roas(totals.roas)),
        ("CPA", fmt_optional_money(totals.cpa)),
        ("CPC", fmt_optional_money(totals.cpc)),
        ("CPM", fmt_optional_money(totals.cpm)),
    ]


def rate_cards(totals: AggregateRow) -> List[tuple[str, str]]:
    return [("CTR", fmt_pct(totals.ctr)), ("CVR", fmt_pct(totals.cvr))]


def campaign_table(rows: Sequence[AggregateRow]) -> List[List[str]]:
    table = [list(CAMPAIGN_TABLE_HEADER)]
    for row in rows:
        table.append(
            [
                row.key,
                str(row.channel_count or 0),
                fmt_money(row.spend),
                fmt_money(row.revenue),
                fmt_roas(row.roas),
                fmt_optional_money(row.cpc),
                fmt_optional_money(row.cpa),
                fmt_optional_money(row.cpm),
                fmt_count(row.clicks),
                fmt_count(row.conversions),
            ]
        )
    return table


def format_table(table: Sequence[Sequence[str]]) -> str:
    if not table:
        return ""
    widths = [max(len(line[col]) for line in table) for col in range(len(table[0]))]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip() for line in table
    )


def assign_colors(rows: Sequence[AggregateRow], palette: Sequence[str]) -> Dict[str, str]:
    """Map each channel slice to a palette colour, cycling by position."""
    if not palette:
        return {}
    return {row.key: palette[idx % len(palette)] for idx, row in enumerate(rows)}
