from datetime import date

import pytest

from roasboard.application.reporting.aggregations import (
    aggregate_by_campaign,
    aggregate_by_date,
    aggregate_channel_comparison,
    aggregate_channel_spend,
    build_views,
    compute_totals,
)
from roasboard.domain.models import TOTALS_KEY, FilterSpec, Record


def _record(day, channel="Email", campaign="C", **metrics):
    return Record(date=date(2025, 7, day), channel=channel, campaign=campaign, **metrics)


def test_totals_for_template(template_dataset):
    totals = compute_totals(template_dataset)
    assert totals.key == TOTALS_KEY
    assert totals.spend == 1740
    assert totals.revenue == 13900
    assert totals.impressions == 378000
    assert totals.clicks == 9100
    assert totals.conversions == 635
    assert totals.roas == pytest.approx(13900 / 1740)
    assert round(totals.roas, 2) == 7.99
    assert totals.ctr == pytest.approx(9100 / 378000)
    assert totals.cvr == pytest.approx(635 / 9100)
    assert totals.cpa == pytest.approx(1740 / 635)
    assert totals.cpc == pytest.approx(1740 / 9100)
    assert totals.cpm == pytest.approx(1740 / 378000 * 1000)
    assert totals.channel_count is None


def test_totals_for_empty_set_has_no_ratios():
    totals = compute_totals([])
    assert totals.spend == 0
    assert (totals.roas, totals.ctr, totals.cvr, totals.cpa, totals.cpc, totals.cpm) == (None,) * 6


def test_by_date_sorted_and_summed(template_dataset):
    rows = aggregate_by_date(reversed(template_dataset))
    assert [row.key for row in rows] == ["2025-07-01", "2025-07-02", "2025-07-03", "2025-07-04"]
    assert [row.spend for row in rows] == [350, 310, 480, 600]
    assert [row.revenue for row in rows] == [2400, 5200, 3300, 3000]
    assert rows[1].roas == pytest.approx(5200 / 310)


def test_by_date_zero_spend_day_reports_zero_roas():
    rows = aggregate_by_date([_record(1, spend=0, revenue=50), _record(2, spend=10, revenue=20)])
    assert rows[0].roas == 0.0
    assert rows[0].cpc is None
    assert rows[1].roas == 2.0


def test_channel_spend_sorted_by_spend(template_dataset):
    rows = aggregate_channel_spend(template_dataset)
    assert [(row.key, row.spend) for row in rows] == [
        ("Influencers", 600),
        ("Instagram", 530),
        ("Google", 300),
        ("Facebook", 250),
        ("Email", 60),
    ]


def test_channel_comparison_sorted_by_revenue(template_dataset):
    rows = aggregate_channel_comparison(template_dataset)
    assert [(row.key, row.spend, row.revenue) for row in rows] == [
        ("Instagram", 530, 4500),
        ("Email", 60, 3600),
        ("Influencers", 600, 3000),
        ("Facebook", 250, 1600),
        ("Google", 300, 1200),
    ]


def test_campaigns_sorted_by_revenue_with_channel_counts(template_dataset):
    rows = aggregate_by_campaign(template_dataset)
    assert [row.key for row in rows] == ["DT-Launch", "DT-Creators", "DT-Remarketing", "DT-Prospecting"]

    launch = rows[0]
    assert launch.channel_count == 3
    assert launch.spend == 660
    assert launch.revenue == 7600
    assert launch.clicks == 4800
    assert launch.conversions == 365
    assert launch.roas == pytest.approx(7600 / 660)
    assert launch.cpm == pytest.approx(660 / 188000 * 1000)
    assert all(row.channel_count == 1 for row in rows[1:])


def test_campaign_zero_clicks_has_null_click_ratios():
    (row,) = aggregate_by_campaign([_record(1, spend=100, impressions=1000, clicks=0, conversions=0, revenue=0)])
    assert row.cpc is None
    assert row.cvr is None
    assert row.cpa is None
    assert row.roas == 0.0
    assert row.ctr == 0.0
    assert row.cpm == pytest.approx(100.0)


def test_ties_keep_first_seen_order():
    records = [
        _record(1, channel="Zeta", campaign="Beta", spend=5, revenue=100),
        _record(1, channel="Alpha", campaign="Alpha", spend=5, revenue=100),
        _record(2, channel="Zeta", campaign="Gamma", spend=0, revenue=200),
    ]
    assert [row.key for row in aggregate_by_campaign(records)] == ["Gamma", "Beta", "Alpha"]
    assert [row.key for row in aggregate_channel_spend(records)] == ["Zeta", "Alpha"]


def test_negative_values_are_summed_not_rejected():
    totals = compute_totals([_record(1, spend=-10, revenue=20)])
    assert totals.spend == -10
    assert totals.roas is None


def test_build_views_is_repeatable(template_dataset):
    spec = FilterSpec(channels=frozenset({"Instagram"}))
    first = build_views(template_dataset, spec)
    second = build_views(template_dataset, spec)
    assert first == second
    assert first.totals.spend == 530
    assert len(first.records) == 2
    assert [row.key for row in first.by_date] == ["2025-07-01", "2025-07-03"]


def test_channel_comparison_ties_keep_first_seen_order():
    records = [
        _record(1, channel="Zeta", spend=1, revenue=100),
        _record(1, channel="Alpha", spend=9, revenue=100),
        _record(2, channel="Mid", spend=5, revenue=150),
        _record(3, channel="Beta", spend=2, revenue=100),
    ]
    assert [row.key for row in aggregate_channel_comparison(records)] == ["Mid", "Zeta", "Alpha", "Beta"]


def test_build_views_on_empty_selection(template_dataset):
    views = build_views(template_dataset, FilterSpec(campaign_query="no such campaign"))
    assert views.records == ()
    assert views.by_date == ()
    assert views.channel_spend == ()
    assert views.channel_comparison == ()
    assert views.campaigns == ()
    assert views.totals.key == TOTALS_KEY
    assert views.totals.spend == 0
    assert views.totals.roas is None
    assert views.totals.cpm is None
