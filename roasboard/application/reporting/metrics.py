"""Shared numeric/formatting utilities for reporting."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

MISSING = "—"


def safe_ratio(num: float, den: float) -> float | None:
    if den <= 0:
        return None
    return num / den


def safe_per_mille(num: float, den: float) -> float | None:
    ratio = safe_ratio(num, den)
    if ratio is None:
        return None
    return ratio * 1000


def fmt_money(value: float | None) -> str:
    """Whole dollars; halves round away from zero."""
    if value is None:
        return MISSING
    dollars = Decimal(repr(abs(value))).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    if value < 0:
        return f"-${dollars:,}"
    return f"${dollars:,}"


def fmt_count(value: float | None) -> str:
    if value is None:
        return MISSING
    if value == int(value):
        return f"{int(value):,}"
    return f"{value:,}"


def fmt_pct(value: float | None) -> str:
    if value is None:
        return MISSING
    return f"{value * 100:.1f}%"


def fmt_roas(value: float | None) -> str:
    if not value:
        return MISSING
    return f"{value:.2f}x"


def fmt_optional_money(value: float | None) -> str:
    """Cost ratios display a dash when missing or zero."""
    if not value:
        return MISSING
    return fmt_money(value)
