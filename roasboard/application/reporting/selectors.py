"""Record selection helpers for the dashboard filters."""

from __future__ import annotations

from typing import Iterable

from roasboard.domain.models import Dataset, FilterSpec, Record


def _matches(record: Record, spec: FilterSpec, query: str) -> bool:
    if spec.start is not None and record.date < spec.start:
        return False
    if spec.end is not None and record.date > spec.end:
        return False
    if spec.channels and record.channel not in spec.channels:
        return False
    if query and query not in record.campaign.lower():
        return False
    return True


def apply_filters(dataset: Iterable[Record], spec: FilterSpec) -> Dataset:
    """Return the records passing every active predicate, in input order."""
    query = spec.campaign_query.lower()
    return tuple(record for record in dataset if _matches(record, spec, query))


def channel_options(dataset: Iterable[Record]) -> list[str]:
    return sorted({record.channel for record in dataset})
