"""Application service holding the loaded dataset and the active filters."""

from __future__ import annotations

import logging

from roasboard.application.reporting.aggregations import build_views
from roasboard.application.reporting.selectors import apply_filters, channel_options
from roasboard.domain.errors import DatasetLoadError
from roasboard.domain.models import DashboardViews, Dataset, FilterSpec
from roasboard.ingestion import load_dataset, load_template_dataset, to_csv

logger = logging.getLogger(__name__)


class DashboardSession:
    """In-memory dashboard state.

    A successful load replaces the dataset wholesale. A failed load records
    ``last_error`` and leaves the previous dataset and its views untouched.
    """

    def __init__(self, auto_load_template: bool = False) -> None:
        self._dataset: Dataset = ()
        self._filters = FilterSpec()
        self.last_error: str = ""
        if auto_load_template:
            self.load_template()

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def filters(self) -> FilterSpec:
        return self._filters

    def load_text(self, text: str) -> Dataset:
        try:
            dataset = load_dataset(text)
        except DatasetLoadError as exc:
            self.last_error = str(exc)
            logger.warning("Dataset load failed: %s", exc)
            raise
        self._dataset = dataset
        self.last_error = ""
        return dataset

    def load_template(self) -> Dataset:
        self._dataset = load_template_dataset()
        self.last_error = ""
        return self._dataset

    def set_filters(self, spec: FilterSpec) -> None:
        self._filters = spec

    def toggle_channel(self, channel: str) -> FilterSpec:
        self._filters = self._filters.with_channel_toggled(channel)
        return self._filters

    def reset_filters(self) -> None:
        self._filters = FilterSpec()

    def channel_options(self) -> list[str]:
        return channel_options(self._dataset)

    def views(self) -> DashboardViews:
        return build_views(self._dataset, self._filters)

    def export_csv(self) -> str:
        return to_csv(apply_filters(self._dataset, self._filters))
