"""Domain layer package."""

from .errors import DatasetLoadError, EmptyInputError, MissingColumnsError
from .models import AggregateRow, DashboardViews, Dataset, FilterSpec, Record

__all__ = [
    "Record",
    "Dataset",
    "FilterSpec",
    "AggregateRow",
    "DashboardViews",
    "DatasetLoadError",
    "EmptyInputError",
    "MissingColumnsError",
]
