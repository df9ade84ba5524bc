"""Marketing spend & ROAS reporting package."""

from .application import DashboardSession, build_views
from .domain import EmptyInputError, FilterSpec, MissingColumnsError, Record
from .ingestion import TEMPLATE_CSV, load_dataset, map_records, parse_csv, to_csv

__all__ = [
    "DashboardSession",
    "build_views",
    "FilterSpec",
    "Record",
    "EmptyInputError",
    "MissingColumnsError",
    "TEMPLATE_CSV",
    "parse_csv",
    "map_records",
    "load_dataset",
    "to_csv",
]
