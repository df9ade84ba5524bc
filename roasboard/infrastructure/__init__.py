"""Infrastructure layer package."""

from .csv_repository import read_csv_text, write_export_csv, write_template
from .report_exporter import save_summary_json, save_views_workbook, summary_payload

__all__ = [
    "read_csv_text",
    "write_export_csv",
    "write_template",
    "summary_payload",
    "save_summary_json",
    "save_views_workbook",
]
