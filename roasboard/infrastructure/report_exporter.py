"""Infrastructure adapter for summary export targets."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Sequence

import polars as pl

from roasboard.application.reporting.rendering import assign_colors, kpi_cards, rate_cards
from roasboard.domain.models import AggregateRow, DashboardViews, Record

logger = logging.getLogger(__name__)

_SUM_COLUMNS = ("spend", "impressions", "clicks", "conversions", "revenue")
_RATIO_COLUMNS = ("roas", "ctr", "cvr", "cpa", "cpc", "cpm")

AGGREGATE_SCHEMA: Dict[str, Any] = {
    "key": pl.Utf8,
    **{name: pl.Float64 for name in _SUM_COLUMNS + _RATIO_COLUMNS},
    "channel_count": pl.Int64,
}
RECORD_SCHEMA: Dict[str, Any] = {
    "date": pl.Date,
    "channel": pl.Utf8,
    "campaign": pl.Utf8,
    **{name: pl.Float64 for name in _SUM_COLUMNS},
}


def _import_openpyxl() -> Any:
    try:
        from openpyxl import Workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required for Excel fallback I/O.") from exc
    return Workbook


def _rows_payload(rows: Sequence[AggregateRow]) -> list[dict[str, Any]]:
    return [asdict(row) for row in rows]


def _record_payload(record: Record) -> dict[str, Any]:
    payload = asdict(record)
    for name in _SUM_COLUMNS:
        payload[name] = float(payload[name])
    return payload


def summary_payload(views: DashboardViews, palette: Sequence[str] = ()) -> Dict[str, Any]:
    filters = views.filters
    return {
        "filters": {
            "channels": sorted(filters.channels),
            "campaign_query": filters.campaign_query,
            "start": filters.start.isoformat() if filters.start else None,
            "end": filters.end.isoformat() if filters.end else None,
        },
        "record_count": len(views.records),
        "totals": asdict(views.totals),
        "kpi_cards": dict(kpi_cards(views.totals)),
        "rate_cards": dict(rate_cards(views.totals)),
        "by_date": _rows_payload(views.by_date),
        "channel_spend": _rows_payload(views.channel_spend),
        "channel_colors": assign_colors(views.channel_spend, palette),
        "channel_comparison": _rows_payload(views.channel_comparison),
        "campaigns": _rows_payload(views.campaigns),
    }


def save_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")


def aggregate_frame(rows: Sequence[AggregateRow]) -> pl.DataFrame:
    # Ratio columns may be null for long leading stretches; never infer their type.
    return pl.DataFrame(_rows_payload(rows), schema=AGGREGATE_SCHEMA, infer_schema_length=None)


def records_frame(records: Sequence[Record]) -> pl.DataFrame:
    return pl.DataFrame(
        [_record_payload(record) for record in records], schema=RECORD_SCHEMA, infer_schema_length=None
    )


def views_sheets(views: DashboardViews) -> Dict[str, pl.DataFrame]:
    return {
        "daily": aggregate_frame(views.by_date),
        "channel_spend": aggregate_frame(views.channel_spend),
        "channel_comparison": aggregate_frame(views.channel_comparison),
        "campaigns": aggregate_frame(views.campaigns),
        "totals": aggregate_frame([views.totals]),
        "records": records_frame(views.records),
    }


def _excel_cell_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return value


def _write_with_polars(path: Path, sheets: Dict[str, pl.DataFrame]) -> bool:
    if not sheets:
        return False

    try:
        from xlsxwriter import Workbook  # polars writes Excel through xlsxwriter
    except ImportError:
        return False

    try:
        with Workbook(str(path)) as workbook:
            for sheet_name, frame in sheets.items():
                frame.write_excel(workbook=workbook, worksheet=sheet_name)
        return True
    except Exception:
        logger.debug("polars Excel writer failed for %s, using openpyxl", path, exc_info=True)
        return False


def _write_with_openpyxl(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    Workbook = _import_openpyxl()
    workbook = Workbook()
    default_sheet = workbook.active
    workbook.remove(default_sheet)

    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=str(sheet_name)[:31])
        worksheet.append(frame.columns)
        for row in frame.iter_rows(named=False):
            worksheet.append([_excel_cell_value(value) for value in row])

    workbook.save(path)


def write_output_excel(path: str | Path, sheets: Dict[str, pl.DataFrame]) -> None:
    """Write output Excel with Polars-first and openpyxl fallback."""
    excel_path = Path(path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)

    if _write_with_polars(excel_path, sheets):
        return
    _write_with_openpyxl(excel_path, sheets)


def save_views_workbook(path: Path, views: DashboardViews) -> tuple[bool, str]:
    try:
        write_output_excel(path, views_sheets(views))
    except PermissionError as exc:
        return False, str(exc)
    return True, ""
