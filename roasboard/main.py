"""Marketing spend & ROAS report entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Sequence

from roasboard.application.dashboard_service import DashboardSession
from roasboard.application.reporting.rendering import (
    campaign_table,
    format_table,
    kpi_cards,
    rate_cards,
)
from roasboard.config import load_config
from roasboard.domain.errors import DatasetLoadError
from roasboard.domain.models import FilterSpec
from roasboard.infrastructure.csv_repository import read_csv_text, write_export_csv, write_template
from roasboard.infrastructure.report_exporter import (
    save_summary_json,
    save_views_workbook,
    summary_payload,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize marketing spend, revenue and ROAS from a CSV file")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input", type=str, help="CSV file with Date, Channel, Campaign, Spend, ... columns")
    source.add_argument("--template", action="store_true", help="Use the built-in template dataset")
    parser.add_argument("--channel", action="append", default=[], help="Restrict to a channel (repeatable)")
    parser.add_argument("--campaign", type=str, default="", help="Case-insensitive campaign substring")
    parser.add_argument("--start", type=_iso_date, help="Inclusive start date")
    parser.add_argument("--end", type=_iso_date, help="Inclusive end date")
    parser.add_argument("--export", action="store_true", help="Write the filtered records as CSV")
    parser.add_argument("--json", action="store_true", help="Write the summary JSON")
    parser.add_argument("--excel", action="store_true", help="Write every view to an Excel workbook")
    parser.add_argument("--write-template", action="store_true", help="Write the CSV template file")
    parser.add_argument("--output-dir", type=str, help="Override ROASBOARD_OUTPUT_DIR")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=LOG_LEVELS,
        help="Logging level",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    config = load_config()
    output_dir = Path(args.output_dir) if args.output_dir else config.output_dir

    if args.write_template:
        print(f"Saved template: {write_template(output_dir / config.template_filename)}")

    session = DashboardSession(auto_load_template=config.auto_load_template and not args.input)
    if args.template and not session.dataset:
        session.load_template()
    if args.input:
        try:
            session.load_text(read_csv_text(args.input))
        except DatasetLoadError as exc:
            print(str(exc), file=sys.stderr)
            return 1

    session.set_filters(
        FilterSpec(
            channels=frozenset(args.channel),
            campaign_query=args.campaign,
            start=args.start,
            end=args.end,
        )
    )
    views = session.views()

    print("Channels: " + (", ".join(session.channel_options()) or "—"))
    print(format_table([[label, value] for label, value in kpi_cards(views.totals) + rate_cards(views.totals)]))
    print()
    if views.campaigns:
        print(format_table(campaign_table(views.campaigns)))
    else:
        print("No data. Upload a CSV to get started.")

    if args.export:
        path = write_export_csv(output_dir / config.export_filename, views.records)
        print(f"Saved CSV: {path}")
    if args.json:
        json_path = output_dir / "summary.json"
        save_summary_json(json_path, summary_payload(views, config.palette))
        print(f"Saved JSON: {json_path}")
    if args.excel:
        excel_path = output_dir / "summary.xlsx"
        saved, message = save_views_workbook(excel_path, views)
        if saved:
            print(f"Saved Excel: {excel_path}")
        else:
            print(f"Excel save skipped (file may be open/locked): {message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
