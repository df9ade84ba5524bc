"""Infrastructure adapter for CSV files on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from roasboard.domain.models import Record
from roasboard.ingestion import TEMPLATE_CSV, to_csv

logger = logging.getLogger(__name__)


def read_csv_text(path: str | Path) -> str:
    # utf-8-sig drops a leading BOM so the first header cell still matches.
    return Path(path).read_text(encoding="utf-8-sig")


def _write_text(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")
    return path


def write_export_csv(path: str | Path, records: Iterable[Record]) -> Path:
    records = list(records)
    written = _write_text(Path(path), to_csv(records))
    logger.info("Exported %d records to %s", len(records), written)
    return written


def write_template(path: str | Path) -> Path:
    return _write_text(Path(path), TEMPLATE_CSV)
