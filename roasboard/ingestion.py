"""CSV ingestion/output helpers: tokenizer, record mapper and export serializer."""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Sequence

from roasboard.domain.errors import EmptyInputError, MissingColumnsError
from roasboard.domain.models import (
    CAMPAIGN_SENTINEL,
    CHANNEL_SENTINEL,
    REQUIRED_COLUMNS,
    Dataset,
    Record,
)

logger = logging.getLogger(__name__)

RawRow = list[str]

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")
_LEADING_DECIMAL_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

TEMPLATE_CSV = (
    "Date,Channel,Campaign,Spend,Impressions,Clicks,Conversions,Revenue\n"
    "2025-07-01,Instagram,DT-Launch,350,92000,2100,110,2400\n"
    "2025-07-02,Facebook,DT-Launch,250,71000,1500,75,1600\n"
    "2025-07-02,Email,DT-Launch,60,25000,1200,180,3600\n"
    "2025-07-03,Google,DT-Prospecting,300,50000,900,45,1200\n"
    "2025-07-03,Instagram,DT-Remarketing,180,20000,800,95,2100\n"
    "2025-07-04,Influencers,DT-Creators,600,120000,2600,130,3000\n"
)


def _is_meaningful(row: Sequence[str]) -> bool:
    return len(row) > 1 or (len(row) == 1 and row[0] != "")


def parse_csv(text: str) -> list[RawRow]:
    """Split CSV text into rows of string fields.

    Quoted fields may contain commas, line breaks and doubled quotes. A
    terminator is ``\\n``, ``\\r`` or ``\\r\\n``. Blank rows are dropped, and
    an unterminated quote is closed at end of input. Never raises.
    """
    rows: list[RawRow] = []
    row: RawRow = []
    field: list[str] = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if in_quotes:
            if char == '"':
                if i + 1 < length and text[i + 1] == '"':
                    field.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                field.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            row.append("".join(field))
            field = []
        elif char in "\r\n":
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
            row.append("".join(field))
            field = []
            if _is_meaningful(row):
                rows.append(row)
            row = []
        else:
            field.append(char)
        i += 1

    if field or row:
        row.append("".join(field))
        rows.append(row)

    return [r for r in rows if any(value != "" for value in r)]


def to_number(value: Any) -> float:
    """Coerce a raw cell to a float, never raising.

    Every character other than digits, ``.`` and ``-`` is stripped first, so
    ``"$1,250.50"`` becomes ``1250.5``. The longest leading decimal literal of
    what remains is used; an empty or unparseable remainder yields ``0.0``.
    """
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    cleaned = _NON_NUMERIC_RE.sub("", "" if value is None else str(value))
    match = _LEADING_DECIMAL_RE.match(cleaned)
    if match is None:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def format_number(value: float) -> str:
    """Render a metric as plain decimal text, never in exponent notation."""
    if value == int(value):
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def parse_date(value: str | None) -> date | None:
    """Parse an ISO calendar date; timestamps are truncated to their day."""
    text = (value or "").strip()
    if not _ISO_DATE_RE.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def _cell(row: Sequence[str], index: int) -> str | None:
    return row[index] if index < len(row) else None


def _text_or(value: str | None, sentinel: str) -> str:
    text = (value or "").strip()
    return text or sentinel


def _column_index(header: Sequence[str]) -> dict[str, int]:
    names = [str(cell).strip() for cell in header]
    index: dict[str, int] = {}
    missing: list[str] = []
    for column in REQUIRED_COLUMNS:
        if column in names:
            index[column] = names.index(column)
        else:
            missing.append(column)
    if missing:
        raise MissingColumnsError(missing)
    return index


def map_records(rows: Sequence[Sequence[str]]) -> Dataset:
    """Map tokenized rows (header first) to typed records.

    Raises ``EmptyInputError`` for no rows and ``MissingColumnsError`` when the
    header lacks a required column. Rows with an unparseable date are dropped.
    """
    if not rows:
        raise EmptyInputError()

    idx = _column_index(rows[0])
    records: list[Record] = []
    dropped = 0
    for row in rows[1:]:
        day = parse_date(_cell(row, idx["Date"]))
        if day is None:
            dropped += 1
            continue
        records.append(
            Record(
                date=day,
                channel=_text_or(_cell(row, idx["Channel"]), CHANNEL_SENTINEL),
                campaign=_text_or(_cell(row, idx["Campaign"]), CAMPAIGN_SENTINEL),
                spend=to_number(_cell(row, idx["Spend"])),
                impressions=to_number(_cell(row, idx["Impressions"])),
                clicks=to_number(_cell(row, idx["Clicks"])),
                conversions=to_number(_cell(row, idx["Conversions"])),
                revenue=to_number(_cell(row, idx["Revenue"])),
            )
        )

    if dropped:
        logger.debug("Dropped %d rows with unparseable dates", dropped)
    return tuple(records)


def load_dataset(text: str) -> Dataset:
    dataset = map_records(parse_csv(text))
    logger.info("Loaded %d records", len(dataset))
    return dataset


def load_template_dataset() -> Dataset:
    return load_dataset(TEMPLATE_CSV)


def to_csv(records: Iterable[Record]) -> str:
    """Encode records as CSV text under the fixed header.

    Values are joined as-is; a campaign or channel containing a comma or quote
    is not escaped.
    """
    lines = [",".join(REQUIRED_COLUMNS)]
    for record in records:
        lines.append(
            ",".join(
                [
                    record.date.isoformat(),
                    record.channel,
                    record.campaign,
                    format_number(record.spend),
                    format_number(record.impressions),
                    format_number(record.clicks),
                    format_number(record.conversions),
                    format_number(record.revenue),
                ]
            )
        )
    return "\n".join(lines)
