"""
Date parsing and formatting for spreadsheet-backed rows.

Spreadsheet endpoints render dates inconsistently: ISO-8601 timestamps from
serialized Date cells, epoch milliseconds, or the sheet's own display text.
Everything is converted to naive local datetimes so comparisons against
"today" happen in the user's wall-clock time.
"""

from datetime import date, datetime
from typing import Any

# Display renderings seen in sheet exports, tried after ISO-8601
SHEET_DATE_FORMATS = [
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y",
    "%d-%m-%Y",
]


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_date(value: Any) -> datetime | None:
    """
    Parse a loosely-typed cell value into a naive local datetime.

    Returns None for empty or unparseable values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return _to_local_naive(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    for fmt in SHEET_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def normalize_date(value: datetime | None) -> date | None:
    """Drop the time-of-day component."""
    if value is None:
        return None
    return value.date()


def format_date(value: date | None) -> str:
    """Format as DD/MM/YYYY."""
    return value.strftime("%d/%m/%Y") if value else ""


def format_date_time(value: datetime | None) -> str:
    """Format as DD/MM/YYYY HH:MM (24 hour)."""
    return value.strftime("%d/%m/%Y %H:%M") if value else ""
