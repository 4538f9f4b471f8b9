from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Full ISO timestamps (``2024-06-01T00:00:00.000Z``) are accepted too; only
    the calendar date is kept.
    """
    text = value.strip()
    if len(text) == 10:
        return datetime.strptime(text, "%Y-%m-%d").date()
    if "T" not in text:
        raise ValueError(f"Invalid date: {value!r}")
    return parse_iso_datetime(text).date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into a naive datetime."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1]
    parsed = datetime.fromisoformat(text)
    return parsed.replace(tzinfo=None)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the next month."""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
