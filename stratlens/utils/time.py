"""Calendar-date helpers.

Indicator series are keyed by calendar date. Provider payloads carry dates
as ISO strings, dates, or timestamps; all of them normalize to `date`.
"""

from __future__ import annotations

from datetime import UTC, date, datetime


def parse_date(value: str | date | datetime) -> date:
    """Normalize a provider date value to a calendar date.

    Accepts `date`, `datetime` (converted to UTC when timezone-aware), and
    ISO 8601 strings such as "2024-01-15" or "2024-01-15T00:00:00.000Z".

    Raises:
        ValueError: If the value is not a supported type or not ISO 8601.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if len(s) == 10:
            return date.fromisoformat(s)
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        return parse_date(datetime.fromisoformat(s))
    raise ValueError(f"Unsupported date value: {value!r}")


def format_date(d: date) -> str:
    """Format a date as YYYY-MM-DD (the JSON key format for series)."""
    return d.isoformat()
