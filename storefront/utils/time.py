"""Millisecond timestamp helpers.

Records keep creation instants as Unix milliseconds so that cached JSON and
remote documents share one representation.
"""

from __future__ import annotations

from datetime import date, datetime, timezone


def now_ms() -> int:
    """Return the current instant as Unix milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def ms_to_datetime(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)


def ms_to_iso(value: int) -> str:
    """Format Unix milliseconds as an ISO-8601 UTC string."""
    return ms_to_datetime(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def ms_to_utc_date(value: int) -> date:
    return ms_to_datetime(value).date()


def day_label(value: date) -> str:
    """Short chart label such as ``Jan 5``."""
    return f"{value.strftime('%b')} {value.day}"
