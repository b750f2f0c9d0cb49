"""Date conversions shared by filters and the heatmap builder.

Two conversions are kept apart on purpose:

- ``to_local_calendar_date``: what the viewer sees. Ticket timestamps are
  parsed and expressed in the viewer timezone before the calendar date is
  taken.
- ``to_utc_aligned_week``: what the grid math needs. Plain calendar dates are
  snapped to week boundaries with UTC weekday arithmetic, so daylight-saving
  transitions never shift a cell.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pandas as pd
import pytz

from .settings import get_settings


def resolve_timezone(tz=None):
    """Return a tzinfo for ``tz`` (name, tzinfo or None for the configured default)."""
    if tz is None:
        return pytz.timezone(get_settings().timezone)
    if isinstance(tz, str):
        return pytz.timezone(tz)
    return tz


def parse_timestamp(value) -> pd.Timestamp | None:
    """Parse a timestamp-like value; None when empty or unparsable."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts) or not isinstance(ts, pd.Timestamp):
        return None
    return ts


def to_local_calendar_date(value, tz=None) -> date | None:
    """Return the calendar date of ``value`` as seen in the viewer timezone.

    Offset-aware values are converted into ``tz`` first. Naive values,
    including date-only ``YYYY-MM-DD`` strings, already describe local wall
    clock time and keep their calendar date.
    """
    ts = parse_timestamp(value)
    if ts is None:
        return None
    if getattr(ts, "tzinfo", None) is not None:
        try:
            ts = ts.tz_convert(resolve_timezone(tz))
        except (TypeError, ValueError):
            return None
    return ts.date()


def to_aware_timestamp(value, tz=None) -> pd.Timestamp | None:
    """Parse ``value`` into an instant; naive values are read as viewer-local time."""
    ts = parse_timestamp(value)
    if ts is None:
        return None
    if getattr(ts, "tzinfo", None) is None:
        try:
            ts = ts.tz_localize(resolve_timezone(tz))
        except (TypeError, ValueError):
            return None
    return ts


def to_local_date_str(value, tz=None) -> str | None:
    local = to_local_calendar_date(value, tz)
    if local is None:
        return None
    return iso_date(local)


def day_of_week(day: date) -> int:
    """Weekday index with Sunday = 0 .. Saturday = 6, from the UTC midnight of ``day``."""
    utc_midnight = datetime(day.year, day.month, day.day, tzinfo=pytz.UTC)
    return (utc_midnight.weekday() + 1) % 7


def to_utc_aligned_week(day: date, *, align: str = "start") -> date:
    """Snap ``day`` to the Sunday on/before it (``start``) or the Saturday on/after it (``end``)."""
    dow = day_of_week(day)
    if align == "start":
        return day - timedelta(days=dow)
    if align == "end":
        return day + timedelta(days=6 - dow)
    raise ValueError(f"align must be 'start' or 'end', got {align!r}")


def days_between(start: date, end: date) -> int:
    return (end - start).days


def iso_date(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"
