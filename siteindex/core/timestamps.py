"""Timestamp parsing and formatting for index entries.

Front matter and file metadata hand us dates in several shapes:
- Unix epoch as int/float
- Unix epoch as string
- ISO 8601 strings (with or without ``Z``)
- ``datetime.date`` / ``datetime.datetime`` objects (YAML parses these)

Everything is normalized to timezone-aware UTC so that dated entries
compare consistently when the feed is sorted.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from email.utils import format_datetime


def to_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime; naive values are assumed UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: str | int | float | date | datetime | None) -> datetime | None:
    """Parse a timestamp from various formats to an aware UTC datetime.

    Args:
        value: Timestamp as epoch (int/float/str), ISO string, date, datetime or None

    Returns:
        UTC datetime, or None if the value cannot be interpreted
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(float(value), tz=timezone.utc)

        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if text.replace(".", "", 1).isdigit():
                return datetime.fromtimestamp(float(text), tz=timezone.utc)
            try:
                return to_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
            except ValueError:
                return None
    except (ValueError, OSError, OverflowError):
        # OSError/OverflowError for out-of-range epochs
        return None

    return None


def format_iso8601(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (sitemap ``lastmod``)."""
    return to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_rfc822(value: datetime) -> str:
    """Format as ``Wed, 01 Mar 2023 00:00:00 GMT`` (RSS ``pubDate``)."""
    return format_datetime(to_utc(value), usegmt=True)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["to_utc", "parse_timestamp", "format_iso8601", "format_rfc822", "utc_now"]
