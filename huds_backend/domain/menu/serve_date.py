"""
Serve date helpers.

HUDS publishes serve dates as ``MM/DD/YYYY`` text. That format does not
sort chronologically, so every comparison goes through ``datetime.date``
and storage keeps an ISO ``YYYY-MM-DD`` key next to the display text.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

SERVE_DATE_FORMAT = "%m/%d/%Y"

# HUDS has no records before this date
EARLIEST_SUPPORTED_DATE = date(2023, 5, 5)

# Eastern Standard Time, fixed offset (no DST)
DEFAULT_TIMEZONE = timezone(timedelta(hours=-5), name="EST")


def parse_serve_date(value: str) -> date:
    """
    Parse ``MM/DD/YYYY`` text into a calendar date.

    Raises:
        ValueError: If the text does not match the format
    """
    return datetime.strptime(value.strip(), SERVE_DATE_FORMAT).date()


def format_serve_date(value: date) -> str:
    """Format a calendar date as ``MM/DD/YYYY``."""
    return value.strftime(SERVE_DATE_FORMAT)


def serve_date_key(value: str) -> str:
    """
    Sortable storage key for a serve date.

    Example:
        >>> serve_date_key("01/02/2024")
        '2024-01-02'
    """
    return parse_serve_date(value).isoformat()


def today(tz: timezone = DEFAULT_TIMEZONE) -> date:
    """Current calendar date in the service timezone."""
    return datetime.now(tz).date()
