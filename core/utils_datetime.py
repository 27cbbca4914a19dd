"""
DateTime utilities for parsing and rendering ISO-8601 timestamps.
All scheduling arithmetic happens in UTC.
"""
import re
from datetime import date, datetime, timedelta
from typing import Optional, Union

import pytz


# Timezone configuration
TIMEZONE = pytz.UTC


TimestampInput = Union[str, datetime]

# Seconds fraction of any length; fromisoformat wants exactly 3 or 6 digits before 3.11
_FRACTION_RE = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")


def get_current_datetime() -> datetime:
    """Get current datetime in UTC."""
    return datetime.now(TIMEZONE)


def to_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        return TIMEZONE.localize(value)
    return value.astimezone(TIMEZONE)


def parse_timestamp(value: Optional[TimestampInput]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Supports a trailing "Z" designator and explicit offsets.

    Args:
        value: ISO-8601 string or datetime

    Returns:
        UTC datetime, or None if the value cannot be parsed
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None

        # fromisoformat only accepts "Z" from Python 3.11 on
        if text[-1] in ('Z', 'z'):
            text = text[:-1] + '+00:00'
        text = _FRACTION_RE.sub(_normalize_fraction, text, count=1)

        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    # Offsets near year 1 or 9999 cannot be shifted into UTC
    try:
        return to_utc(parsed)
    except OverflowError:
        return None


def _normalize_fraction(match: "re.Match[str]") -> str:
    digits = match.group(2)[:6].ljust(6, '0')
    return f"{match.group(1)}.{digits}"


def format_timestamp(value: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with millisecond precision and a "Z" suffix."""
    utc_value = to_utc(value)
    return utc_value.strftime('%Y-%m-%dT%H:%M:%S.') + f"{utc_value.microsecond // 1000:03d}Z"


def utc_day(value: datetime) -> date:
    """Get the UTC calendar day of a timestamp."""
    return to_utc(value).date()


def get_week_key(value: datetime) -> date:
    """
    Get the ISO week key for a timestamp.

    The key is the date of the Monday (UTC) that starts the week
    containing the timestamp.
    """
    day = utc_day(value)
    return day - timedelta(days=day.weekday())
