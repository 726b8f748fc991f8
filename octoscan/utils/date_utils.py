"""Date and time utilities for octoscan."""

import datetime
from typing import Optional, Union

from dateutil.parser import parse as parse_date


def parse_timestamp(value: Union[str, int, float, None]) -> Optional[datetime.datetime]:
    """
    Parse a GitHub timestamp into an aware UTC datetime.

    GitHub returns most timestamps as RFC3339 strings, but some endpoints
    (and the pushed_at field of push events) use Unix seconds instead.

    Args:
        value: RFC3339/ISO-8601 string, Unix seconds as int, float or digit string

    Returns:
        Optional[datetime.datetime]: Parsed datetime, None for empty input

    Raises:
        ValueError: If the value cannot be parsed
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
    if isinstance(value, str) and value.strip().isdigit():
        return datetime.datetime.fromtimestamp(int(value), tz=datetime.timezone.utc)

    try:
        dt = parse_date(value)
    except (TypeError, OverflowError) as e:
        raise ValueError(f"Invalid timestamp: {value!r}") from e

    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def format_timestamp(dt: datetime.datetime) -> str:
    """Render a datetime as an RFC3339 UTC string."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(datetime.timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")
