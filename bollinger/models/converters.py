"""Timestamp conversion helpers.

Price bars carry Unix epoch milliseconds; the console report prints
UTC datetimes.
"""

from datetime import datetime, timezone


def timestamp_to_datetime(ts: int) -> datetime:
    """Convert Unix epoch milliseconds to UTC datetime."""
    return datetime.fromtimestamp(ts / 1000, tz=timezone.utc)
