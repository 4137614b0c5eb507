import math
from datetime import datetime, timezone


def convert_date_to_timestamp(date_string: str) -> int:
    """Parse an ISO-8601 date or date-time, return whole seconds since epoch.

    A trailing "Z" stands for UTC. Values without an offset are taken as UTC.
    """
    if not isinstance(date_string, str) or not date_string.strip():
        raise ValueError("Date must be a non-empty string.")
    text = date_string.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return math.floor(dt.timestamp())


def is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_non_empty_str(value) -> bool:
    return isinstance(value, str) and bool(value.strip())
