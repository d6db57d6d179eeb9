"""Local time helpers.

All reads of the current time go through local_now() so that the rest of
the package (and the tests) have a single place to control the clock.
"""

import re
from datetime import date, datetime

from tasktimer.errors import DateParseError

# Full date and time, tried before the time-of-day forms
DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M")
# Time of day only, combined with today's date
TIME_FORMATS = ("%H:%M:%S", "%H:%M")

_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def local_now() -> datetime:
    """Current instant as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


def _localize(naive: datetime) -> datetime:
    # fold=0 picks the earlier instant of an ambiguous local time
    return naive.replace(fold=0).astimezone()


def parse_local_datetime(text: str) -> datetime:
    """Parse a user-supplied date string as local time.

    Accepted forms:
    - ``YYYY-MM-DD HH:MM:SS``
    - ``YYYY-MM-DD HH:MM``
    - ``HH:MM:SS`` (today)
    - ``HH:MM`` (today)

    Args:
        text: Date string as typed on the command line

    Returns:
        Timezone-aware datetime with the local offset

    Raises:
        DateParseError: If the string matches none of the formats
    """
    value = text.strip()

    for fmt in DATETIME_FORMATS:
        try:
            return _localize(datetime.strptime(value, fmt))
        except ValueError:
            continue

    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt).time()
        except ValueError:
            continue
        return _localize(datetime.combine(_today(), parsed))

    raise DateParseError(f"Failed to parse date: {text!r}")


def _today() -> date:
    return local_now().date()


def encode_timestamp(value: datetime) -> str:
    """Encode a timestamp for the store file (ISO-8601 with offset)."""
    if value.tzinfo is None:
        value = _localize(value)
    return value.isoformat()


def decode_timestamp(text: str) -> datetime:
    """Decode a stored timestamp.

    Files written by earlier versions use a trailing ``Z`` or nanosecond
    fractions; both are accepted. Naive values are read as local time.

    Raises:
        ValueError: If the text is not an ISO-8601 timestamp
    """
    if not isinstance(text, str):
        raise ValueError(f"Timestamp must be a string, got {type(text).__name__}")
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    value = _FRACTION_RE.sub(r"\1", value)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = _localize(parsed)
    return parsed


__all__ = [
    "DATETIME_FORMATS",
    "TIME_FORMATS",
    "decode_timestamp",
    "encode_timestamp",
    "local_now",
    "parse_local_datetime",
]
