import math
import re
from datetime import datetime, timezone
from typing import Any

from loguru import logger

# moment.js-style patterns used by the detail screen.
LONG_DATETIME = "dddd, MMMM Do YYYY, h:mm:ss a"
SHORT_TIME = "h:mm:ss a"

_PATTERN_TOKENS = re.compile(r"dddd|MMMM|YYYY|Do|mm|ss|h|a")

# Providers emit nanosecond fractions; datetime only keeps microseconds.
_FRACTION = re.compile(r"(\.\d{6})\d+")


_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    return f"{day}{_ORDINAL_SUFFIXES.get(day % 10, 'th')}"


def _render_token(token: str, dt_obj: datetime) -> str:  # noqa: PLR0911
    if token == "dddd":
        return dt_obj.strftime("%A")
    if token == "MMMM":
        return dt_obj.strftime("%B")
    if token == "YYYY":
        return f"{dt_obj.year:04d}"
    if token == "Do":
        return _ordinal(dt_obj.day)
    if token == "mm":
        return f"{dt_obj.minute:02d}"
    if token == "ss":
        return f"{dt_obj.second:02d}"
    if token == "h":
        return str(dt_obj.hour % 12 or 12)
    return "am" if dt_obj.hour < 12 else "pm"


def to_utc_datetime(timestamp: Any) -> datetime:
    """Normalizes a timestamp to a timezone-aware UTC datetime.

    Accepts:
    - int, float: Unix epoch milliseconds.
    - str: ISO 8601, with or without a 'Z' suffix, or a numeric string of
      epoch milliseconds.
    - datetime: naive datetimes are assumed to be UTC.

    Raises:
        ValueError: If the timestamp format is unrecognized or invalid.
    """
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            return timestamp.replace(tzinfo=timezone.utc)
        return timestamp.astimezone(timezone.utc)

    if isinstance(timestamp, str):
        text = timestamp.strip()
        try:
            return to_utc_datetime(float(text))
        except ValueError:
            pass
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(r"\1", text)
        try:
            dt_obj = datetime.fromisoformat(text)
        except ValueError as e:
            logger.debug(f"Could not parse timestamp string '{timestamp}': {e}")
            err_msg = f"Invalid or unrecognized timestamp string format: {timestamp}"
            raise ValueError(err_msg) from e
        return to_utc_datetime(dt_obj)

    if isinstance(timestamp, int | float) and not isinstance(timestamp, bool):
        if not math.isfinite(timestamp):
            err_msg = f"Numeric timestamp '{timestamp}' is not finite."
            raise ValueError(err_msg)
        try:
            return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
        except (OSError, OverflowError, ValueError) as e:
            err_msg = f"Numeric timestamp '{timestamp}' is out of range."
            raise ValueError(err_msg) from e

    err_msg = f"Unsupported timestamp type: {type(timestamp).__name__}"
    raise ValueError(err_msg)


def to_utc_millis(timestamp: Any) -> int:
    """Normalizes a timestamp to Unix epoch milliseconds in UTC.

    Numeric input is already epoch milliseconds and passes through unchanged
    (truncated to an int); parsed strings and datetimes keep their instant,
    only the timezone representation is dropped.

    Raises:
        ValueError: If the timestamp format is unrecognized or invalid.
    """
    if isinstance(timestamp, int) and not isinstance(timestamp, bool):
        return timestamp
    if isinstance(timestamp, float) and math.isfinite(timestamp):
        return int(timestamp)
    dt_obj = to_utc_datetime(timestamp)
    delta = dt_obj - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def format_date_time(timestamp: Any, pattern: str = LONG_DATETIME) -> str:
    """Renders a timestamp in UTC using a moment.js-style pattern.

    Supported tokens: dddd, MMMM, Do, YYYY, h, mm, ss, a. Everything else is
    copied literally.

    Raises:
        ValueError: If the timestamp cannot be parsed.
    """
    dt_obj = to_utc_datetime(timestamp)
    return _PATTERN_TOKENS.sub(lambda m: _render_token(m.group(0), dt_obj), pattern)
