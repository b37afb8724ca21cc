"""
Time conversion helpers: ISO 8601 / RFC 3339 text, Unix seconds, Unix millis.

Numbers above MILLIS_THRESHOLD (10^12) are read as milliseconds, anything
smaller as seconds. The heuristic is ambiguous for millisecond values before
2001 versus second values after year 33658.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .errors import InvalidInput

MILLIS_THRESHOLD = 1_000_000_000_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

NOW_FORMATS = ("iso8601", "rfc3339", "millis", "seconds")

Timestamp = str | int | float


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ms_to_datetime(timestamp_ms: int) -> datetime | None:
    """UTC datetime for a millisecond timestamp, or None if not representable."""
    try:
        return EPOCH + timedelta(milliseconds=timestamp_ms)
    except OverflowError:
        return None


def datetime_to_ms(dt: datetime) -> int:
    return (dt - EPOCH) // timedelta(milliseconds=1)


def format_iso8601(dt: datetime) -> str:
    """`YYYY-MM-DDTHH:MM:SS.mmmZ` with millisecond precision."""
    return f"{dt:%Y-%m-%dT%H:%M:%S}.{dt.microsecond // 1000:03d}Z"


def format_rfc3339(dt: datetime) -> str:
    """RFC 3339 with an explicit offset; fractional digits only when non-zero."""
    if dt.microsecond == 0:
        timespec = "seconds"
    elif dt.microsecond % 1000 == 0:
        timespec = "milliseconds"
    else:
        timespec = "microseconds"
    return dt.isoformat(timespec=timespec)


def format_human(dt: datetime, *, millis: bool = False) -> str:
    if millis:
        return f"{dt:%Y-%m-%d %H:%M:%S}.{dt.microsecond // 1000:03d} UTC"
    return f"{dt:%Y-%m-%d %H:%M:%S} UTC"


def format_age(dt: datetime, now: datetime | None = None) -> str:
    """Coarse "N units ago" description of how old `dt` is."""
    now = now or utc_now()
    total_seconds = int((now - dt).total_seconds())

    if total_seconds <= 0:
        return "in the future"
    if total_seconds < SECONDS_PER_MINUTE:
        return f"{total_seconds} seconds ago"
    if total_seconds < SECONDS_PER_HOUR:
        return f"{total_seconds // SECONDS_PER_MINUTE} minutes ago"
    if total_seconds < SECONDS_PER_DAY:
        return f"{total_seconds // SECONDS_PER_HOUR} hours ago"
    return f"{total_seconds // SECONDS_PER_DAY} days ago"


def coerce_timestamp_arg(raw: str) -> Timestamp:
    """Interpret command-line text as an int, a float, or date text."""
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def _parse_text(text: str) -> datetime:
    try:
        dt = datetime.fromisoformat(text.strip())
    except ValueError as e:
        raise InvalidInput(f"Invalid timestamp format: {e}") from e
    if dt.tzinfo is None:
        raise InvalidInput(f"Invalid timestamp format: '{text}' has no UTC offset (append 'Z' or '+00:00')")
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: Timestamp) -> datetime:
    """
    Convert date text or an epoch number to an aware UTC datetime.

    Args:
        value: RFC 3339 / ISO 8601 text with an offset, or an int/float epoch
            value (milliseconds above MILLIS_THRESHOLD, seconds otherwise)

    Raises:
        InvalidInput: malformed text, out-of-range epoch, or unsupported type
    """
    if isinstance(value, str):
        return _parse_text(value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput("Expected string, int, or float")

    try:
        if value > MILLIS_THRESHOLD:
            return EPOCH + timedelta(milliseconds=value)
        return EPOCH + timedelta(seconds=value)
    except (OverflowError, ValueError) as e:
        raise InvalidInput("Timestamp is out of range") from e


def to_millis(value: Timestamp | None = None) -> int:
    """Millisecond epoch for `value`; None means now."""
    if value is None:
        return datetime_to_ms(utc_now())
    if isinstance(value, str):
        return datetime_to_ms(_parse_text(value))
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput("Expected string, int, or float")

    try:
        if value > MILLIS_THRESHOLD:
            return int(value)
        return int(value * 1000)
    except (OverflowError, ValueError) as e:
        raise InvalidInput("Timestamp is out of range") from e


def now_value(fmt: str | None = None, now: datetime | None = None) -> str | int:
    """Current time rendered in one of NOW_FORMATS (default iso8601)."""
    now = now or utc_now()
    if fmt is None or fmt == "iso8601":
        return format_iso8601(now)
    if fmt == "rfc3339":
        return format_rfc3339(now)
    if fmt == "millis":
        return datetime_to_ms(now)
    if fmt == "seconds":
        return int(now.timestamp())
    raise InvalidInput(f"Unknown format '{fmt}'. Valid formats: {', '.join(NOW_FORMATS)}")


def timestamp_record(dt: datetime) -> dict:
    return {
        "iso8601": format_iso8601(dt),
        "rfc3339": format_rfc3339(dt),
        "unix_seconds": (dt - EPOCH) // timedelta(seconds=1),
        "unix_millis": datetime_to_ms(dt),
        "year": dt.year,
        "month": dt.month,
        "day": dt.day,
        "hour": dt.hour,
        "minute": dt.minute,
        "second": dt.second,
        "nanosecond": dt.microsecond * 1000,
    }
