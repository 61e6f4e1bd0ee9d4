"""Cumulative reset window check used when ingesting cumulative readings."""

from datetime import datetime, time

from energydash.core.exceptions import ValidationError

_TIME_FORMATS = ("%H:%M:%S", "%H:%M:%S.%f")


def parse_time_of_day(value: str) -> time:
    """Parse an ``HH:MM:SS`` (optionally fractional) time of day.

    Raises:
        ValidationError: If the string is not a valid time of day.

    """
    if isinstance(value, str):
        for fmt in _TIME_FORMATS:
            try:
                return datetime.strptime(value.strip(), fmt).time()
            except ValueError:
                continue
    raise ValidationError(f"Invalid time of day {value!r}, expected HH:MM:SS")


def parse_timestamp(value: datetime | str) -> datetime:
    """Accept a datetime or an ISO 8601 string.

    Raises:
        ValidationError: If the value is not a usable timestamp.

    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid reading timestamp {value!r}")


def is_reset_allowed(
    cumulative_reset: bool,
    reset_start: str,
    reset_end: str,
    start_timestamp: datetime | str,
) -> bool:
    """
    Decide whether a drop in a cumulative reading may be treated as a reset.

    The window is taken on the calendar date of ``start_timestamp`` and is
    inclusive at both ends. A window whose end is before its start (one that
    would cross midnight) never matches.

    Args:
        cumulative_reset: Whether the meter expects resets at all
        reset_start: Time of day the window opens, ``HH:MM:SS``
        reset_end: Time of day the window closes, ``HH:MM:SS``
        start_timestamp: Start time of the reading being checked

    Returns:
        True if the reading starts inside the reset window

    Raises:
        ValidationError: If a time of day or the timestamp can't be parsed

    """
    if not cumulative_reset:
        return False

    timestamp = parse_timestamp(start_timestamp)
    day = timestamp.date()
    window_start = datetime.combine(day, parse_time_of_day(reset_start), tzinfo=timestamp.tzinfo)
    window_end = datetime.combine(day, parse_time_of_day(reset_end), tzinfo=timestamp.tzinfo)

    return window_start <= timestamp <= window_end
