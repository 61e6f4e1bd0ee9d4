"""Tests for the cumulative reset window check."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from energydash.core.exceptions import ValidationError
from energydash.services.cumulative_reset import (
    is_reset_allowed,
    parse_time_of_day,
    parse_timestamp,
)

LATE_START = "23:00:00"
LATE_END = "23:59:59"


class TestResetDisabled:
    """Meters without cumulative reset never allow one."""

    @pytest.mark.parametrize(
        "timestamp",
        [
            datetime(2023, 5, 1, 23, 30),
            datetime(2023, 5, 1, 0, 0),
            datetime(2023, 5, 1, 12, 0),
        ],
    )
    def test_always_false(self, timestamp: datetime) -> None:
        """Test the window is irrelevant when resets are disabled."""
        assert is_reset_allowed(False, "00:00:00", "23:59:59", timestamp) is False

    def test_window_not_parsed(self) -> None:
        """Test malformed window strings are ignored when resets are disabled."""
        assert is_reset_allowed(False, "garbage", "", datetime(2023, 5, 1)) is False


class TestResetWindow:
    """Tests for the same-day inclusive window."""

    def test_inside_window(self) -> None:
        """Test a reading inside the window allows a reset."""
        assert is_reset_allowed(True, LATE_START, LATE_END, datetime(2023, 5, 1, 23, 30))

    def test_outside_window(self) -> None:
        """Test a reading outside the window does not allow a reset."""
        assert not is_reset_allowed(True, LATE_START, LATE_END, datetime(2023, 5, 1, 12, 0))

    def test_start_boundary_inclusive(self) -> None:
        """Test a reading exactly at the window start is inside."""
        assert is_reset_allowed(True, LATE_START, LATE_END, datetime(2023, 5, 1, 23, 0, 0))

    def test_end_boundary_inclusive(self) -> None:
        """Test a reading exactly at the window end is inside."""
        assert is_reset_allowed(True, LATE_START, LATE_END, datetime(2023, 5, 1, 23, 59, 59))

    def test_just_before_start(self) -> None:
        """Test a reading one second before the window is outside."""
        assert not is_reset_allowed(True, LATE_START, LATE_END, datetime(2023, 5, 1, 22, 59, 59))

    def test_just_after_end(self) -> None:
        """Test a reading past the end, still on the same day, is outside."""
        ts = datetime(2023, 5, 1, 23, 59, 59, 500000)
        assert not is_reset_allowed(True, LATE_START, LATE_END, ts)

    def test_fractional_end(self) -> None:
        """Test an end time with microseconds covers the rest of the day."""
        ts = datetime(2023, 5, 1, 23, 59, 59, 500000)
        assert is_reset_allowed(True, "00:00:00", "23:59:59.999999", ts)

    def test_window_uses_reading_date(self) -> None:
        """Test the window is built on whatever day the reading falls on."""
        for day in (datetime(2020, 2, 29, 23, 15), datetime(2031, 12, 31, 23, 15)):
            assert is_reset_allowed(True, LATE_START, LATE_END, day)

    @pytest.mark.parametrize("hour", [0, 1, 12, 23])
    def test_midnight_crossing_window_never_matches(self, hour: int) -> None:
        """Test a window that ends before it starts matches nothing."""
        ts = datetime(2023, 5, 1, hour, 30)
        assert not is_reset_allowed(True, "23:00:00", "01:00:00", ts)

    def test_aware_timestamp_keeps_its_offset(self) -> None:
        """Test the window is taken in the reading's own time zone."""
        plus_two = timezone(timedelta(hours=2))
        ts = datetime(2023, 5, 1, 23, 30, tzinfo=plus_two)
        assert is_reset_allowed(True, LATE_START, LATE_END, ts)
        # Same instant in UTC is 21:30, outside the window
        assert not is_reset_allowed(True, LATE_START, LATE_END, ts.astimezone(UTC))

    def test_iso_string_timestamp(self) -> None:
        """Test ISO 8601 strings are accepted as timestamps."""
        assert is_reset_allowed(True, LATE_START, LATE_END, "2023-05-01T23:30:00")
        assert not is_reset_allowed(True, LATE_START, LATE_END, "2023-05-01T12:00:00")


class TestResetValidation:
    """Malformed input surfaces as ValidationError, never as False."""

    @pytest.mark.parametrize("bad", ["", "25:00:00", "23:60:00", "11pm", "23-00-00"])
    def test_bad_window_start(self, bad: str) -> None:
        """Test an unparseable window start raises."""
        with pytest.raises(ValidationError):
            is_reset_allowed(True, bad, LATE_END, datetime(2023, 5, 1, 23, 30))

    def test_bad_window_end(self) -> None:
        """Test an unparseable window end raises."""
        with pytest.raises(ValidationError):
            is_reset_allowed(True, LATE_START, "not a time", datetime(2023, 5, 1, 23, 30))

    @pytest.mark.parametrize("bad", ["yesterday", "2023-13-01T00:00:00", None, 12345])
    def test_bad_timestamp(self, bad) -> None:
        """Test an invalid reading timestamp raises."""
        with pytest.raises(ValidationError):
            is_reset_allowed(True, LATE_START, LATE_END, bad)

    def test_parse_helpers(self) -> None:
        """Test the parsing helpers return proper values."""
        assert parse_time_of_day("07:05:09").strftime("%H:%M:%S") == "07:05:09"
        assert parse_time_of_day(" 23:59:59.5 ").microsecond == 500000
        assert parse_timestamp("2023-05-01 10:00:00") == datetime(2023, 5, 1, 10, 0)
