"""Tests for datetime formatting utilities."""

from datetime import UTC, date, datetime, time, timedelta, timezone

from soapcall.utils import format_for_soap


class TestFormatForSoap:
    """Tests for format_for_soap function."""

    def test_format_date(self) -> None:
        """Test a date is formatted as YYYY-MM-DD."""
        assert format_for_soap(date(2024, 11, 14)) == '2024-11-14'

    def test_format_naive_datetime(self) -> None:
        """Test a naive datetime is sent without a timezone designator."""
        dt = datetime(2024, 11, 14, 15, 30, 45)
        assert format_for_soap(dt) == '2024-11-14T15:30:45'

    def test_format_aware_datetime_utc(self) -> None:
        """Test a UTC datetime keeps its offset."""
        dt = datetime(2024, 11, 14, 15, 30, 45, tzinfo=UTC)
        assert format_for_soap(dt) == '2024-11-14T15:30:45+00:00'

    def test_format_datetime_with_offset_and_microseconds(self) -> None:
        """Test microseconds and a negative offset are preserved."""
        dt = datetime(
            2024, 11, 14, 15, 30, 45, 123000, tzinfo=timezone(timedelta(hours=-6))
        )
        assert format_for_soap(dt) == '2024-11-14T15:30:45.123000-06:00'

    def test_format_time(self) -> None:
        """Test a time is formatted as hh:mm:ss."""
        assert format_for_soap(time(8, 5)) == '08:05:00'
