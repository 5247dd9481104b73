"""
Tests for projectfy/utils/datetime_utils.py

Timestamp formatting, lenient parsing of stored dates and the overdue
check used by the deadline scan.
"""

import pytest
from datetime import date, datetime
import pytz

from projectfy.utils.datetime_utils import (
    get_local_tz,
    is_overdue,
    local_date,
    now_iso,
    parse_timestamp,
    to_iso,
)


class TestToIso:
    """Tests for to_iso function."""

    def test_utc_with_milliseconds(self):
        dt = datetime(2026, 1, 18, 19, 5, 7, 123456, tzinfo=pytz.UTC)
        assert to_iso(dt) == "2026-01-18T19:05:07.123Z"

    def test_naive_treated_as_utc(self):
        assert to_iso(datetime(2026, 1, 18, 19, 0, 0)) == "2026-01-18T19:00:00.000Z"

    def test_aware_converted_to_utc(self):
        tz = pytz.timezone("America/Sao_Paulo")
        dt = tz.localize(datetime(2026, 1, 18, 16, 0, 0))
        assert to_iso(dt) == "2026-01-18T19:00:00.000Z"

    def test_now_iso_uses_clock(self):
        fixed = datetime(2026, 3, 10, 12, 0, 0, tzinfo=pytz.UTC)
        assert now_iso(lambda: fixed) == "2026-03-10T12:00:00.000Z"


class TestParseTimestamp:
    """Tests for parse_timestamp function."""

    def test_none_and_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_zulu_suffix(self):
        result = parse_timestamp("2026-01-18T19:00:00.000Z")
        assert result == datetime(2026, 1, 18, 19, 0, 0, tzinfo=pytz.UTC)

    def test_explicit_offset(self):
        result = parse_timestamp("2026-01-18T16:00:00-03:00")
        assert result == datetime(2026, 1, 18, 19, 0, 0, tzinfo=pytz.UTC)

    def test_date_only_is_utc_midnight(self):
        result = parse_timestamp("2026-06-30")
        assert result == datetime(2026, 6, 30, 0, 0, 0, tzinfo=pytz.UTC)

    def test_naive_is_local_time(self):
        result = parse_timestamp("2026-01-18T19:00:00")
        expected = get_local_tz().localize(datetime(2026, 1, 18, 19, 0, 0))
        assert result == expected

    def test_garbage_returns_none(self):
        assert parse_timestamp("next tuesday") is None
        assert parse_timestamp("2026-13-45") is None


class TestIsOverdue:
    """Tests for is_overdue function."""

    NOW = datetime(2026, 3, 10, 12, 0, 0, tzinfo=pytz.UTC)

    def test_past_deadline(self):
        assert is_overdue("2026-03-09", self.NOW) is True

    def test_future_deadline(self):
        assert is_overdue("2026-06-30", self.NOW) is False

    def test_equal_is_not_overdue(self):
        assert is_overdue("2026-03-10T12:00:00.000Z", self.NOW) is False

    def test_same_day_date_only_is_overdue_after_midnight(self):
        assert is_overdue("2026-03-10", self.NOW) is True

    @pytest.mark.parametrize("deadline", [None, "", "soon"])
    def test_missing_or_invalid_never_overdue(self, deadline):
        assert is_overdue(deadline, self.NOW) is False


class TestLocalDate:

    def test_converts_to_local_day(self):
        # 01:30 UTC is still the previous evening in the configured zone
        dt = datetime(2026, 3, 11, 1, 30, 0, tzinfo=pytz.UTC)
        expected = dt.astimezone(get_local_tz()).date()
        assert local_date(dt) == expected
        assert isinstance(local_date(dt), date)
