"""
Unit Tests for Time Utilities

Run with:
    pytest tests/unit/test_time.py -v
"""

from datetime import datetime, timezone

import pytest

from core.utils.time import to_utc_datetime, utc_now


class TestToUtcDatetime:
    """Tests for to_utc_datetime"""

    def test_seconds(self):
        assert to_utc_datetime(1704110400) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_milliseconds(self):
        assert to_utc_datetime(1704110400000) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_float_seconds(self):
        assert to_utc_datetime(1704110400.5).microsecond == 500000

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            to_utc_datetime(-1)

    @pytest.mark.parametrize("value", ["1704110400", None, True])
    def test_non_numbers_rejected(self, value):
        with pytest.raises(ValueError):
            to_utc_datetime(value)


def test_utc_now_is_timezone_aware():
    assert utc_now().tzinfo == timezone.utc
