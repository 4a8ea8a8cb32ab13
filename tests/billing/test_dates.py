"""Calendar-month rollover used to advance next_payment_date."""

from datetime import datetime, timezone

import pytest

from app.utils.dates import add_one_month


class TestAddOneMonth:

    @pytest.mark.parametrize(
        "start, expected",
        [
            (datetime(2026, 3, 15, 8, 0), datetime(2026, 4, 15, 8, 0)),
            (datetime(2026, 1, 31, 8, 0), datetime(2026, 2, 28, 8, 0)),
            (datetime(2028, 1, 31, 8, 0), datetime(2028, 2, 29, 8, 0)),
            (datetime(2026, 3, 31, 8, 0), datetime(2026, 4, 30, 8, 0)),
            (datetime(2026, 12, 20, 23, 59), datetime(2027, 1, 20, 23, 59)),
        ],
    )
    def test_calendar_month(self, start, expected):
        assert add_one_month(start) == expected

    def test_keeps_timezone(self):
        start = datetime(2026, 5, 1, 0, 0, tzinfo=timezone.utc)
        result = add_one_month(start)
        assert result.tzinfo is timezone.utc
        assert result == datetime(2026, 6, 1, 0, 0, tzinfo=timezone.utc)
