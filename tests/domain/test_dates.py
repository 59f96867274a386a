"""Tests for front-matter date coercion."""

from datetime import date, datetime, timezone

import pytest

from postctl.domain.dates import as_calendar_date, coerce_date


class TestCoerceDate:
    def test_date_passthrough(self) -> None:
        assert coerce_date(date(2020, 1, 2)) == date(2020, 1, 2)

    def test_datetime_passthrough(self) -> None:
        value = datetime(2020, 1, 2, 3, 4, tzinfo=timezone.utc)
        assert coerce_date(value) is value

    def test_iso_date_string(self) -> None:
        assert coerce_date(" 2020-01-02 ") == date(2020, 1, 2)

    def test_iso_datetime_string(self) -> None:
        assert coerce_date("2020-01-02T03:04:05Z") == datetime(
            2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("value", ["yesterday", "2020-13-01", 20200102, True, None])
    def test_rejects(self, value: object) -> None:
        with pytest.raises(ValueError, match="not an ISO-8601 date"):
            coerce_date(value)


class TestAsCalendarDate:
    def test_strips_time(self) -> None:
        assert as_calendar_date(datetime(2020, 1, 2, 23, 59)) == date(2020, 1, 2)

    def test_date_unchanged(self) -> None:
        assert as_calendar_date(date(2020, 1, 2)) == date(2020, 1, 2)
