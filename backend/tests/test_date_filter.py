from datetime import UTC, date, datetime

import pytest

from testdesk.core.errors import UnprocessableError
from testdesk.utils.date_filter import date_window

NOW = datetime(2024, 3, 15, 10, 30, tzinfo=UTC)


def test_all_is_unbounded() -> None:
    assert date_window('All', now=NOW) == (None, None)


def test_day_windows() -> None:
    assert date_window('Today', now=NOW) == (
        datetime(2024, 3, 15, tzinfo=UTC),
        datetime(2024, 3, 16, tzinfo=UTC),
    )
    assert date_window('Yesterday', now=NOW) == (
        datetime(2024, 3, 14, tzinfo=UTC),
        datetime(2024, 3, 15, tzinfo=UTC),
    )
    assert date_window('MonthTillDate', now=NOW) == (datetime(2024, 3, 1, tzinfo=UTC), None)


def test_date_range_includes_the_end_day() -> None:
    lower, upper = date_window('DateRange', date(2024, 2, 28), date(2024, 2, 29), now=NOW)
    assert lower == datetime(2024, 2, 28, tzinfo=UTC)
    assert upper == datetime(2024, 3, 1, tzinfo=UTC)


@pytest.mark.parametrize(
    ('start', 'end'),
    [(None, date(2024, 1, 1)), (date(2024, 1, 2), date(2024, 1, 1))],
)
def test_invalid_date_range(start, end) -> None:
    with pytest.raises(UnprocessableError):
        date_window('DateRange', start, end, now=NOW)


def test_unknown_filter() -> None:
    with pytest.raises(UnprocessableError):
        date_window('LastYear', now=NOW)
